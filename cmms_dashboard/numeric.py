"""Numeric helpers shared by the KPI builders and the card layout."""

from __future__ import annotations

import math


def round_half_up(value: float, ndigits: int = 0) -> float | int:
    """Round with .5 always going toward +inf (the dashboard's charting convention).

    ``round`` uses banker's rounding, which would turn 22.5 into 22; the
    dashboard has always displayed 23.
    """
    if ndigits == 0:
        return int(math.floor(value + 0.5))
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor
