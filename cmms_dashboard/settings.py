"""Tunable constants for the maintenance KPI computations."""

from __future__ import annotations

from dataclasses import dataclass, field

import pandas as pd

MONTH_LABELS = ("Jan", "Fev", "Mar", "Abr", "Mai", "Jun")

DEFAULT_REPAIR_HOURS = 4.0
PERIOD_HOURS = 30 * 24
DEFAULT_RELIABILITY_HOURS = 720

PREVENTIVE_UNIT_COST = 2500
CORRECTIVE_UNIT_COST = 4500

RECENT_COMPLETION_WINDOW = pd.Timedelta(days=1)
MAX_ALERTS = 3


@dataclass(frozen=True, slots=True)
class KPISettings:
    """Bundle of the constants used by the reliability, cost and alert builders."""

    month_labels: tuple[str, ...] = MONTH_LABELS
    default_repair_hours: float = DEFAULT_REPAIR_HOURS
    period_hours: float = PERIOD_HOURS
    default_reliability_hours: float = DEFAULT_RELIABILITY_HOURS
    preventive_unit_cost: int = PREVENTIVE_UNIT_COST
    corrective_unit_cost: int = CORRECTIVE_UNIT_COST
    recent_completion_window: pd.Timedelta = field(default=RECENT_COMPLETION_WINDOW)
    max_alerts: int = MAX_ALERTS


DEFAULT_SETTINGS = KPISettings()
