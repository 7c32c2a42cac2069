"""Geometry of the free-form equipment card canvas."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Mapping

from .numeric import round_half_up

DEFAULT_CARD_WIDTH = 320
DEFAULT_CARD_HEIGHT = 280
MAX_CARD_WIDTH = 600
MAX_CARD_HEIGHT = 500
MIN_CARD_WIDTH = 280
MIN_CARD_HEIGHT = 200
RESIZE_STEP = 40

INCREASE = "increase"
DECREASE = "decrease"


@dataclass(frozen=True, slots=True)
class CardGeometry:
    x: int = 0
    y: int = 0
    width: int = DEFAULT_CARD_WIDTH
    height: int = DEFAULT_CARD_HEIGHT

    @classmethod
    def from_equipment(cls, record: Mapping[str, object]) -> "CardGeometry":
        """Read the stored card fields; zero or missing values fall back to defaults."""
        return cls(
            x=_stored_int(record.get("position_x"), 0),
            y=_stored_int(record.get("position_y"), 0),
            width=_stored_int(record.get("card_width"), DEFAULT_CARD_WIDTH),
            height=_stored_int(record.get("card_height"), DEFAULT_CARD_HEIGHT),
        )

    def to_record(self) -> dict[str, int]:
        return {
            "position_x": self.x,
            "position_y": self.y,
            "card_width": self.width,
            "card_height": self.height,
        }


def _stored_int(value: object, default: int) -> int:
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or number == 0:
        return default
    return round_half_up(number)


def move_card(card: CardGeometry, dx: float, dy: float) -> CardGeometry:
    """Apply a drag delta; the stored position is always an integer."""
    return replace(card, x=round_half_up(card.x + dx), y=round_half_up(card.y + dy))


def resize_card(card: CardGeometry, direction: str) -> CardGeometry:
    """Grow or shrink the card by one step, within the allowed bounds."""
    if direction == INCREASE:
        width = min(card.width + RESIZE_STEP, MAX_CARD_WIDTH)
        height = min(card.height + RESIZE_STEP, MAX_CARD_HEIGHT)
    elif direction == DECREASE:
        width = max(card.width - RESIZE_STEP, MIN_CARD_WIDTH)
        height = max(card.height - RESIZE_STEP, MIN_CARD_HEIGHT)
    else:
        raise ValueError(f"Unknown resize direction: {direction!r}")
    return replace(card, width=round_half_up(width), height=round_half_up(height))
