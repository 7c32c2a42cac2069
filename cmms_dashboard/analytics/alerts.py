"""Prioritised dashboard alerts (low stock, overdue orders, recent completions)."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import List

import numpy as np
import pandas as pd

from ..settings import DEFAULT_SETTINGS, KPISettings
from .preparation import (
    COMPLETED,
    SCHEDULED,
    Records,
    prepare_parts_dataframe,
    prepare_work_order_dataframe,
)

WARNING = "warning"
INFO = "info"
SUCCESS = "success"


@dataclass(frozen=True, slots=True)
class Alert:
    """Display-ready alert; ``icon`` is the icon key understood by the front end."""

    type: str
    title: str
    description: str
    icon: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def as_evaluation_instant(value: str | datetime | pd.Timestamp) -> pd.Timestamp:
    """Coerce ``value`` to a naive UTC timestamp comparable with prepared frames."""
    stamp = pd.Timestamp(value)
    if stamp.tzinfo is not None:
        stamp = stamp.tz_convert("UTC").tz_localize(None)
    return stamp


def _format_quantity(value: object) -> str:
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return str(int(value))
    return str(value)


def generate_alerts(
    work_orders: Records,
    low_stock_parts: Records,
    *,
    now: str | datetime | pd.Timestamp,
    settings: KPISettings = DEFAULT_SETTINGS,
) -> List[Alert]:
    """
    Build at most ``settings.max_alerts`` alerts, always in the order
    low stock -> overdue -> recently completed.

    ``low_stock_parts`` is expected to be filtered already; the first part in it
    is the one named. The recent-completion alert names the first qualifying
    order in snapshot order, not the one with the latest timestamp.
    """

    orders = prepare_work_order_dataframe(work_orders)
    parts = prepare_parts_dataframe(low_stock_parts)
    instant = as_evaluation_instant(now)

    alerts: List[Alert] = []

    if not parts.empty:
        part = parts.iloc[0]
        alerts.append(
            Alert(
                type=WARNING,
                title="Estoque baixo",
                description=f"Peça: {part['name']} ({_format_quantity(part['stock_quantity'])} unidades)",
                icon="AlertTriangle",
            )
        )

    status = orders["status"]
    overdue = orders[status.eq(SCHEDULED).fillna(False).astype(bool) & (orders["scheduled_date"] < instant)]
    if not overdue.empty:
        alerts.append(
            Alert(
                type=INFO,
                title="Manutenção preventiva vencida",
                description=f"{len(overdue)} ordem(ns) em atraso",
                icon="Activity",
            )
        )

    window_start = instant - settings.recent_completion_window
    recent = orders[status.eq(COMPLETED).fillna(False).astype(bool) & (orders["completed_at"] >= window_start)]
    if not recent.empty:
        latest = recent.iloc[0]
        alerts.append(
            Alert(
                type=SUCCESS,
                title="OS finalizada",
                description=f"{latest['code']}: Manutenção concluída",
                icon="CheckCircle",
            )
        )

    return alerts[: settings.max_alerts]
