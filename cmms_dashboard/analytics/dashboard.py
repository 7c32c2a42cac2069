"""One-shot computation of everything the dashboard page displays."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

import pandas as pd

from ..settings import DEFAULT_SETTINGS, KPISettings
from .alerts import Alert, as_evaluation_instant, generate_alerts
from .kpis import build_cost_series, build_reliability_series, series_to_records
from .preparation import Records, prepare_work_order_dataframe, select_low_stock_parts
from .summaries import DashboardSummary, build_dashboard_summary, recent_work_orders

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DashboardSnapshot:
    summary: DashboardSummary
    reliability: pd.DataFrame
    costs: pd.DataFrame
    alerts: List[Alert] = field(default_factory=list)
    recent_work_orders: List[Dict[str, object]] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "total_work_orders": self.summary.total_work_orders,
            "in_progress_count": self.summary.in_progress_count,
            "scheduled_count": self.summary.scheduled_count,
            "completed_today": self.summary.completed_today,
            "availability": self.summary.availability,
            "reliability": series_to_records(self.reliability),
            "costs": series_to_records(self.costs),
            "recent_work_orders": list(self.recent_work_orders),
            "alerts": [alert.to_dict() for alert in self.alerts],
        }


def compute_dashboard(
    work_orders: Records,
    parts: Records = None,
    equipments: Records = None,
    *,
    now: str | datetime | pd.Timestamp | None = None,
    settings: KPISettings = DEFAULT_SETTINGS,
) -> DashboardSnapshot:
    """
    Recompute the whole dashboard from the current snapshots.

    Nothing is carried over from earlier calls: when a newer snapshot arrives,
    call this again and discard the previous result. ``parts`` is the full
    inventory; the low-stock subset is selected here. ``now`` defaults to the
    current UTC time.
    """
    instant = as_evaluation_instant(now if now is not None else pd.Timestamp.now(tz="UTC"))
    orders = prepare_work_order_dataframe(work_orders)
    low_stock = select_low_stock_parts(parts)

    snapshot = DashboardSnapshot(
        summary=build_dashboard_summary(orders, equipments, now=instant),
        reliability=build_reliability_series(orders, settings),
        costs=build_cost_series(orders, settings),
        alerts=generate_alerts(orders, low_stock, now=instant, settings=settings),
        recent_work_orders=recent_work_orders(orders),
    )
    logger.debug(
        "Dashboard computed at %s: %d orders, %d low-stock parts, %d alerts",
        instant,
        len(orders),
        len(low_stock),
        len(snapshot.alerts),
    )
    return snapshot
