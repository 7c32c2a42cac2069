"""Analytics helpers for the maintenance dashboard."""

from .preparation import (
    prepare_work_order_dataframe,
    prepare_parts_dataframe,
    prepare_equipment_dataframe,
    select_low_stock_parts,
)
from .kpis import build_reliability_series, build_cost_series, series_to_records
from .alerts import Alert, generate_alerts
from .summaries import DashboardSummary, build_dashboard_summary, recent_work_orders, summary_to_frame, stock_status
from .dashboard import DashboardSnapshot, compute_dashboard
from .visuals import build_reliability_chart, build_cost_chart

__all__ = [
    "prepare_work_order_dataframe",
    "prepare_parts_dataframe",
    "prepare_equipment_dataframe",
    "select_low_stock_parts",
    "build_reliability_series",
    "build_cost_series",
    "series_to_records",
    "Alert",
    "generate_alerts",
    "DashboardSummary",
    "build_dashboard_summary",
    "recent_work_orders",
    "summary_to_frame",
    "stock_status",
    "DashboardSnapshot",
    "compute_dashboard",
    "build_reliability_chart",
    "build_cost_chart",
]
