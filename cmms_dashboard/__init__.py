"""Maintenance dashboard analytics package."""

from .data_loader import load_equipments, load_parts, load_snapshot, load_work_orders
from .analytics.preparation import prepare_work_order_dataframe, select_low_stock_parts
from .analytics.dashboard import DashboardSnapshot, compute_dashboard
from .settings import DEFAULT_SETTINGS, KPISettings

__all__ = [
    "load_snapshot",
    "load_work_orders",
    "load_parts",
    "load_equipments",
    "prepare_work_order_dataframe",
    "select_low_stock_parts",
    "DashboardSnapshot",
    "compute_dashboard",
    "KPISettings",
    "DEFAULT_SETTINGS",
]
