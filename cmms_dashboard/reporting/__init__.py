"""Reporting utilities for work orders and the dashboard KPIs."""

from .exporters import (
    build_work_order_pdf,
    build_work_orders_sheet,
    export_work_orders_excel,
    export_dashboard_excel,
    build_dashboard_pdf,
    work_order_pdf_filename,
    work_orders_excel_filename,
)

__all__ = [
    "build_work_order_pdf",
    "build_work_orders_sheet",
    "export_work_orders_excel",
    "export_dashboard_excel",
    "build_dashboard_pdf",
    "work_order_pdf_filename",
    "work_orders_excel_filename",
]
