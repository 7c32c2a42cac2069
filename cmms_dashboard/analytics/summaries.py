"""Headline metrics for the maintenance dashboard."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Mapping

import pandas as pd

from ..numeric import round_half_up
from .alerts import as_evaluation_instant
from .preparation import (
    COMPLETED,
    IN_PROGRESS,
    SCHEDULED,
    Records,
    prepare_equipment_dataframe,
    prepare_work_order_dataframe,
)

RECENT_WORK_ORDER_LIMIT = 3


@dataclass(slots=True)
class DashboardSummary:
    """Lightweight container for the headline cards."""

    total_work_orders: int
    in_progress_count: int
    scheduled_count: int
    completed_today: int
    availability: float
    report_date: pd.Timestamp


def _status_mask(df: pd.DataFrame, code: str) -> pd.Series:
    return df["status"].eq(code).fillna(False).astype(bool)


def build_dashboard_summary(
    work_orders: Records,
    equipments: Records,
    *,
    now: str | datetime | pd.Timestamp,
) -> DashboardSummary:
    """
    Generate the headline counters from the work-order and equipment snapshots.

    ``availability`` is the share of equipment not stopped by an in-progress
    order flagged ``machine_down``, as a percentage with two decimals. With no
    equipment registered it is ``0.0``.
    """
    orders = prepare_work_order_dataframe(work_orders)
    equipment = prepare_equipment_dataframe(equipments)
    instant = as_evaluation_instant(now)

    in_progress = _status_mask(orders, IN_PROGRESS)
    completed = _status_mask(orders, COMPLETED)
    completed_today = completed & (orders["completed_at"].dt.normalize() == instant.normalize())

    machines_down = int((in_progress & orders["machine_down"]).sum())
    equipment_count = len(equipment)
    availability = 0.0
    if equipment_count:
        availability = round_half_up((equipment_count - machines_down) / equipment_count * 100, 2)

    return DashboardSummary(
        total_work_orders=len(orders),
        in_progress_count=int(in_progress.sum()),
        scheduled_count=int(_status_mask(orders, SCHEDULED).sum()),
        completed_today=int(completed_today.sum()),
        availability=float(availability),
        report_date=instant.normalize(),
    )


def recent_work_orders(work_orders: Records, *, limit: int = RECENT_WORK_ORDER_LIMIT) -> List[Dict[str, object]]:
    """Return the newest ``limit`` orders (by ``created_at``) in the card format."""
    orders = prepare_work_order_dataframe(work_orders)
    newest = orders.sort_values("created_at", ascending=False, kind="stable", na_position="last").head(limit)

    rows: List[Dict[str, object]] = []
    for _, order in newest.iterrows():
        equipment = order["equipment_name"]
        rows.append(
            {
                "id": order["id"],
                "code": order["code"],
                "equipment": equipment if isinstance(equipment, str) and equipment else "N/A",
                "type": order["type"],
                "status": order["status"],
                "priority": order["priority"],
            }
        )
    return rows


def summary_to_frame(summary: DashboardSummary) -> pd.DataFrame:
    """Convert the headline counters into a two-column table for exports."""
    rows = [
        ("Total de OS", f"{summary.total_work_orders:,}"),
        ("Em andamento", f"{summary.in_progress_count:,}"),
        ("Programadas", f"{summary.scheduled_count:,}"),
        ("Finalizadas hoje", f"{summary.completed_today:,}"),
        ("Disponibilidade (%)", f"{summary.availability:.2f}"),
        ("Relatório gerado", summary.report_date.strftime("%Y-%m-%d")),
    ]
    return pd.DataFrame(rows, columns=["Métrica", "Valor"])


def _as_stock_number(value: object) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(number) else number


def stock_status(part: Mapping[str, object]) -> str:
    quantity = _as_stock_number(part.get("stock_quantity"))
    minimum = _as_stock_number(part.get("minimum_stock"))
    if quantity == 0:
        return "Sem Estoque"
    if quantity <= minimum:
        return "Estoque Baixo"
    return "Em Estoque"
