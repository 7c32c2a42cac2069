"""Monthly reliability (MTBF / MTTR) and cost series for the dashboard charts."""

from __future__ import annotations

from typing import Iterator

import pandas as pd

from ..numeric import round_half_up
from ..settings import DEFAULT_SETTINGS, KPISettings
from .preparation import CORRECTIVE, PREVENTIVE, Records, prepare_work_order_dataframe

RELIABILITY_COLUMNS = ["month", "reliability_hours", "mean_repair_hours"]
COST_COLUMNS = ["month", "preventive_cost", "corrective_cost"]


def iter_month_buckets(prepared: pd.DataFrame, labels: tuple[str, ...]) -> Iterator[tuple[str, pd.DataFrame]]:
    """
    Yield ``(label, orders)`` for each fixed month bucket.

    Bucket ``i`` holds the orders whose ``created_at`` falls in calendar month ``i``
    (0 = January) of any year. Years are not distinguished, so January 2023 and
    January 2024 share a bucket. Orders without a creation date, or created after
    the last labelled month, belong to no bucket.
    """
    months = prepared["created_month"]
    for index, label in enumerate(labels):
        mask = months.eq(index).fillna(False).astype(bool)
        yield label, prepared[mask]


def _type_mask(frame: pd.DataFrame, code: str) -> pd.Series:
    return frame["type"].eq(code).fillna(False).astype(bool)


def build_reliability_series(work_orders: Records, settings: KPISettings = DEFAULT_SETTINGS) -> pd.DataFrame:
    """
    Return one row per month bucket with MTBF-style and MTTR-style figures.

    ``reliability_hours`` is the period length (30 days) divided by the number of
    corrective orders in the bucket, or ``settings.default_reliability_hours`` when
    there were none. ``mean_repair_hours`` averages the start-to-completion time of
    those corrective orders; an order lacking either timestamp counts as
    ``settings.default_repair_hours``.
    """
    prepared = prepare_work_order_dataframe(work_orders)

    rows: list[dict[str, object]] = []
    for label, bucket in iter_month_buckets(prepared, settings.month_labels):
        corrective = bucket[_type_mask(bucket, CORRECTIVE)]
        failures = len(corrective)
        if failures:
            durations = corrective["repair_hours"].fillna(settings.default_repair_hours)
            mean_repair = float(durations.sum()) / failures
            reliability = settings.period_hours / failures
        else:
            mean_repair = settings.default_repair_hours
            reliability = settings.default_reliability_hours

        rows.append(
            {
                "month": label,
                "reliability_hours": round_half_up(reliability),
                "mean_repair_hours": round_half_up(mean_repair, 1),
            }
        )

    return pd.DataFrame(rows, columns=RELIABILITY_COLUMNS)


def build_cost_series(work_orders: Records, settings: KPISettings = DEFAULT_SETTINGS) -> pd.DataFrame:
    """Estimate preventive vs corrective spend per month bucket from order counts."""
    prepared = prepare_work_order_dataframe(work_orders)

    rows: list[dict[str, object]] = []
    for label, bucket in iter_month_buckets(prepared, settings.month_labels):
        preventive = int(_type_mask(bucket, PREVENTIVE).sum())
        corrective = int(_type_mask(bucket, CORRECTIVE).sum())
        rows.append(
            {
                "month": label,
                "preventive_cost": preventive * settings.preventive_unit_cost,
                "corrective_cost": corrective * settings.corrective_unit_cost,
            }
        )

    return pd.DataFrame(rows, columns=COST_COLUMNS)


def series_to_records(series: pd.DataFrame) -> list[dict[str, object]]:
    """Plain ``dict`` rows for hand-off to a charting layer."""
    return series.to_dict(orient="records")
