from __future__ import annotations

import pandas as pd

from cmms_dashboard.analytics.preparation import (
    CORRECTIVE,
    IN_PROGRESS,
    WORK_ORDER_COLUMNS,
    prepare_parts_dataframe,
    prepare_work_order_dataframe,
    select_low_stock_parts,
)


def _sample_orders() -> list[dict]:
    return [
        {
            "id": "1",
            "code": "OS-1001",
            "type": "corrective",
            "status": "in-progress",
            "priority": "High",
            "scheduled_date": "2024-03-14T08:00:00+00:00",
            "started_at": "2024-03-15T10:00:00-03:00",
            "completed_at": None,
            "machine_down": "sim",
            "created_at": "2024-03-10T09:30:00+00:00",
            "equipments": {"name": "Prensa hidráulica", "code": "EQ-01"},
        },
        {
            "id": "2",
            "code": "OS-1002",
            "type": "preventiva",
            "status": "finalizada",
            "scheduled_date": "2024-01-02",
            "started_at": "2024-01-02T08:00:00Z",
            "completed_at": "2024-01-02T11:30:00Z",
            "machine_down": False,
            "created_at": "not a date",
        },
    ]


def test_prepare_work_order_dataframe_normalises_codes_and_dates():
    prepared = prepare_work_order_dataframe(_sample_orders())

    assert set(WORK_ORDER_COLUMNS).issubset(prepared.columns)
    assert {"created_month", "repair_hours"}.issubset(prepared.columns)

    first = prepared.iloc[0]
    assert first["type"] == CORRECTIVE
    assert first["status"] == IN_PROGRESS
    assert first["priority"] == "alta"
    assert first["started_at"] == pd.Timestamp("2024-03-15 13:00:00")
    assert first["machine_down"]
    assert first["equipment_name"] == "Prensa hidráulica"
    assert first["created_month"] == 2
    assert pd.isna(first["repair_hours"])

    second = prepared.iloc[1]
    assert not second["machine_down"]
    assert second["repair_hours"] == 3.5
    assert pd.isna(second["created_at"])
    assert pd.isna(second["created_month"])


def test_prepare_work_order_dataframe_accepts_portuguese_headers():
    raw = pd.DataFrame(
        [
            {
                "Código": "OS-7",
                "Tipo": "Corretiva",
                "Status": "Programada",
                "Data Programada": "2024-02-01",
                "Máquina Parada": "Não",
            }
        ]
    )
    prepared = prepare_work_order_dataframe(raw)
    row = prepared.iloc[0]
    assert row["code"] == "OS-7"
    assert row["type"] == "corretiva"
    assert row["status"] == "programada"
    assert row["scheduled_date"] == pd.Timestamp("2024-02-01")
    assert not row["machine_down"]


def test_prepare_work_order_dataframe_on_empty_input_keeps_schema():
    prepared = prepare_work_order_dataframe([])
    assert prepared.empty
    assert set(WORK_ORDER_COLUMNS).issubset(prepared.columns)


def test_prepare_is_stable_when_applied_twice():
    once = prepare_work_order_dataframe(_sample_orders())
    twice = prepare_work_order_dataframe(once)
    pd.testing.assert_frame_equal(once, twice)


def test_select_low_stock_parts_keeps_order_and_includes_boundary():
    parts = [
        {"name": "Rolamento 6205", "stock_quantity": 2, "minimum_stock": 5},
        {"name": "Correia A42", "stock_quantity": 10, "minimum_stock": 3},
        {"name": "Filtro de óleo", "stock_quantity": 4, "minimum_stock": 4},
        {"name": "Graxa", "stock_quantity": None, "minimum_stock": None},
    ]
    low = select_low_stock_parts(parts)
    assert low["name"].tolist() == ["Rolamento 6205", "Filtro de óleo", "Graxa"]


def test_prepare_parts_dataframe_coerces_stock_columns():
    prepared = prepare_parts_dataframe(pd.DataFrame([{"Nome": "Selo", "Quantidade": "7", "Estoque Mínimo": "x"}]))
    row = prepared.iloc[0]
    assert row["name"] == "Selo"
    assert row["stock_quantity"] == 7
    assert row["minimum_stock"] == 0
