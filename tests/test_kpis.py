from __future__ import annotations

import pandas as pd

from cmms_dashboard.analytics.kpis import build_cost_series, build_reliability_series, series_to_records
from cmms_dashboard.settings import KPISettings


def _order(created_at, type_="corretiva", started_at=None, completed_at=None) -> dict:
    return {
        "code": f"OS-{created_at}",
        "type": type_,
        "status": "finalizada",
        "scheduled_date": created_at,
        "created_at": created_at,
        "started_at": started_at,
        "completed_at": completed_at,
    }


def test_empty_input_yields_six_default_buckets():
    reliability = build_reliability_series([])
    costs = build_cost_series([])

    assert reliability["month"].tolist() == ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun"]
    assert reliability["reliability_hours"].tolist() == [720] * 6
    assert reliability["mean_repair_hours"].tolist() == [4.0] * 6

    assert costs["month"].tolist() == ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun"]
    assert costs["preventive_cost"].tolist() == [0] * 6
    assert costs["corrective_cost"].tolist() == [0] * 6


def test_single_corrective_order_repair_time():
    orders = [_order("2024-01-05T00:00:00", started_at="2024-01-01T00:00:00", completed_at="2024-01-03T00:00:00")]
    jan = build_reliability_series(orders).iloc[0]
    assert jan["mean_repair_hours"] == 48.0
    assert jan["reliability_hours"] == 720


def test_missing_timestamps_contribute_default_repair_hours():
    orders = [
        _order("2024-02-10T00:00:00", started_at="2024-02-10T00:00:00", completed_at="2024-02-10T10:00:00"),
        _order("2024-02-11T00:00:00", started_at="2024-02-11T00:00:00"),
    ]
    feb = build_reliability_series(orders).iloc[1]
    assert feb["mean_repair_hours"] == 7.0
    assert feb["reliability_hours"] == 360


def test_reliability_divides_period_by_corrective_count():
    orders = [_order(f"2024-03-{day:02d}T00:00:00") for day in range(1, 8)]
    orders.append(_order("2024-03-20T00:00:00", type_="preventiva"))
    orders.append(_order("2024-03-21T00:00:00", type_="preditiva"))
    march = build_reliability_series(orders).iloc[2]
    assert march["reliability_hours"] == round(720 / 7)
    assert march["mean_repair_hours"] == 4.0


def test_halves_round_up():
    orders = [_order(f"2024-04-{(i % 28) + 1:02d}T00:00:00") for i in range(32)]
    orders.append(_order("2024-05-01T00:00:00", started_at="2024-05-01T00:00:00", completed_at="2024-05-01T02:15:00"))
    series = build_reliability_series(orders)
    assert series.iloc[3]["reliability_hours"] == 23
    assert series.iloc[4]["mean_repair_hours"] == 2.3


def test_years_share_the_same_month_bucket():
    orders = [_order("2023-01-15T00:00:00"), _order("2024-01-15T00:00:00")]
    jan = build_reliability_series(orders).iloc[0]
    assert jan["reliability_hours"] == 360


def test_orders_outside_labelled_months_are_ignored():
    orders = [_order("2024-07-01T00:00:00"), _order(None), _order("2024-12-31T23:00:00", type_="preventiva")]
    reliability = build_reliability_series(orders)
    costs = build_cost_series(orders)
    assert reliability["reliability_hours"].tolist() == [720] * 6
    assert costs[["preventive_cost", "corrective_cost"]].to_numpy().sum() == 0


def test_cost_series_multiplies_counts_by_unit_costs():
    orders = [
        _order("2024-01-03T00:00:00", type_="preventiva"),
        _order("2024-01-04T00:00:00", type_="preventive"),
        _order("2024-01-05T00:00:00", type_="corretiva"),
        _order("2024-06-05T00:00:00", type_="corrective"),
        _order("2024-06-06T00:00:00", type_="preditiva"),
    ]
    costs = build_cost_series(orders)
    assert costs.iloc[0]["preventive_cost"] == 5000
    assert costs.iloc[0]["corrective_cost"] == 4500
    assert costs.iloc[5]["preventive_cost"] == 0
    assert costs.iloc[5]["corrective_cost"] == 4500


def test_settings_override_constants():
    settings = KPISettings(preventive_unit_cost=100, corrective_unit_cost=300, default_repair_hours=2.0)
    orders = [_order("2024-02-01T00:00:00"), _order("2024-02-02T00:00:00", type_="preventiva")]
    feb_cost = build_cost_series(orders, settings).iloc[1]
    feb_rel = build_reliability_series(orders, settings).iloc[1]
    assert feb_cost["preventive_cost"] == 100
    assert feb_cost["corrective_cost"] == 300
    assert feb_rel["mean_repair_hours"] == 2.0


def test_series_are_identical_across_calls():
    orders = pd.DataFrame(
        [
            _order("2024-01-05T00:00:00", started_at="2024-01-05T01:00:00", completed_at="2024-01-05T04:00:00"),
            _order("2024-03-05T00:00:00", type_="preventiva"),
        ]
    )
    pd.testing.assert_frame_equal(build_reliability_series(orders), build_reliability_series(orders))
    pd.testing.assert_frame_equal(build_cost_series(orders), build_cost_series(orders))


def test_series_to_records_returns_plain_rows():
    records = series_to_records(build_reliability_series([]))
    assert len(records) == 6
    assert records[0] == {"month": "Jan", "reliability_hours": 720, "mean_repair_hours": 4.0}
