from __future__ import annotations

import json

import pytest

from cmms_dashboard.data_loader import load_parts, load_snapshot, load_work_orders


def test_load_snapshot_csv_cleans_headers(tmp_path):
    path = tmp_path / "work_orders.csv"
    path.write_text(" code ,type,\nOS-1,corretiva,\nOS-2,preventiva,\n", encoding="utf-8")

    frame = load_work_orders(path)
    assert list(frame.columns) == ["code", "type"]
    assert frame["code"].tolist() == ["OS-1", "OS-2"]


def test_load_snapshot_json_accepts_data_envelope(tmp_path):
    path = tmp_path / "parts.json"
    rows = [{"name": "Selo", "stock_quantity": 1, "minimum_stock": 2, "equipment": {"code": "EQ-1"}}]
    path.write_text(json.dumps({"data": rows}), encoding="utf-8")

    frame = load_parts(path)
    assert len(frame) == 1
    assert "equipment.code" in frame.columns


def test_load_snapshot_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_snapshot(tmp_path / "missing.csv")


def test_load_snapshot_rejects_unknown_format(tmp_path):
    path = tmp_path / "orders.txt"
    path.write_text("code\nOS-1\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_snapshot(path)
