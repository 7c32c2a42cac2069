"""Normalisation of work-order, part and equipment snapshots."""

from __future__ import annotations

import re
import unicodedata
from typing import Iterable, Mapping, Union

import numpy as np
import pandas as pd

_NON_ALNUM = re.compile(r"[^0-9a-zA-Z]+")
_MULTI_UNDERSCORE = re.compile(r"_+")

PREVENTIVE = "preventiva"
CORRECTIVE = "corretiva"
PREDICTIVE = "preditiva"

SCHEDULED = "programada"
IN_PROGRESS = "em_andamento"
COMPLETED = "finalizada"
CANCELLED = "cancelada"

WORK_ORDER_COLUMNS = (
    "id",
    "code",
    "type",
    "status",
    "priority",
    "scheduled_date",
    "started_at",
    "completed_at",
    "machine_down",
    "created_at",
    "description",
    "equipment_name",
    "equipment_code",
)
PART_COLUMNS = ("id", "code", "name", "stock_quantity", "minimum_stock", "supplier")
EQUIPMENT_COLUMNS = (
    "id",
    "code",
    "name",
    "position_x",
    "position_y",
    "card_width",
    "card_height",
    "criticality",
)

DATE_COLUMNS = ("scheduled_date", "started_at", "completed_at", "created_at", "updated_at")

COLUMN_ALIASES = {
    "codigo": "code",
    "tipo": "type",
    "prioridade": "priority",
    "data_programada": "scheduled_date",
    "inicio": "started_at",
    "data_inicio": "started_at",
    "conclusao": "completed_at",
    "data_conclusao": "completed_at",
    "maquina_parada": "machine_down",
    "descricao": "description",
    "equipment": "equipment_name",
    "equipamento": "equipment_name",
    "equipments_name": "equipment_name",
    "codigo_equipamento": "equipment_code",
    "equipments_code": "equipment_code",
    "nome": "name",
    "quantidade": "stock_quantity",
    "estoque": "stock_quantity",
    "estoque_minimo": "minimum_stock",
    "fornecedor": "supplier",
    "criticidade": "criticality",
}

TYPE_ALIASES = {
    "preventive": PREVENTIVE,
    "corrective": CORRECTIVE,
    "predictive": PREDICTIVE,
}
STATUS_ALIASES = {
    "scheduled": SCHEDULED,
    "in_progress": IN_PROGRESS,
    "completed": COMPLETED,
    "cancelled": CANCELLED,
    "canceled": CANCELLED,
}
PRIORITY_ALIASES = {
    "low": "baixa",
    "medium": "media",
    "high": "alta",
}

_TRUE_TOKENS = {"true", "1", "yes", "y", "sim", "s", "t"}

Records = Union[pd.DataFrame, Iterable[Mapping[str, object]], None]


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(char for char in decomposed if not unicodedata.combining(char))


def _canonicalise(column: object) -> str:
    """Convert column headers to snake_case ASCII strings."""
    clean = _NON_ALNUM.sub("_", _strip_accents(str(column)).strip().lower())
    clean = _MULTI_UNDERSCORE.sub("_", clean).strip("_")
    return clean


def _build_rename_map(columns: Iterable[object]) -> dict[object, str]:
    rename_map: dict[object, str] = {}
    for column in columns:
        canonical = _canonicalise(column)
        rename_map[column] = COLUMN_ALIASES.get(canonical, canonical)
    return rename_map


def _as_frame(records: Records) -> pd.DataFrame:
    if records is None:
        return pd.DataFrame()
    if isinstance(records, pd.DataFrame):
        return records.copy()
    rows = list(records)
    if not rows:
        return pd.DataFrame()
    # nested joins such as ``equipments: {name, code}`` become ``equipments.name``
    return pd.json_normalize(rows)


def _normalise_frame(records: Records, columns: Iterable[str]) -> pd.DataFrame:
    working = _as_frame(records)
    working = working.rename(columns=_build_rename_map(working.columns))
    working = working.loc[:, ~working.columns.duplicated()].copy()
    for column in columns:
        if column not in working.columns:
            working[column] = pd.Series([None] * len(working), index=working.index, dtype="object")
    return working.reset_index(drop=True)


def _parse_datetime(series: pd.Series) -> pd.Series:
    parsed = pd.to_datetime(series, errors="coerce", utc=True, format="ISO8601")
    if isinstance(parsed.dtype, pd.DatetimeTZDtype):
        parsed = parsed.dt.tz_convert(None)
    return parsed


def _normalise_code(value: object, aliases: Mapping[str, str]) -> object:
    if value is None or value is pd.NA or (isinstance(value, float) and np.isnan(value)):
        return None
    token = _strip_accents(str(value)).strip().lower().replace("-", "_").replace(" ", "_")
    return aliases.get(token, token)


def _coerce_flag(value: object) -> bool:
    if value is None or value is pd.NA or (isinstance(value, float) and np.isnan(value)):
        return False
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_TOKENS
    return bool(value)


def prepare_work_order_dataframe(records: Records) -> pd.DataFrame:
    """
    Return a normalised copy of a work-order snapshot ready for the KPI builders.

    Accepts a DataFrame or an iterable of row mappings. The function:
      * standardises column names (snake_case, Portuguese export headers aliased)
      * guarantees every work-order column exists, missing ones filled with nulls
      * parses timestamp columns to naive UTC datetimes, unparseable values become ``NaT``
      * normalises ``type``/``status``/``priority`` to the stored codes
        (``corrective`` -> ``corretiva``, ``in-progress`` -> ``em_andamento``...)
      * adds ``created_month`` (0-based, nullable) and ``repair_hours``

    Row order is preserved; nothing is dropped.
    """

    working = _normalise_frame(records, WORK_ORDER_COLUMNS)

    for column in DATE_COLUMNS:
        if column in working.columns:
            working[column] = _parse_datetime(working[column])

    working["type"] = working["type"].map(lambda value: _normalise_code(value, TYPE_ALIASES)).astype("object")
    working["status"] = working["status"].map(lambda value: _normalise_code(value, STATUS_ALIASES)).astype("object")
    working["priority"] = (
        working["priority"].map(lambda value: _normalise_code(value, PRIORITY_ALIASES)).astype("object")
    )
    working["machine_down"] = working["machine_down"].map(_coerce_flag).astype(bool)

    working["created_month"] = (working["created_at"].dt.month - 1).astype("Int64")
    working["repair_hours"] = (working["completed_at"] - working["started_at"]).dt.total_seconds() / 3600.0

    return working


def prepare_parts_dataframe(records: Records) -> pd.DataFrame:
    """Normalise a parts snapshot; missing stock figures count as zero."""
    working = _normalise_frame(records, PART_COLUMNS)
    for column in ("stock_quantity", "minimum_stock"):
        working[column] = pd.to_numeric(working[column], errors="coerce").fillna(0)
    return working


def prepare_equipment_dataframe(records: Records) -> pd.DataFrame:
    working = _normalise_frame(records, EQUIPMENT_COLUMNS)
    for column in ("position_x", "position_y", "card_width", "card_height"):
        working[column] = pd.to_numeric(working[column], errors="coerce")
    return working


def select_low_stock_parts(records: Records) -> pd.DataFrame:
    """Return the parts at or below their minimum stock, in snapshot order."""
    parts = prepare_parts_dataframe(records)
    mask = parts["stock_quantity"] <= parts["minimum_stock"]
    return parts[mask].reset_index(drop=True)
