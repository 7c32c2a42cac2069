"""Utilities for loading exported maintenance table snapshots."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Mapping

import pandas as pd

logger = logging.getLogger(__name__)

_EMPTY_SENTINELS = {"", "none", "nan", "null", "na"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def load_snapshot(
    path: str | Path,
    *,
    sheet_name: str | int | None = 0,
    **read_kwargs: Mapping[str, object],
) -> pd.DataFrame:
    """
    Read an exported table (work orders, parts, equipments) into a DataFrame.

    Parameters
    ----------
    path:
        Filesystem path to a ``.csv``, ``.json`` or Excel export.
    sheet_name:
        Worksheet to read for Excel exports. Mirrors ``pandas.read_excel``.
    read_kwargs:
        Extra keyword arguments forwarded to the pandas reader.

    Returns
    -------
    pandas.DataFrame

    Raises
    ------
    FileNotFoundError
        If the export path does not exist.
    ValueError
        If the file extension is not a supported export format.
    """

    target = Path(path)
    if not target.exists():
        raise FileNotFoundError(f"Snapshot not found: {target}")

    suffix = target.suffix.lower()
    if suffix == ".csv":
        frame = pd.read_csv(target, **read_kwargs)
    elif suffix == ".json":
        frame = pd.json_normalize(_read_json_records(target, **read_kwargs))
    elif suffix in _EXCEL_SUFFIXES:
        frame = pd.read_excel(target, sheet_name=sheet_name, **read_kwargs)
    else:
        raise ValueError(f"Unsupported snapshot format '{target.suffix}' for {target}")

    cleaned = _clean_snapshot_frame(frame)
    logger.info("Loaded %d rows from %s", len(cleaned), target)
    return cleaned


def load_work_orders(path: str | Path, **kwargs) -> pd.DataFrame:
    return load_snapshot(path, **kwargs)


def load_parts(path: str | Path, **kwargs) -> pd.DataFrame:
    return load_snapshot(path, **kwargs)


def load_equipments(path: str | Path, **kwargs) -> pd.DataFrame:
    return load_snapshot(path, **kwargs)


def _read_json_records(target: Path, **read_kwargs) -> list[dict]:
    """Accept either a bare array of rows or a ``{"data": [...]}`` envelope."""
    read_kwargs.setdefault("encoding", "utf-8")
    with target.open("r", **read_kwargs) as handle:
        raw = json.load(handle)
    if isinstance(raw, Mapping):
        raw = raw.get("data", [])
    if not isinstance(raw, list):
        raise ValueError(f"Expected a list of records in {target}")
    return raw


def _clean_snapshot_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Repair common header issues (whitespace / duplicated / unnamed columns)."""
    if df.empty:
        return df

    df = df.dropna(axis=1, how="all")
    df.columns = _deduplicate_headers([_safe_column_label(col, position=i) for i, col in enumerate(df.columns)])

    col_series = pd.Series(df.columns, dtype="string")
    unnamed_mask = col_series.str.lower().str.startswith("unnamed")
    df = df.loc[:, ~unnamed_mask.values]
    return df.reset_index(drop=True)


def _safe_column_label(value: object, *, position: int) -> str:
    text = str(value).strip()
    if not text or text.lower() in _EMPTY_SENTINELS:
        return f"column_{position+1}"
    return text


def _deduplicate_headers(headers: Iterable[str]) -> list[str]:
    result: list[str] = []
    seen: dict[str, int] = {}
    for header in headers:
        candidate = header or "column"
        count = seen.get(candidate, 0) + 1
        seen[candidate] = count
        if count > 1:
            candidate = f"{candidate}_{count}"
        result.append(candidate)
    return result
