"""Estimate scope ingestion for checkplan.

Reads scope records either as a JSON/YAML document or as a flat CSV/XLSX
export with one row per cost item.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from checkplan.ingestion.files import (
    TABULAR_SUFFIXES,
    check_file,
    check_row_count,
    read_document,
    unwrap_list,
)
from checkplan.models import CostItem, ScopeRecord

logger = logging.getLogger(__name__)

COST_ITEM_COLUMNS = (
    "cost_code_id",
    "cost_code_category",
    "cost_code_code",
    "cost_code_name",
    "area_label",
    "group_label",
)


def load_scope_records(file_path: Path) -> list[ScopeRecord]:
    """Load scope records from JSON, YAML, CSV or XLSX.

    Document formats hold a list of records, or a mapping with a
    `scope_records` list. Tabular exports need a `scope_id` column and
    optionally `scope_title`, `cost_item_id` and the cost item columns;
    rows are grouped into records by `scope_id` in first-seen order.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid
        pydantic.ValidationError: If a record is malformed
    """
    check_file(file_path, "Scope")

    if file_path.suffix.lower() in TABULAR_SUFFIXES:
        records = _load_tabular(file_path)
    else:
        data = unwrap_list(read_document(file_path), "scope_records", file_path)
        records = [ScopeRecord.model_validate(entry) for entry in data]

    logger.info("Loaded %d scope records from %s", len(records), file_path)
    return records


def _load_tabular(file_path: Path) -> list[ScopeRecord]:
    if file_path.suffix.lower() == ".csv":
        df = pd.read_csv(file_path, dtype=str)
    else:
        df = pd.read_excel(file_path, dtype=str)

    check_row_count(len(df))

    if "scope_id" not in df.columns:
        raise ValueError("Missing required columns: {'scope_id'}")

    titles: dict[str, str | None] = {}
    items: dict[str, list[CostItem]] = {}

    for idx, row in df.iterrows():
        scope_id = _get_str(row, "scope_id")
        if scope_id is None:
            raise ValueError(f"Row {idx}: Missing scope_id")

        if scope_id not in items:
            titles[scope_id] = _get_str(row, "scope_title")
            items[scope_id] = []

        fields = {col: _get_str(row, col) for col in COST_ITEM_COLUMNS}
        if not any(fields.values()):
            # A scope row with no cost item data
            continue

        item_id = _get_str(row, ["cost_item_id", "id"]) or f"{scope_id}-{len(items[scope_id]) + 1}"
        items[scope_id].append(CostItem(id=item_id, **fields))

    return [
        ScopeRecord(id=scope_id, title=titles[scope_id], cost_items=cost_items)
        for scope_id, cost_items in items.items()
    ]


def _get_str(row: pd.Series, col_name: str | list[str]) -> str | None:
    """Get string value from row, trying multiple column names."""
    if isinstance(col_name, str):
        col_name = [col_name]

    for col in col_name:
        if col in row and pd.notna(row[col]):
            value = str(row[col]).strip()
            if value:
                return value

    return None
