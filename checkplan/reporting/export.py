"""Planned checklist export.

JSON keeps the full records (including catalog items); CSV flattens one row
per planned checklist with list fields joined by "; ".
"""

from __future__ import annotations

import csv
import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from checkplan.models import ChecklistContext, PlannedChecklist

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Phase",
    "Title",
    "Risk Level",
    "Item Count",
    "Area",
    "Scope Record",
    "Trades",
    "Reasons",
    "Templates",
    "Enabled",
]

LIST_SEPARATOR = "; "


def plan_to_rows(planned: Sequence[PlannedChecklist]) -> list[list[str]]:
    """Flatten planned checklists into CSV rows (without the header)."""
    rows = []
    for checklist in planned:
        rows.append(
            [
                checklist.phase,
                checklist.title,
                checklist.risk_level.value,
                str(checklist.item_count),
                checklist.area_key or "",
                checklist.scope_record_id or "",
                LIST_SEPARATOR.join(trade.value for trade in checklist.trades or []),
                LIST_SEPARATOR.join(checklist.reason_tags),
                LIST_SEPARATOR.join(checklist.template_ids),
                "yes" if checklist.enabled else "no",
            ]
        )
    return rows


def export_plan_csv(planned: Sequence[PlannedChecklist], output_path: Path) -> None:
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(CSV_HEADERS)
        writer.writerows(plan_to_rows(planned))


def export_plan_json(
    planned: Sequence[PlannedChecklist],
    output_path: Path,
    context: ChecklistContext | None = None,
) -> None:
    """Write the plan (and, when given, the context it came from) as JSON."""
    payload: dict[str, Any] = {
        "planned_checklists": [c.model_dump(mode="json") for c in planned],
    }
    if context is not None:
        payload["context"] = context.model_dump(mode="json")

    with output_path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
        f.write("\n")


def export_plan(
    planned: Sequence[PlannedChecklist],
    output_path: Path,
    context: ChecklistContext | None = None,
) -> None:
    """Export by file suffix (.json or .csv).

    Raises:
        ValueError: If the suffix is unsupported
    """
    suffix = output_path.suffix.lower()
    if suffix == ".json":
        export_plan_json(planned, output_path, context)
    elif suffix == ".csv":
        export_plan_csv(planned, output_path)
    else:
        raise ValueError(f"Unsupported export format: {output_path.suffix}. Use JSON or CSV.")

    logger.info("Exported %d planned checklists to %s", len(planned), output_path)
