"""Checklist template ingestion."""

from __future__ import annotations

import logging
from pathlib import Path

from checkplan.ingestion.files import check_file, read_document, unwrap_list
from checkplan.models import ChecklistTemplate, ExistingChecklist

logger = logging.getLogger(__name__)


def load_templates(file_path: Path) -> list[ChecklistTemplate]:
    """Load checklist templates from a JSON/YAML list (or `{templates: [...]}`).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file does not parse
        pydantic.ValidationError: If a template is malformed
    """
    check_file(file_path, "Templates")
    data = unwrap_list(read_document(file_path), "templates", file_path)
    templates = [ChecklistTemplate.model_validate(entry) for entry in data]
    logger.info("Loaded %d checklist templates from %s", len(templates), file_path)
    return templates


def load_existing_checklists(file_path: Path) -> list[ExistingChecklist]:
    """Load a project's existing checklists (`title`, optional `phase`).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file does not parse
        pydantic.ValidationError: If an entry is malformed
    """
    check_file(file_path, "Checklists")
    data = unwrap_list(read_document(file_path), "checklists", file_path)
    return [ExistingChecklist.model_validate(entry) for entry in data]
