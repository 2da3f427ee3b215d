"""Area x trade checklist catalog and matcher.

The catalog is immutable: a tuple of frozen templates. The built-in catalog
(DEFAULT_CATALOG) is created once at import; every lookup also accepts an
explicit catalog so callers can substitute their own without touching module
state. A replacement catalog can be loaded from YAML with load_catalog().
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from checkplan.intelligence.templates import AREA_TRADE_TEMPLATES
from checkplan.models import (
    AreaTradeTemplate,
    AreaType,
    CatalogChecklistItem,
    CatalogQuestion,
    ProjectType,
    TradeType,
)

logger = logging.getLogger(__name__)

CATALOG_PHASE_ORDER = ("precon", "rough", "finish", "punch")


class CatalogError(Exception):
    """Catalog definition is invalid or missing."""

    pass


@dataclass(frozen=True)
class ChecklistCatalog:
    """Ordered, read-only collection of area/trade templates."""

    templates: tuple[AreaTradeTemplate, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for template in self.templates:
            if template.id in seen:
                raise CatalogError(f"Duplicate catalog template id: {template.id}")
            seen.add(template.id)

    def __iter__(self) -> Iterator[AreaTradeTemplate]:
        return iter(self.templates)

    def __len__(self) -> int:
        return len(self.templates)

    def get(self, template_id: str) -> AreaTradeTemplate | None:
        return next((t for t in self.templates if t.id == template_id), None)


def build_catalog(entries: Iterable[dict[str, Any]]) -> ChecklistCatalog:
    """Validate raw template dicts into a catalog.

    Raises:
        CatalogError: If an entry is malformed or ids repeat
    """
    templates = []
    for idx, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise CatalogError(f"Catalog entry {idx} is not a mapping")
        try:
            templates.append(AreaTradeTemplate.model_validate(entry))
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog entry {idx} ({entry.get('id', '?')}): {e}") from e
    return ChecklistCatalog(templates=tuple(templates))


def load_catalog(path: Path) -> ChecklistCatalog:
    """Load a catalog from YAML.

    The file holds either a list of templates or a mapping with a `templates`
    list, using the same field names as the built-in catalog.

    Raises:
        CatalogError: If the file is missing or unreadable, not valid YAML,
            or malformed
    """
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except UnicodeDecodeError as e:
        raise CatalogError(f"Catalog file is not valid UTF-8: {path}") from e
    except OSError as e:
        raise CatalogError(f"Cannot read catalog file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Invalid YAML in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("templates")
    if not isinstance(data, list):
        raise CatalogError(f"Expected a list of catalog templates in {path}")

    catalog = build_catalog(data)
    logger.info("Loaded %d catalog templates from %s", len(catalog), path)
    return catalog


DEFAULT_CATALOG = build_catalog(AREA_TRADE_TEMPLATES)


def _coerce_trades(trades: Iterable[TradeType | str]) -> set[TradeType]:
    coerced: set[TradeType] = set()
    for trade in trades:
        try:
            coerced.add(TradeType(trade))
        except ValueError:
            continue
    return coerced


def _coerce_area_type(area_type: AreaType | str) -> AreaType | None:
    try:
        return AreaType(area_type)
    except ValueError:
        return None


def _coerce_project_type(project_type: ProjectType | str | None) -> ProjectType | None:
    if project_type is None:
        return None
    try:
        return ProjectType(project_type)
    except ValueError:
        return None


def find_area_trade_templates(
    area_type: AreaType | str,
    trades: Sequence[TradeType | str],
    project_type: ProjectType | str | None = None,
    catalog: ChecklistCatalog | None = None,
) -> list[AreaTradeTemplate]:
    """Find catalog templates for an area type and set of trades.

    A template matches when it covers the area type, shares at least one
    trade with the query and, if it restricts project types and a project
    type is given, lists that project type.

    Returns:
        Matching templates in catalog declaration order
    """
    if catalog is None:
        catalog = DEFAULT_CATALOG
    area = _coerce_area_type(area_type)
    if area is None:
        return []
    wanted_trades = _coerce_trades(trades)
    ptype = _coerce_project_type(project_type)

    matches = []
    for template in catalog:
        if area not in template.area_types:
            continue
        if not any(t in wanted_trades for t in template.trades):
            continue
        if template.project_types and project_type:
            if ptype not in template.project_types:
                continue
        matches.append(template)
    return matches


def get_area_trade_questions(
    area_type: AreaType | str,
    trades: Sequence[TradeType | str],
    project_type: ProjectType | str | None = None,
    catalog: ChecklistCatalog | None = None,
) -> list[CatalogQuestion]:
    """Questions from all matching templates, deduplicated by code."""
    questions: list[CatalogQuestion] = []
    seen_codes: set[str] = set()
    for template in find_area_trade_templates(area_type, trades, project_type, catalog):
        for question in template.questions:
            if question.code not in seen_codes:
                seen_codes.add(question.code)
                questions.append(question)
    return questions


def get_area_trade_checklist_items(
    area_type: AreaType | str,
    trades: Sequence[TradeType | str],
    project_type: ProjectType | str | None = None,
    catalog: ChecklistCatalog | None = None,
) -> list[CatalogChecklistItem]:
    """Checklist items from all matching templates.

    Deduplicated by item code (first occurrence wins), then stably sorted by
    phase: precon < rough < finish < punch.
    """
    items: list[CatalogChecklistItem] = []
    seen_codes: set[str] = set()
    for template in find_area_trade_templates(area_type, trades, project_type, catalog):
        for item in template.checklist_items:
            if item.code not in seen_codes:
                seen_codes.add(item.code)
                items.append(item)

    items.sort(key=lambda item: CATALOG_PHASE_ORDER.index(item.phase))
    return items
