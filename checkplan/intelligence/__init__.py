"""Checklist inference and planning.

Scope records and answers go in; a context, an area x trade matrix and an
ordered list of planned checklists come out.
"""

from checkplan.intelligence.area_trade import build_area_trade_matrix
from checkplan.intelligence.catalog import (
    DEFAULT_CATALOG,
    ChecklistCatalog,
    find_area_trade_templates,
    get_area_trade_checklist_items,
    get_area_trade_questions,
    load_catalog,
)
from checkplan.intelligence.context import build_context
from checkplan.intelligence.insights import get_insight_bullets, get_risk_label
from checkplan.intelligence.planner import get_recommended_missing, plan_checklists

__all__ = [
    "DEFAULT_CATALOG",
    "ChecklistCatalog",
    "build_area_trade_matrix",
    "build_context",
    "find_area_trade_templates",
    "get_area_trade_checklist_items",
    "get_area_trade_questions",
    "get_insight_bullets",
    "get_recommended_missing",
    "get_risk_label",
    "load_catalog",
    "plan_checklists",
]
