"""Smart checklist planner.

Maps a checklist context (plus an optional area x trade matrix) onto an
ordered, deduplicated list of recommended checklists drawn from externally
stored templates and from the built-in area/trade catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from uuid import uuid4

from checkplan.intelligence.area_trade import get_area
from checkplan.intelligence.catalog import ChecklistCatalog, get_area_trade_checklist_items
from checkplan.intelligence.context import coerce_project_type
from checkplan.models import (
    AreaTradeMatrix,
    AreaType,
    CatalogChecklistItem,
    ChecklistContext,
    ChecklistTemplate,
    ExistingChecklist,
    Phase,
    PlannedChecklist,
    ProjectType,
    RiskLevel,
)

logger = logging.getLogger(__name__)

PHASE_ORDER = tuple(phase.value for phase in Phase)
RISK_ORDER = {RiskLevel.HIGH: 0, RiskLevel.MEDIUM: 1, RiskLevel.LOW: 2}

HIGH_RISK_TAGS = frozenset({"waterproofing", "structural", "curbless"})
MEDIUM_RISK_TAGS = frozenset({"electrical", "occupied", "hvac"})
DEFAULT_MEDIUM_RISK_SCORE = 60

PHASE_LABELS = {
    "precon": "Pre-Construction",
    "rough": "Rough-In",
    "finish": "Finish",
    "punch": "Punch",
    "warranty": "Warranty",
}


def temp_id() -> str:
    """Ephemeral id for a planned checklist (valid until the caller commits it)."""
    return f"temp-{uuid4().hex[:9]}"


def determine_risk_level(
    reason_tags: Iterable[str],
    global_risk_score: int,
    medium_risk_score: int = DEFAULT_MEDIUM_RISK_SCORE,
) -> RiskLevel:
    """Classify a checklist from its reason tags and the project risk score."""
    tags = set(reason_tags)
    if tags & HIGH_RISK_TAGS:
        return RiskLevel.HIGH
    if global_risk_score >= medium_risk_score:
        return RiskLevel.MEDIUM
    if tags & MEDIUM_RISK_TAGS:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def find_templates(
    templates: Sequence[ChecklistTemplate],
    project_type: str | None = None,
    phase: str | None = None,
    tags: Sequence[str] | None = None,
    name_contains: str | None = None,
) -> list[ChecklistTemplate]:
    """Filter templates by project type, phase, any-of tags and name substring.

    A template's project type matches when it equals the requested one or is
    "global". Unset criteria are ignored.
    """
    matches = []
    for template in templates:
        if project_type and template.project_type not in (project_type, "global"):
            continue
        if phase and template.phase != phase:
            continue
        if tags and not any(tag in template.tags for tag in tags):
            continue
        if name_contains and name_contains.lower() not in template.name.lower():
            continue
        matches.append(template)
    return matches


def find_templates_by_name(
    templates: Sequence[ChecklistTemplate], fragments: Sequence[str]
) -> list[ChecklistTemplate]:
    """Templates whose name contains any of the fragments (case-insensitive)."""
    lowered = [fragment.lower() for fragment in fragments]
    return [t for t in templates if any(f in t.name.lower() for f in lowered)]


def _phase_index(phase: str) -> int:
    try:
        return PHASE_ORDER.index(phase)
    except ValueError:
        return len(PHASE_ORDER)


def sort_planned(planned: list[PlannedChecklist]) -> list[PlannedChecklist]:
    """Stable sort by phase order, then risk level (high first)."""
    return sorted(planned, key=lambda c: (_phase_index(c.phase), RISK_ORDER[c.risk_level]))


class _PlanBuilder:
    """Accumulates planned checklists, deduplicating by template id or area/phase key."""

    def __init__(self, risk_score: int, medium_risk_score: int):
        self.risk_score = risk_score
        self.medium_risk_score = medium_risk_score
        self.planned: list[PlannedChecklist] = []
        self._template_ids: set[str] = set()
        self._area_phase_keys: set[str] = set()

    def risk_for(self, reason_tags: Sequence[str]) -> RiskLevel:
        return determine_risk_level(reason_tags, self.risk_score, self.medium_risk_score)

    def add_template(
        self,
        template: ChecklistTemplate,
        reason_tags: Sequence[str],
        area_key: str | None = None,
        scope_record_id: str | None = None,
    ) -> None:
        if template.id in self._template_ids:
            return
        self._template_ids.add(template.id)

        self.planned.append(
            PlannedChecklist(
                id=temp_id(),
                phase=template.phase,
                title=template.name,
                template_ids=[template.id],
                area_key=area_key,
                scope_record_id=scope_record_id,
                reason_tags=list(reason_tags),
                risk_level=self.risk_for(reason_tags),
                item_count=len(template.items),
            )
        )

    def add_all(self, templates: Iterable[ChecklistTemplate], reason_tags: Sequence[str], **kwargs) -> None:
        for template in templates:
            self.add_template(template, reason_tags, **kwargs)

    def add_area_phase(
        self,
        area_key: str,
        area_type: AreaType,
        trades: Sequence,
        phase: str,
        items: list[CatalogChecklistItem],
        scope_record_id: str | None,
    ) -> None:
        key = f"{area_key}::{phase}"
        if key in self._area_phase_keys:
            return
        self._area_phase_keys.add(key)

        reason_tags = [area_type.value, *(trade.value for trade in trades)]
        self.planned.append(
            PlannedChecklist(
                id=temp_id(),
                phase=phase,
                title=f"{area_key} - {PHASE_LABELS.get(phase, phase.title())}",
                template_ids=[],
                area_key=area_key,
                scope_record_id=scope_record_id,
                trades=list(trades),
                reason_tags=reason_tags,
                risk_level=self.risk_for(reason_tags),
                item_count=len(items),
                items=list(items),
            )
        )


def _plan_kitchen(plan: _PlanBuilder, context: ChecklistContext, templates: Sequence[ChecklistTemplate]) -> None:
    flags = context.derived_flags
    for phase in ("precon", "rough", "finish"):
        plan.add_all(find_templates(templates, tags=["kitchen"], phase=phase), ["kitchen", phase])

    if flags.has_structural:
        plan.add_all(find_templates(templates, tags=["structural"]), ["structural", "walls"])

    if flags.includes_electrical_heavy:
        plan.add_all(find_templates(templates, tags=["electrical"]), ["electrical", "kitchen"])


def _plan_bath(plan: _PlanBuilder, context: ChecklistContext, templates: Sequence[ChecklistTemplate]) -> None:
    flags = context.derived_flags
    for phase in ("precon", "finish"):
        plan.add_all(find_templates(templates, tags=["bath"], phase=phase), ["bath", phase])

    if flags.has_waterproofing_scope:
        plan.add_all(find_templates(templates, tags=["waterproofing"]), ["waterproofing", "bath"])

    if flags.has_curbless_shower:
        curbless = find_templates(templates, tags=["curbless"])
        if not curbless:
            # No curbless-specific template: reuse waterproofing ones under the curbless reason
            curbless = find_templates(templates, tags=["waterproofing"])
        plan.add_all(curbless, ["curbless", "waterproofing"])

    if flags.has_new_shower_pan or flags.has_curbless_shower:
        plan.add_all(find_templates(templates, tags=["plumbing"], phase="rough"), ["plumbing", "rough"])


def _plan_full_home(plan: _PlanBuilder, context: ChecklistContext, templates: Sequence[ChecklistTemplate]) -> None:
    """Per-area kitchen/bath templates, then whole-house precon, structural and exterior.

    Every detected kitchen and bath area is visited, but template ids are
    deduplicated across the whole plan, so a template lands on the first area
    that asks for it. Later areas of the same type get nothing new unless the
    library holds templates they have not already claimed.
    """
    flags = context.derived_flags

    for area_type, tag in ((AreaType.KITCHEN, "kitchen"), (AreaType.BATH, "bath")):
        for area in context.detected_areas:
            if area.type != area_type:
                continue
            plan.add_all(
                find_templates(templates, tags=[tag]),
                [tag, area.label],
                area_key=area.label,
                scope_record_id=area.scope_record_id,
            )

    plan.add_all(
        find_templates(templates, project_type=ProjectType.FULL_HOME_REMODEL.value, phase="precon"),
        ["full_home", "precon"],
    )

    if flags.has_structural:
        plan.add_all(find_templates(templates, tags=["structural"]), ["structural"])

    if flags.has_exterior_work:
        plan.add_all(find_templates(templates, tags=["exterior"]), ["exterior"])


def _plan_occupied(plan: _PlanBuilder, templates: Sequence[ChecklistTemplate]) -> None:
    occupied = find_templates(templates, tags=["occupied"])
    if not occupied:
        occupied = find_templates_by_name(templates, ["occupied", "daily closeout"])
    plan.add_all(occupied, ["occupied"])


def _plan_final_walkthrough(plan: _PlanBuilder, templates: Sequence[ChecklistTemplate]) -> None:
    walkthrough = find_templates(templates, phase="punch", tags=["final", "walkthrough"])
    if not walkthrough:
        walkthrough = find_templates_by_name(templates, ["walkthrough", "punch"])
    plan.add_all(walkthrough, ["final", "punch"])


def _plan_area_trades(
    plan: _PlanBuilder,
    project_type: ProjectType,
    matrix: AreaTradeMatrix,
    catalog: ChecklistCatalog | None,
) -> None:
    for scope in matrix.area_trade_scopes:
        if not scope.trades:
            continue
        area = get_area(matrix, scope.area_key)
        if area is None:
            continue

        items = get_area_trade_checklist_items(area.type, scope.trades, project_type, catalog)

        by_phase: dict[str, list[CatalogChecklistItem]] = {}
        for item in items:
            by_phase.setdefault(item.phase, []).append(item)

        for phase, phase_items in by_phase.items():
            plan.add_area_phase(
                scope.area_key,
                area.type,
                scope.trades,
                phase,
                phase_items,
                area.scope_record_id,
            )


def plan_checklists(
    project_type: ProjectType | str,
    context: ChecklistContext,
    templates: Sequence[ChecklistTemplate],
    area_trade_matrix: AreaTradeMatrix | None = None,
    catalog: ChecklistCatalog | None = None,
    medium_risk_score: int = DEFAULT_MEDIUM_RISK_SCORE,
) -> list[PlannedChecklist]:
    """Plan checklists for a project.

    Rules are evaluated in order (kitchen, bath, full home, occupied home,
    final walkthrough, area x trade catalog items); each template is planned
    at most once and each area/phase pair at most once.

    Args:
        project_type: Project type (unknown values are treated as "other")
        context: Output of build_context()
        templates: Externally stored checklist templates
        area_trade_matrix: Optional output of build_area_trade_matrix()
        catalog: Area/trade catalog (built-in catalog when None)
        medium_risk_score: Project risk score at which checklists become medium risk

    Returns:
        Planned checklists sorted by phase, then risk level
    """
    ptype = coerce_project_type(project_type)
    flags = context.derived_flags
    plan = _PlanBuilder(context.risk_score, medium_risk_score)

    if ptype is ProjectType.KITCHEN_REMODEL or flags.includes_kitchen:
        _plan_kitchen(plan, context, templates)

    if ptype is ProjectType.BATH_REMODEL or flags.includes_baths:
        _plan_bath(plan, context, templates)

    if ptype is ProjectType.FULL_HOME_REMODEL:
        _plan_full_home(plan, context, templates)

    if flags.is_occupied_during_work:
        _plan_occupied(plan, templates)

    _plan_final_walkthrough(plan, templates)

    if area_trade_matrix is not None:
        _plan_area_trades(plan, ptype, area_trade_matrix, catalog)

    planned = sort_planned(plan.planned)
    logger.debug(
        "Planned %d checklists (project_type=%s, risk_score=%d)",
        len(planned),
        ptype.value,
        context.risk_score,
    )
    return planned


def get_recommended_missing(
    context: ChecklistContext,
    existing_checklists: Sequence[ExistingChecklist],
    templates: Sequence[ChecklistTemplate],
) -> list[PlannedChecklist]:
    """High-risk checklists the project should have but does not.

    Waterproofing scope without any checklist titled "...waterproof..." and
    structural scope without any "...structural..." checklist each recommend
    every template carrying the matching tag.
    """
    flags = context.derived_flags
    missing: list[PlannedChecklist] = []

    checks = (
        (flags.has_waterproofing_scope, "waterproof", "waterproofing"),
        (flags.has_structural, "structural", "structural"),
    )
    for needed, title_fragment, tag in checks:
        if not needed:
            continue
        if any(title_fragment in c.title.lower() for c in existing_checklists):
            continue
        for template in templates:
            if tag not in template.tags:
                continue
            missing.append(
                PlannedChecklist(
                    id=temp_id(),
                    phase=template.phase,
                    title=template.name,
                    template_ids=[template.id],
                    reason_tags=[tag, "recommended"],
                    risk_level=RiskLevel.HIGH,
                    item_count=len(template.items),
                )
            )

    return missing
