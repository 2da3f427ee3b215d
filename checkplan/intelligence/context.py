"""Checklist context builder.

Derives boolean scope signals, detected areas and a risk score from estimate
scope records and Q&A answers. Pure: no I/O, no randomness, no clock.

Every flag is an OR over independent sources (an answer, cost-code text,
scope titles), so adding scope data can only turn a flag on.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from checkplan.models import (
    AnswerSet,
    AreaType,
    ChecklistContext,
    DerivedFlags,
    DetectedArea,
    ProjectType,
    RiskFlags,
    ScopeRecord,
)

logger = logging.getLogger(__name__)

UNNAMED_SECTION = "Unnamed Section"

# Cost-code patterns (matched against cost code name and code)
WALL_REMOVAL_CODES = ("wall removal", "demo wall", "header", "wall demo")
STRUCTURAL_CODES = (
    "beam",
    "header",
    "structural",
    "moment frame",
    "lvl",
    "glulam",
    "post",
    "shear wall",
)
SHOWER_PAN_CODES = ("shower pan", "mud pan", "mortar bed")
CURBLESS_CODES = ("linear drain", "curbless", "barrier free")
STEAM_CODES = ("steam", "steam shower", "steam generator")
WATERPROOFING_CODES = (
    "waterproof",
    "pan",
    "hot mop",
    "sheet membrane",
    "kerdi",
    "redguard",
    "laticrete",
)
TILE_FLOOR_CODES = ("tile floor", "floor tile", "porcelain", "ceramic floor")
ENGINEERED_FLOOR_CODES = ("engineered", "lvp", "vinyl plank", "laminate")
CUSTOM_CABINET_CODES = ("custom cabinet", "semi-custom", "cabinet install")
ELECTRICAL_CODES = ("elec", "lighting", "panel", "circuit", "wire", "outlet", "switch")
HVAC_CODES = ("hvac", "furnace", "ac", "duct", "mini split", "heat pump")

# Scope title patterns
EXTERIOR_TITLES = ("exterior", "deck", "balcony", "porch", "patio", "siding", "stucco", "roof")
WET_AREA_TITLES = ("bath", "shower", "powder")

ELECTRICAL_HEAVY_MIN_ITEMS = 3
CURBLESS_WATERPROOFING_LEVEL = "curbless / linear drain"

# Ordered: first area type with a matching keyword wins
AREA_KEYWORDS: tuple[tuple[AreaType, tuple[str, ...]], ...] = (
    (AreaType.KITCHEN, ("kitchen",)),
    (AreaType.BATH, ("bath", "shower", "powder", "toilet")),
    (AreaType.BEDROOM, ("bedroom", "master")),
    (AreaType.LIVING, ("living", "family", "great")),
    (AreaType.HALL, ("hall", "entry", "foyer")),
    (AreaType.EXTERIOR, ("exterior", "deck", "balcony", "porch", "patio")),
)

# Additive risk weights
BASE_RISK_SCORE = 10
RISK_WEIGHTS = {
    "has_structural": 20,
    "has_waterproofing_scope": 20,
    "is_occupied_during_work": 15,
    "includes_electrical_heavy": 10,
    "has_curbless_shower": 10,
    "has_steam_shower": 5,
}
FULL_HOME_RISK_WEIGHT = 10


def coerce_project_type(value: ProjectType | str | None) -> ProjectType:
    """Map a project type value onto ProjectType; unknown values become OTHER."""
    if isinstance(value, ProjectType):
        return value
    try:
        return ProjectType(value)
    except ValueError:
        return ProjectType.OTHER


def detect_area_type(text: str | None) -> AreaType:
    """Classify free text into an area type (first matching keyword wins)."""
    lower = (text or "").lower()
    for area_type, keywords in AREA_KEYWORDS:
        if any(keyword in lower for keyword in keywords):
            return area_type
    return AreaType.OTHER


def _item_matches(code: str | None, name: str | None, patterns: Sequence[str]) -> bool:
    code_name = (name or "").lower()
    code_code = (code or "").lower()
    return any(p in code_name or p in code_code for p in patterns)


def has_cost_code_match(scope_records: Sequence[ScopeRecord], patterns: Sequence[str]) -> bool:
    """True if any cost item's code name or code contains one of the patterns."""
    lowered = [p.lower() for p in patterns]
    return any(
        _item_matches(item.cost_code_code, item.cost_code_name, lowered)
        for record in scope_records
        for item in record.cost_items
    )


def count_cost_code_matches(
    scope_records: Sequence[ScopeRecord], patterns: Sequence[str]
) -> int:
    """Number of cost items matching at least one pattern."""
    lowered = [p.lower() for p in patterns]
    return sum(
        1
        for record in scope_records
        for item in record.cost_items
        if _item_matches(item.cost_code_code, item.cost_code_name, lowered)
    )


def has_title_match(scope_records: Sequence[ScopeRecord], patterns: Sequence[str]) -> bool:
    """True if any scope record title contains one of the patterns."""
    lowered = [p.lower() for p in patterns]
    for record in scope_records:
        title = (record.title or "").lower()
        if any(p in title for p in lowered):
            return True
    return False


def derive_flags(
    project_type: ProjectType,
    scope_records: Sequence[ScopeRecord],
    answers: AnswerSet,
) -> DerivedFlags:
    """Evaluate every derived flag for the given scope and answers."""
    wet_area_scope = answers.items("wet_area_scope")
    structural_scope = answers.items("structural_scope")
    interior_scope = answers.items("interior_scope")
    flooring_scope = answers.text("flooring_scope")

    has_wall_removals = (
        answers.is_true("has_wall_removals")
        or has_cost_code_match(scope_records, WALL_REMOVAL_CODES)
        or (
            has_title_match(scope_records, ["wall"])
            and has_title_match(scope_records, ["demo"])
        )
    )

    has_structural = (
        has_wall_removals
        or has_cost_code_match(scope_records, STRUCTURAL_CODES)
        or (len(structural_scope) > 0 and "none" not in structural_scope)
    )

    has_new_shower_pan = "new shower pan" in wet_area_scope or has_cost_code_match(
        scope_records, SHOWER_PAN_CODES
    )

    has_curbless_shower = (
        "curbless" in wet_area_scope
        or answers.text("waterproofing_level") == CURBLESS_WATERPROOFING_LEVEL
        or has_cost_code_match(scope_records, CURBLESS_CODES)
    )

    has_steam_shower = "steam shower" in wet_area_scope or has_cost_code_match(
        scope_records, STEAM_CODES
    )

    has_waterproofing_scope = (
        has_new_shower_pan
        or has_curbless_shower
        or has_cost_code_match(scope_records, WATERPROOFING_CODES)
        or (project_type is ProjectType.BATH_REMODEL and len(wet_area_scope) > 0)
    )

    has_exterior_work = len(answers.items("exterior_scope")) > 0 or has_title_match(
        scope_records, EXTERIOR_TITLES
    )

    has_tile_floor = flooring_scope == "new tile" or has_cost_code_match(
        scope_records, TILE_FLOOR_CODES
    )

    has_engineered_floor = flooring_scope == "new engineered wood" or has_cost_code_match(
        scope_records, ENGINEERED_FLOOR_CODES
    )

    wet_area_count = sum(
        1
        for record in scope_records
        if any(p in (record.title or "").lower() for p in WET_AREA_TITLES)
    )

    includes_kitchen = (
        project_type is ProjectType.KITCHEN_REMODEL
        or "kitchen" in interior_scope
        or has_title_match(scope_records, ["kitchen"])
    )

    includes_baths = (
        project_type is ProjectType.BATH_REMODEL
        or "baths" in interior_scope
        or has_title_match(scope_records, WET_AREA_TITLES)
    )

    includes_electrical_heavy = (
        count_cost_code_matches(scope_records, ELECTRICAL_CODES) >= ELECTRICAL_HEAVY_MIN_ITEMS
        or "lighting" in interior_scope
    )

    return DerivedFlags(
        has_structural=has_structural,
        has_wall_removals=has_wall_removals,
        has_new_shower_pan=has_new_shower_pan,
        has_curbless_shower=has_curbless_shower,
        has_steam_shower=has_steam_shower,
        has_waterproofing_scope=has_waterproofing_scope,
        has_exterior_work=has_exterior_work,
        has_tile_floor=has_tile_floor,
        has_engineered_floor=has_engineered_floor,
        has_custom_cabinets=has_cost_code_match(scope_records, CUSTOM_CABINET_CODES),
        is_occupied_during_work=answers.is_true("is_occupied"),
        has_multiple_wet_areas=wet_area_count > 1,
        includes_kitchen=includes_kitchen,
        includes_baths=includes_baths,
        includes_electrical_heavy=includes_electrical_heavy,
        includes_hvac=has_cost_code_match(scope_records, HVAC_CODES),
    )


def detect_areas(scope_records: Sequence[ScopeRecord]) -> list[DetectedArea]:
    """Detect areas from record titles and cost item area labels.

    At most one area per distinct label; the first classification wins.
    """
    areas: list[DetectedArea] = []
    seen_labels: set[str] = set()

    for record in scope_records:
        title = record.title or UNNAMED_SECTION
        if title not in seen_labels:
            seen_labels.add(title)
            areas.append(
                DetectedArea(label=title, type=detect_area_type(title), scope_record_id=record.id)
            )

        for item in record.cost_items:
            if item.area_label and item.area_label not in seen_labels:
                seen_labels.add(item.area_label)
                areas.append(
                    DetectedArea(
                        label=item.area_label,
                        type=detect_area_type(item.area_label),
                        scope_record_id=record.id,
                    )
                )

    return areas


def calculate_risk_score(project_type: ProjectType, flags: DerivedFlags) -> int:
    """Additive risk score clamped to [0, 100]."""
    score = BASE_RISK_SCORE
    for flag_name, weight in RISK_WEIGHTS.items():
        if getattr(flags, flag_name):
            score += weight
    if project_type is ProjectType.FULL_HOME_REMODEL:
        score += FULL_HOME_RISK_WEIGHT
    return min(100, max(0, score))


def derive_risk_flags(project_type: ProjectType, flags: DerivedFlags) -> RiskFlags:
    return RiskFlags(
        structural_risk=flags.has_structural,
        waterproofing_risk=flags.has_waterproofing_scope,
        inspection_heavy=(
            flags.has_structural
            or flags.has_waterproofing_scope
            or flags.includes_electrical_heavy
        ),
        schedule_complex=(
            project_type is ProjectType.FULL_HOME_REMODEL
            or flags.has_multiple_wet_areas
            or (flags.includes_kitchen and flags.includes_baths)
        ),
    )


def build_context(
    project_type: ProjectType | str,
    scope_records: Sequence[ScopeRecord],
    answers: AnswerSet | None = None,
) -> ChecklistContext:
    """Build the checklist context for a project.

    Args:
        project_type: Project type (unknown values are treated as "other")
        scope_records: Scope records of the accepted estimate
        answers: Validated Q&A answers (None means no answers)

    Returns:
        ChecklistContext with derived flags, detected areas, risk score and risk flags
    """
    ptype = coerce_project_type(project_type)
    if answers is None:
        answers = AnswerSet()

    flags = derive_flags(ptype, scope_records, answers)
    areas = detect_areas(scope_records)
    risk_score = calculate_risk_score(ptype, flags)

    logger.debug(
        "Built checklist context: project_type=%s records=%d areas=%d risk_score=%d",
        ptype.value,
        len(scope_records),
        len(areas),
        risk_score,
    )

    return ChecklistContext(
        derived_flags=flags,
        detected_areas=areas,
        risk_score=risk_score,
        risk_flags=derive_risk_flags(ptype, flags),
    )
