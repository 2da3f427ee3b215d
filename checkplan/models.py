"""checkplan Pydantic models for type-safe data validation.

Input models (scope data, answers, templates, catalog entries) are frozen:
the inference engine only reads them. PlannedChecklist is the one output
record a caller may still adjust (the `enabled` toggle).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator


class ProjectType(str, Enum):
    """Remodel project types recognised by the planner."""

    KITCHEN_REMODEL = "kitchen_remodel"
    BATH_REMODEL = "bath_remodel"
    FULL_HOME_REMODEL = "full_home_remodel"
    OTHER = "other"


class AreaType(str, Enum):
    """Physical area classification."""

    KITCHEN = "kitchen"
    BATH = "bath"
    BEDROOM = "bedroom"
    LIVING = "living"
    HALL = "hall"
    EXTERIOR = "exterior"
    OTHER = "other"


class TradeType(str, Enum):
    """Construction trade inferred from cost-code text."""

    DEMO = "demo"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    HVAC = "hvac"
    CABINETS = "cabinets"
    COUNTERTOPS = "countertops"
    FLOORING = "flooring"
    FLOOR_LEVELING = "floor_leveling"
    TILE = "tile"
    WATERPROOFING = "waterproofing"
    PAINT = "paint"
    FRAMING = "framing"
    DRYWALL = "drywall"
    INSULATION = "insulation"
    ROOFING = "roofing"
    WINDOWS = "windows"
    DOORS = "doors"
    APPLIANCES = "appliances"
    TRIM = "trim"
    HARDWARE = "hardware"
    OTHER = "other"


class Phase(str, Enum):
    """Checklist phases in execution order."""

    PRECON = "precon"
    ROUGH = "rough"
    FINISH = "finish"
    PUNCH = "punch"
    WARRANTY = "warranty"


class RiskLevel(str, Enum):
    """Checklist risk classification."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class CostCodeCategory(str, Enum):
    """Cost code categories used by the estimating subsystem."""

    LABOR = "labor"
    SUBS = "subs"
    MATERIALS = "materials"
    OTHER = "other"


class AnswerKind(str, Enum):
    """Value kind carried by an answer."""

    BOOLEAN = "boolean"
    TEXT = "text"
    STRING_LIST = "string_list"


class AnswerValidationError(ValueError):
    """Raw answer value cannot be represented as an AnswerValue."""


# ---------------------------------------------------------------------------
# Scope data
# ---------------------------------------------------------------------------


class CostItem(BaseModel):
    """Priced estimate line item referencing a cost code."""

    id: str
    cost_code_id: str | None = None
    cost_code_category: CostCodeCategory | None = None
    cost_code_code: str | None = None
    cost_code_name: str | None = None
    area_label: str | None = None
    group_label: str | None = None

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "ci-101",
                "cost_code_id": "cc-17",
                "cost_code_category": "subs",
                "cost_code_code": "PL-200",
                "cost_code_name": "Linear drain",
                "area_label": "Primary Bath",
                "group_label": "Shower",
            }
        }


class ScopeRecord(BaseModel):
    """One titled section of an accepted cost estimate."""

    id: str
    title: str | None = None
    cost_items: list[CostItem] = Field(
        default_factory=list,
        validation_alias=AliasChoices("cost_items", "costItems"),
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "scope-1",
                "title": "Primary Bath",
                "cost_items": [{"id": "ci-101", "cost_code_name": "Linear drain"}],
            }
        }


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------


class AnswerValue(BaseModel):
    """A single answer with an explicit value kind."""

    kind: AnswerKind
    value: bool | str | tuple[str, ...]

    class Config:
        frozen = True

    @model_validator(mode="after")
    def validate_kind(self) -> AnswerValue:
        expected = {
            AnswerKind.BOOLEAN: bool,
            AnswerKind.TEXT: str,
            AnswerKind.STRING_LIST: tuple,
        }[self.kind]
        if not isinstance(self.value, expected):
            raise ValueError(f"{self.kind.value} answer cannot hold {self.value!r}")
        return self

    @classmethod
    def from_raw(cls, raw: Any) -> AnswerValue:
        """Convert a loosely typed answer value.

        Raises:
            AnswerValidationError: If the value is not a bool, scalar or list of scalars
        """
        if isinstance(raw, bool):
            return cls(kind=AnswerKind.BOOLEAN, value=raw)
        if isinstance(raw, (str, int, float)):
            return cls(kind=AnswerKind.TEXT, value=str(raw))
        if isinstance(raw, (list, tuple)):
            items = []
            for entry in raw:
                if isinstance(entry, bool) or not isinstance(entry, (str, int, float)):
                    raise AnswerValidationError(
                        f"List answers may only contain text, got {entry!r}"
                    )
                items.append(str(entry))
            return cls(kind=AnswerKind.STRING_LIST, value=tuple(items))
        raise AnswerValidationError(f"Unsupported answer value: {raw!r}")


class AnswerSet(BaseModel):
    """Answers keyed by question code.

    Built once at the boundary; the engine only uses the typed accessors.
    """

    answers: dict[str, AnswerValue] = Field(default_factory=dict)

    class Config:
        frozen = True

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any] | None) -> AnswerSet:
        """Build from a question-code -> value mapping. None values are dropped.

        Raises:
            AnswerValidationError: If a value has an unsupported type
        """
        values: dict[str, AnswerValue] = {}
        for code, value in (raw or {}).items():
            if value is None:
                continue
            try:
                values[str(code)] = AnswerValue.from_raw(value)
            except AnswerValidationError as e:
                raise AnswerValidationError(f"Answer '{code}': {e}") from e
        return cls(answers=values)

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> AnswerSet:
        """Build from stored answer records.

        Each record carries `question_code` and at most one meaningful value
        column; value_json wins over value_boolean, which wins over value_text.

        Raises:
            AnswerValidationError: If a record lacks a question code or has a bad value
        """
        raw: dict[str, Any] = {}
        for idx, record in enumerate(records):
            code = record.get("question_code")
            if not code:
                raise AnswerValidationError(f"Answer record {idx} has no question_code")
            for column in ("value_json", "value_boolean", "value_text"):
                if record.get(column) is not None:
                    raw[code] = record[column]
                    break
        return cls.from_mapping(raw)

    def get(self, code: str) -> AnswerValue | None:
        return self.answers.get(code)

    def is_true(self, code: str) -> bool:
        """True only for a boolean answer that is set to True."""
        answer = self.answers.get(code)
        return answer is not None and answer.kind is AnswerKind.BOOLEAN and answer.value is True

    def text(self, code: str) -> str | None:
        answer = self.answers.get(code)
        if answer is None or answer.kind is not AnswerKind.TEXT:
            return None
        return answer.value  # type: ignore[return-value]

    def items(self, code: str) -> tuple[str, ...]:
        answer = self.answers.get(code)
        if answer is None or answer.kind is not AnswerKind.STRING_LIST:
            return ()
        return answer.value  # type: ignore[return-value]


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


class DerivedFlags(BaseModel):
    """Boolean scope signals inferred from estimate data and answers."""

    has_structural: bool = False
    has_wall_removals: bool = False
    has_new_shower_pan: bool = False
    has_curbless_shower: bool = False
    has_steam_shower: bool = False
    has_waterproofing_scope: bool = False
    has_exterior_work: bool = False
    has_tile_floor: bool = False
    has_engineered_floor: bool = False
    has_custom_cabinets: bool = False
    is_occupied_during_work: bool = False
    has_multiple_wet_areas: bool = False
    includes_kitchen: bool = False
    includes_baths: bool = False
    includes_electrical_heavy: bool = False
    includes_hvac: bool = False

    class Config:
        frozen = True


class DetectedArea(BaseModel):
    """Physical area referenced by a scope title or cost item label."""

    label: str
    type: AreaType
    scope_record_id: str

    class Config:
        frozen = True


class RiskFlags(BaseModel):
    """Summary risk flags derived from the boolean signals."""

    structural_risk: bool = False
    waterproofing_risk: bool = False
    inspection_heavy: bool = False
    schedule_complex: bool = False

    class Config:
        frozen = True


class ChecklistContext(BaseModel):
    """Everything the planner needs to know about a project's scope."""

    derived_flags: DerivedFlags
    detected_areas: list[DetectedArea] = Field(default_factory=list)
    risk_score: int = 10
    risk_flags: RiskFlags

    class Config:
        frozen = True

    @field_validator("risk_score")
    @classmethod
    def validate_risk_score(cls, v: int) -> int:
        if not 0 <= v <= 100:
            raise ValueError("risk_score must be between 0 and 100")
        return v


# ---------------------------------------------------------------------------
# Area x trade matrix
# ---------------------------------------------------------------------------


class MatrixArea(BaseModel):
    """Area entry of the area x trade matrix."""

    key: str
    type: AreaType
    scope_record_id: str

    class Config:
        frozen = True


class AreaTradeScope(BaseModel):
    """Trades whose work touches one area (first-seen order, no duplicates)."""

    area_key: str
    trades: list[TradeType] = Field(default_factory=list)

    class Config:
        frozen = True


class AreaTradeMatrix(BaseModel):
    """Areas detected in scope data and the trades touching each one."""

    areas: list[MatrixArea] = Field(default_factory=list)
    area_trade_scopes: list[AreaTradeScope] = Field(default_factory=list)

    class Config:
        frozen = True


# ---------------------------------------------------------------------------
# Static area/trade catalog
# ---------------------------------------------------------------------------


class CatalogQuestion(BaseModel):
    """Follow-up question attached to an area/trade template."""

    code: str
    text: str
    help_text: str | None = None
    input_type: Literal["boolean", "select", "multi-select", "text"] | None = None
    options: tuple[str, ...] = ()

    class Config:
        frozen = True


class CatalogChecklistItem(BaseModel):
    """Checklist item definition from the area/trade catalog."""

    code: str
    text: str
    phase: Literal["precon", "rough", "finish", "punch"]
    tags: tuple[str, ...] = ()
    default_assignee_role: str | None = None  # PM, Super, Lead, Sub
    risk_level: RiskLevel | None = None

    class Config:
        frozen = True


class AreaTradeTemplate(BaseModel):
    """Catalog template keyed by area types, trades and optional project types."""

    id: str
    name: str
    project_types: tuple[ProjectType, ...] | None = None
    area_types: tuple[AreaType, ...]
    trades: tuple[TradeType, ...]
    questions: tuple[CatalogQuestion, ...] = ()
    checklist_items: tuple[CatalogChecklistItem, ...] = ()

    class Config:
        frozen = True


# ---------------------------------------------------------------------------
# Externally stored checklist templates
# ---------------------------------------------------------------------------


class TemplateItem(BaseModel):
    """Line of an externally stored checklist template."""

    id: str
    label: str
    sort_order: int = 0
    required: bool = False

    class Config:
        frozen = True


class ChecklistTemplate(BaseModel):
    """Checklist template authored and stored outside the engine."""

    id: str
    name: str
    description: str | None = None
    project_type: str = "global"  # a ProjectType value or "global"
    phase: str
    tags: list[str] = Field(default_factory=list)
    is_active: bool = True
    items: list[TemplateItem] = Field(default_factory=list)

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "id": "tpl-bath-wp",
                "name": "Shower Waterproofing Inspection",
                "project_type": "bath_remodel",
                "phase": "rough",
                "tags": ["bath", "waterproofing"],
                "items": [{"id": "i1", "label": "Flood test 24h", "sort_order": 1}],
            }
        }


# ---------------------------------------------------------------------------
# Planner output
# ---------------------------------------------------------------------------


class PlannedChecklist(BaseModel):
    """Recommended, not yet persisted checklist bundle."""

    id: str
    phase: str
    title: str
    template_ids: list[str] = Field(default_factory=list)
    area_key: str | None = None
    scope_record_id: str | None = None
    trades: list[TradeType] | None = None
    reason_tags: list[str] = Field(default_factory=list)
    risk_level: RiskLevel
    item_count: int = 0
    enabled: bool = True
    items: list[CatalogChecklistItem] | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "id": "temp-3f9a1c2b7",
                "phase": "rough",
                "title": "Shower Waterproofing Inspection",
                "template_ids": ["tpl-bath-wp"],
                "reason_tags": ["waterproofing", "bath"],
                "risk_level": "high",
                "item_count": 6,
                "enabled": True,
            }
        }


class ExistingChecklist(BaseModel):
    """Checklist a project already has (title and phase are all that matter)."""

    title: str
    phase: str = ""

    class Config:
        frozen = True
