"""Unit tests for the checklist context builder.

Covers derived flags, area detection, risk scoring and the determinism,
bound and monotonicity guarantees.
"""

from __future__ import annotations

from checkplan.intelligence.context import (
    BASE_RISK_SCORE,
    UNNAMED_SECTION,
    build_context,
    calculate_risk_score,
    detect_area_type,
)
from checkplan.models import AnswerSet, AreaType, DerivedFlags, ProjectType
from factories import make_item, make_record


class TestScenarios:
    """End-to-end context scenarios."""

    def test_curbless_bath(self):
        records = [make_record("s1", "Primary Bath", make_item("ci-1", name="linear drain"))]
        answers = AnswerSet.from_mapping({"waterproofing_level": "curbless / linear drain"})

        ctx = build_context("bath_remodel", records, answers)

        assert ctx.derived_flags.has_curbless_shower is True
        assert ctx.derived_flags.has_waterproofing_scope is True
        assert ctx.derived_flags.includes_baths is True

    def test_empty_project(self):
        ctx = build_context("other", [], AnswerSet())

        assert ctx.risk_score == BASE_RISK_SCORE == 10
        assert ctx.detected_areas == []
        assert ctx.derived_flags == DerivedFlags()

    def test_kitchen_demo_single_area(self):
        records = [make_record("s1", "Kitchen Demo", make_item("ci-1", code="DEMO-01"))]

        ctx = build_context("kitchen_remodel", records)

        assert len(ctx.detected_areas) == 1
        assert ctx.detected_areas[0].label == "Kitchen Demo"
        assert ctx.detected_areas[0].type == AreaType.KITCHEN


class TestDerivedFlags:
    """Each flag's independent signal sources."""

    def test_wall_removal_answer_implies_structural(self):
        answers = AnswerSet.from_mapping({"has_wall_removals": True})
        flags = build_context("other", [], answers).derived_flags
        assert flags.has_wall_removals is True
        assert flags.has_structural is True

    def test_wall_removal_from_titles(self):
        records = [make_record("s1", "Wall Demo"), make_record("s2", "Living Room")]
        assert build_context("other", records).derived_flags.has_wall_removals is True

    def test_wall_and_demo_in_different_titles(self):
        records = [make_record("s1", "Remove wall"), make_record("s2", "Demo kitchen")]
        assert build_context("other", records).derived_flags.has_wall_removals is True

    def test_structural_scope_none_is_ignored(self):
        answers = AnswerSet.from_mapping({"structural_scope": ["none"]})
        assert build_context("other", [], answers).derived_flags.has_structural is False

    def test_structural_scope_answer(self):
        answers = AnswerSet.from_mapping({"structural_scope": ["new beam"]})
        assert build_context("other", [], answers).derived_flags.has_structural is True

    def test_structural_cost_code(self):
        records = [make_record("s1", "Living", make_item("ci-1", code="FR-10", name="LVL beam"))]
        assert build_context("other", records).derived_flags.has_structural is True

    def test_shower_pan_from_answer(self):
        answers = AnswerSet.from_mapping({"wet_area_scope": ["new shower pan"]})
        flags = build_context("other", [], answers).derived_flags
        assert flags.has_new_shower_pan is True
        assert flags.has_waterproofing_scope is True

    def test_steam_shower(self):
        records = [make_record("s1", "Bath", make_item("ci-1", name="Steam generator"))]
        assert build_context("other", records).derived_flags.has_steam_shower is True

    def test_bath_remodel_with_wet_area_scope_is_waterproofing(self):
        answers = AnswerSet.from_mapping({"wet_area_scope": ["vanity swap"]})
        assert build_context("bath_remodel", [], answers).derived_flags.has_waterproofing_scope is True
        assert build_context("kitchen_remodel", [], answers).derived_flags.has_waterproofing_scope is False

    def test_exterior_from_title(self):
        records = [make_record("s1", "Back Deck")]
        assert build_context("other", records).derived_flags.has_exterior_work is True

    def test_flooring_answers(self):
        tile = AnswerSet.from_mapping({"flooring_scope": "new tile"})
        wood = AnswerSet.from_mapping({"flooring_scope": "new engineered wood"})
        assert build_context("other", [], tile).derived_flags.has_tile_floor is True
        assert build_context("other", [], wood).derived_flags.has_engineered_floor is True

    def test_custom_cabinets(self):
        records = [make_record("s1", "Kitchen", make_item("ci-1", name="Semi-custom boxes"))]
        assert build_context("other", records).derived_flags.has_custom_cabinets is True

    def test_occupied_requires_true_boolean(self):
        assert build_context("other", [], AnswerSet.from_mapping({"is_occupied": True})).derived_flags.is_occupied_during_work
        assert not build_context("other", [], AnswerSet.from_mapping({"is_occupied": "yes"})).derived_flags.is_occupied_during_work

    def test_multiple_wet_areas(self):
        records = [make_record("s1", "Hall Bath"), make_record("s2", "Powder Room")]
        assert build_context("other", records).derived_flags.has_multiple_wet_areas is True
        assert build_context("other", records[:1]).derived_flags.has_multiple_wet_areas is False

    def test_interior_scope_answers(self):
        answers = AnswerSet.from_mapping({"interior_scope": ["kitchen", "baths", "lighting"]})
        flags = build_context("other", [], answers).derived_flags
        assert flags.includes_kitchen is True
        assert flags.includes_baths is True
        assert flags.includes_electrical_heavy is True

    def test_electrical_heavy_needs_three_items(self):
        items = [
            make_item("ci-1", name="Recessed lighting"),
            make_item("ci-2", name="New circuit"),
        ]
        two = [make_record("s1", "Living", *items)]
        three = [make_record("s1", "Living", *items, make_item("ci-3", name="Panel upgrade"))]
        assert build_context("other", two).derived_flags.includes_electrical_heavy is False
        assert build_context("other", three).derived_flags.includes_electrical_heavy is True

    def test_missing_fields_are_no_signal(self):
        records = [make_record("s1", None, make_item("ci-1"))]
        flags = build_context("other", records).derived_flags
        assert flags == DerivedFlags()


class TestAreaDetection:
    """Area classification and deduplication."""

    def test_keyword_order(self):
        assert detect_area_type("Kitchen and Bath") == AreaType.KITCHEN
        assert detect_area_type("Master Suite") == AreaType.BEDROOM
        assert detect_area_type("Great Room") == AreaType.LIVING
        assert detect_area_type("Front Porch") == AreaType.EXTERIOR
        assert detect_area_type("Garage") == AreaType.OTHER
        assert detect_area_type(None) == AreaType.OTHER

    def test_area_labels_detected(self):
        records = [make_record("s1", "Main Floor", make_item("ci-1", area="Hall Bath"), make_item("ci-2", area="Kitchen"))]
        areas = build_context("full_home_remodel", records).detected_areas
        assert [(a.label, a.type) for a in areas] == [
            ("Main Floor", AreaType.OTHER),
            ("Hall Bath", AreaType.BATH),
            ("Kitchen", AreaType.KITCHEN),
        ]
        assert all(a.scope_record_id == "s1" for a in areas)

    def test_one_area_per_label(self):
        records = [
            make_record("s1", "Kitchen", make_item("ci-1", area="Kitchen"), make_item("ci-2", area="Pantry")),
            make_record("s2", "Kitchen", make_item("ci-3", area="Pantry")),
        ]
        labels = [a.label for a in build_context("other", records).detected_areas]
        assert labels == ["Kitchen", "Pantry"]
        assert len(labels) == len(set(labels))

    def test_untitled_record(self):
        areas = build_context("other", [make_record("s1", None)]).detected_areas
        assert areas[0].label == UNNAMED_SECTION


class TestRiskScore:
    """Additive risk weights and clamping."""

    def test_weights(self):
        assert calculate_risk_score(ProjectType.OTHER, DerivedFlags(has_structural=True)) == 30
        assert calculate_risk_score(ProjectType.OTHER, DerivedFlags(has_waterproofing_scope=True)) == 30
        assert calculate_risk_score(ProjectType.OTHER, DerivedFlags(is_occupied_during_work=True)) == 25
        assert calculate_risk_score(ProjectType.OTHER, DerivedFlags(includes_electrical_heavy=True)) == 20
        assert calculate_risk_score(ProjectType.OTHER, DerivedFlags(has_curbless_shower=True)) == 20
        assert calculate_risk_score(ProjectType.OTHER, DerivedFlags(has_steam_shower=True)) == 15
        assert calculate_risk_score(ProjectType.FULL_HOME_REMODEL, DerivedFlags()) == 20

    def test_all_flags_stay_within_bounds(self):
        flags = DerivedFlags(**{name: True for name in DerivedFlags.model_fields})
        score = calculate_risk_score(ProjectType.FULL_HOME_REMODEL, flags)
        assert 0 <= score <= 100
        assert score == 100

    def test_risk_flags(self, kitchen_records):
        ctx = build_context("full_home_remodel", kitchen_records)
        assert ctx.risk_flags.structural_risk is True
        assert ctx.risk_flags.inspection_heavy is True
        assert ctx.risk_flags.schedule_complex is True
        assert ctx.risk_flags.waterproofing_risk is False

    def test_unknown_project_type_treated_as_other(self):
        assert build_context("basement_finish", []).risk_score == build_context("other", []).risk_score


class TestProperties:
    """Determinism and monotonicity."""

    def test_deterministic(self, bath_records):
        answers = AnswerSet.from_mapping({"is_occupied": True, "wet_area_scope": ["curbless"]})
        first = build_context("bath_remodel", bath_records, answers)
        second = build_context("bath_remodel", bath_records, answers)
        assert first == second
        assert first.model_dump() == second.model_dump()

    def test_adding_matching_item_never_clears_flags(self, kitchen_records):
        before = build_context("kitchen_remodel", kitchen_records).derived_flags
        extended = [
            kitchen_records[0].model_copy(
                update={"cost_items": [*kitchen_records[0].cost_items, make_item("ci-9", name="Hot mop pan")]}
            )
        ]
        after = build_context("kitchen_remodel", extended).derived_flags

        assert after.has_waterproofing_scope is True
        for name, value in before.model_dump().items():
            if value:
                assert getattr(after, name) is True, name

