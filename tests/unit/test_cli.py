"""Unit tests for the checkplan CLI."""

from __future__ import annotations

import csv
import json

import pytest
from typer.testing import CliRunner

from checkplan.cli import app

runner = CliRunner()

SCOPE = [
    {
        "id": "scope-bath",
        "title": "Primary Bath",
        "cost_items": [
            {"id": "ci-1", "cost_code_code": "PL-200", "cost_code_name": "Linear drain"},
            {"id": "ci-2", "cost_code_code": "WP-10", "cost_code_name": "Kerdi membrane"},
        ],
    }
]

TEMPLATES = [
    {"id": "tpl-bath-precon", "name": "Bath Pre-Construction", "phase": "precon", "tags": ["bath"]},
    {"id": "tpl-waterproofing", "name": "Shower Waterproofing", "phase": "rough", "tags": ["waterproofing"]},
    {"id": "tpl-curbless", "name": "Curbless Shower", "phase": "rough", "tags": ["curbless"]},
    {"id": "tpl-final", "name": "Final Walkthrough", "phase": "punch", "tags": ["final"]},
]

CATALOG_YAML = """
- id: bath-vent
  name: Bath Exhaust
  area_types: [bath]
  trades: [waterproofing]
  questions:
    - code: fan_cfm
      text: Fan CFM rating?
  checklist_items:
    - code: bv-01
      text: Fan ducted to exterior
      phase: finish
"""


@pytest.fixture
def inputs(tmp_path):
    scope = tmp_path / "scope.json"
    scope.write_text(json.dumps(SCOPE))
    templates = tmp_path / "templates.json"
    templates.write_text(json.dumps(TEMPLATES))
    answers = tmp_path / "answers.json"
    answers.write_text(json.dumps({"waterproofing_level": "curbless / linear drain", "is_occupied": False}))
    return {"scope": str(scope), "templates": str(templates), "answers": str(answers)}


def _plan_json(inputs, *extra):
    result = runner.invoke(
        app,
        ["plan", inputs["scope"], "--templates", inputs["templates"], "-t", "bath_remodel", "--json", *extra],
    )
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestContextCommand:
    def test_json(self, inputs):
        result = runner.invoke(
            app, ["context", inputs["scope"], "--answers", inputs["answers"], "-t", "bath_remodel", "--json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["derived_flags"]["has_curbless_shower"] is True
        assert payload["detected_areas"][0]["type"] == "bath"
        assert payload["risk_score"] == 40

    def test_tables(self, inputs):
        result = runner.invoke(app, ["context", inputs["scope"]])
        assert result.exit_code == 0, result.output
        assert "Risk score" in result.output
        assert "Derived Flags" in result.output

    def test_missing_scope_file(self, tmp_path):
        result = runner.invoke(app, ["context", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_project_type(self, inputs):
        result = runner.invoke(app, ["context", inputs["scope"], "-t", "basement"])
        assert result.exit_code != 0


class TestMatrixCommand:
    def test_json(self, inputs):
        result = runner.invoke(app, ["matrix", inputs["scope"], "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["areas"][0]["key"] == "Primary Bath"
        assert payload["area_trade_scopes"][0]["trades"] == ["plumbing", "waterproofing"]

    def test_table(self, inputs):
        result = runner.invoke(app, ["matrix", inputs["scope"]])
        assert result.exit_code == 0, result.output
        assert "1 areas, 2 trades" in result.output


class TestPlanCommand:
    """Planning from files, with and without the catalog step."""

    def test_template_checklists(self, inputs):
        payload = _plan_json(inputs, "--no-matrix")

        ids = [c["template_ids"][0] for c in payload["planned_checklists"]]
        assert ids == ["tpl-bath-precon", "tpl-waterproofing", "tpl-curbless", "tpl-final"]
        assert "recommended_missing" not in payload

    def test_matrix_checklists_included_by_default(self, inputs):
        payload = _plan_json(inputs)
        synthetic = [c for c in payload["planned_checklists"] if not c["template_ids"]]
        assert synthetic
        assert all(c["area_key"] == "Primary Bath" for c in synthetic)

    def test_matrix_disabled_by_env(self, inputs, monkeypatch):
        monkeypatch.setenv("CHECKPLAN_INCLUDE_MATRIX", "false")
        payload = _plan_json(inputs)
        assert all(c["template_ids"] for c in payload["planned_checklists"])

    def test_catalog_from_env(self, inputs, tmp_path, monkeypatch):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text(CATALOG_YAML)
        monkeypatch.setenv("CHECKPLAN_CATALOG_PATH", str(catalog))

        payload = _plan_json(inputs)

        synthetic = [c for c in payload["planned_checklists"] if not c["template_ids"]]
        assert [(c["phase"], c["item_count"]) for c in synthetic] == [("finish", 1)]

    def test_recommended_missing(self, inputs, tmp_path):
        existing = tmp_path / "existing.json"
        existing.write_text(json.dumps([{"title": "Bath Pre-Construction", "phase": "precon"}]))

        payload = _plan_json(inputs, "--no-matrix", "--existing", str(existing))

        assert [c["template_ids"] for c in payload["recommended_missing"]] == [["tpl-waterproofing"]]

    def test_export_csv(self, inputs, tmp_path):
        output = tmp_path / "plan.csv"
        result = runner.invoke(
            app, ["plan", inputs["scope"], "--templates", inputs["templates"], "--no-matrix", "-o", str(output)]
        )

        assert result.exit_code == 0, result.output
        with output.open(newline="") as f:
            rows = list(csv.reader(f))
        assert rows[0][0] == "Phase"
        assert len(rows) > 1

    def test_bad_export_suffix(self, inputs, tmp_path):
        result = runner.invoke(
            app, ["plan", inputs["scope"], "--templates", inputs["templates"], "-o", str(tmp_path / "plan.pdf")]
        )
        assert result.exit_code == 1

    def test_invalid_templates(self, inputs, tmp_path):
        templates = tmp_path / "bad.json"
        templates.write_text(json.dumps([{"name": "No id or phase"}]))
        result = runner.invoke(app, ["plan", inputs["scope"], "--templates", str(templates)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_invalid_config(self, inputs, monkeypatch):
        monkeypatch.setenv("CHECKPLAN_MEDIUM_RISK_SCORE", "lots")
        result = runner.invoke(app, ["plan", inputs["scope"], "--templates", inputs["templates"]])
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output


class TestInsightsCommand:
    def test_json(self, inputs):
        result = runner.invoke(
            app, ["insights", inputs["scope"], "--answers", inputs["answers"], "-t", "bath_remodel", "--json"]
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["level"] == "medium"
        assert "Curbless shower (critical waterproofing)" in payload["bullets"]

    def test_text(self, inputs):
        result = runner.invoke(app, ["insights", inputs["scope"]])
        assert result.exit_code == 0, result.output
        assert "Multi-area project: 1 bath" in result.output


class TestCatalogCommands:
    def test_templates(self):
        result = runner.invoke(app, ["catalog", "templates"])
        assert result.exit_code == 0, result.output
        assert "Area/Trade Catalog" in result.output

    def test_items_json(self):
        result = runner.invoke(app, ["catalog", "items", "--area", "bath", "--trade", "waterproofing", "--json"])

        assert result.exit_code == 0, result.output
        codes = [item["code"] for item in json.loads(result.stdout)]
        assert codes[:2] == ["wp-01", "wp-02"]

    def test_questions_json(self):
        result = runner.invoke(
            app, ["catalog", "questions", "--area", "kitchen", "--trade", "demo", "-t", "kitchen_remodel", "--json"]
        )

        assert result.exit_code == 0, result.output
        codes = [q["code"] for q in json.loads(result.stdout)]
        assert codes[:3] == ["demo_haul_access", "demo_dumpster_location", "demo_quiet_hours"]

    def test_items_none_match(self):
        result = runner.invoke(app, ["catalog", "items", "--area", "exterior", "--trade", "tile"])
        assert result.exit_code == 0, result.output
        assert "No catalog items match" in result.output

    def test_check_valid(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text(CATALOG_YAML)
        result = runner.invoke(app, ["catalog", "check", str(path)])
        assert result.exit_code == 0, result.output
        assert "1 templates, 1 items, 1 questions" in result.output

    def test_check_invalid(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_text("- id: a\n  name: A\n")
        result = runner.invoke(app, ["catalog", "check", str(path)])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_check_unreadable(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        path.write_bytes(b"\xff\xfe")
        result = runner.invoke(app, ["catalog", "check", str(path)])
        assert result.exit_code == 1
        assert "not valid UTF-8" in result.output

        result = runner.invoke(app, ["catalog", "check", str(tmp_path)])
        assert result.exit_code == 1
        assert "Cannot read catalog file" in result.output

    def test_templates_with_unreadable_configured_catalog(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CHECKPLAN_CATALOG_PATH", str(tmp_path))
        result = runner.invoke(app, ["catalog", "templates"])
        assert result.exit_code == 1
        assert "Error" in result.output
