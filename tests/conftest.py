"""Pytest configuration and fixtures for checkplan tests.

Provides common fixtures for testing.
"""

from __future__ import annotations

import pytest

from checkplan.config import reset_config
from checkplan.models import ChecklistTemplate, ScopeRecord
from factories import make_item, make_record, make_template


@pytest.fixture
def checklist_templates() -> list[ChecklistTemplate]:
    """Template library covering every planner rule."""
    return [
        make_template("tpl-kitchen-precon", "Kitchen Pre-Construction", "precon", ["kitchen"], "kitchen_remodel"),
        make_template("tpl-kitchen-rough", "Kitchen Rough-In Inspection", "rough", ["kitchen"], "kitchen_remodel"),
        make_template("tpl-kitchen-finish", "Kitchen Finish QC", "finish", ["kitchen"], "kitchen_remodel"),
        make_template("tpl-bath-precon", "Bath Pre-Construction", "precon", ["bath"], "bath_remodel"),
        make_template("tpl-bath-finish", "Bath Finish QC", "finish", ["bath"], "bath_remodel"),
        make_template(
            "tpl-waterproofing", "Shower Waterproofing Inspection", "rough", ["bath", "waterproofing"], "bath_remodel"
        ),
        make_template("tpl-curbless", "Curbless Shower Checklist", "rough", ["bath", "curbless"], "bath_remodel"),
        make_template("tpl-plumbing-rough", "Rough Plumbing Inspection", "rough", ["plumbing"]),
        make_template("tpl-structural", "Structural Framing Inspection", "rough", ["structural"]),
        make_template("tpl-electrical", "Electrical Rough Inspection", "rough", ["electrical"]),
        make_template("tpl-occupied", "Occupied Home Daily Closeout", "rough", ["occupied"]),
        make_template("tpl-exterior", "Exterior Envelope Check", "rough", ["exterior"]),
        make_template("tpl-full-home-precon", "Full Home Pre-Construction", "precon", [], "full_home_remodel"),
        make_template("tpl-final", "Final Walkthrough", "punch", ["final", "walkthrough"], item_count=5),
    ]


@pytest.fixture
def bath_records() -> list[ScopeRecord]:
    """Primary bath with a curbless shower."""
    return [
        make_record(
            "scope-bath",
            "Primary Bath",
            make_item("ci-1", "PL-200", "linear drain"),
            make_item("ci-2", "TL-100", "Porcelain floor tile"),
        )
    ]


@pytest.fixture
def kitchen_records() -> list[ScopeRecord]:
    """Kitchen with a wall removal and a heavy electrical scope."""
    return [
        make_record(
            "scope-kitchen",
            "Kitchen",
            make_item("ci-1", "DEMO-01", "Wall removal"),
            make_item("ci-2", "EL-100", "Recessed lighting"),
            make_item("ci-3", "EL-110", "New circuit"),
            make_item("ci-4", "EL-120", "Outlet relocation"),
            make_item("ci-5", "CAB-01", "Cabinet install"),
        )
    ]


@pytest.fixture(autouse=True)
def setup_test_env(monkeypatch):
    """Set up test environment variables."""
    for name in (
        "LOG_FORMAT",
        "JSON_LOGS",
        "CHECKPLAN_CATALOG_PATH",
        "CHECKPLAN_DEFAULT_PROJECT_TYPE",
        "CHECKPLAN_MEDIUM_RISK_SCORE",
        "CHECKPLAN_INCLUDE_MATRIX",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    reset_config()
    yield
    reset_config()
