"""Reporting module for checkplan.

Writes planned checklists to JSON or CSV.
"""

from checkplan.reporting.export import export_plan, export_plan_csv, export_plan_json, plan_to_rows

__all__ = ["export_plan", "export_plan_csv", "export_plan_json", "plan_to_rows"]
