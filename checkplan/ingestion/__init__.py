"""Data ingestion module for checkplan.

Loads estimate scope records, Q&A answers and checklist templates from files.
"""

from checkplan.ingestion.answers import load_answers
from checkplan.ingestion.scope import load_scope_records
from checkplan.ingestion.templates import load_templates

__all__ = ["load_scope_records", "load_answers", "load_templates"]
