"""checkplan - smart QC checklist planning from remodel estimate scope."""

__version__ = "0.1.0"
