"""checkplan configuration management.

Loads configuration from environment variables with sensible defaults.
Only the calling layer (CLI, ingestion) reads configuration; the inference
engine receives everything it needs as arguments.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

_PROJECT_TYPES = {"kitchen_remodel", "bath_remodel", "full_home_remodel", "other"}


@dataclass
class PlannerConfig:
    """Planner thresholds and switches."""

    medium_risk_score: int = 60  # global score at which checklists become medium risk
    include_matrix: bool = True  # build area x trade checklists in `plan`
    default_project_type: str = "other"


@dataclass
class CatalogConfig:
    """Area/trade checklist catalog source."""

    path: Path | None = None  # None = built-in catalog


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    log_format: str = "text"  # text or json

    planner: PlannerConfig = field(default_factory=PlannerConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - LOG_LEVEL: Logging verbosity (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text"); JSON_LOGS=true forces json
        - CHECKPLAN_CATALOG_PATH: YAML catalog replacing the built-in one
        - CHECKPLAN_DEFAULT_PROJECT_TYPE: project type used when none is given
        - CHECKPLAN_MEDIUM_RISK_SCORE: risk score threshold for medium checklists
        - CHECKPLAN_INCLUDE_MATRIX: build per-area checklists (default: "true")

        Raises:
            ValueError: If a numeric setting or project type is invalid
        """
        log_format = os.getenv("LOG_FORMAT", "text").lower()
        if os.getenv("JSON_LOGS", "false").lower() == "true":
            log_format = "json"
        if log_format not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got '{log_format}'")

        raw_score = os.getenv("CHECKPLAN_MEDIUM_RISK_SCORE", "60")
        try:
            medium_risk_score = int(raw_score)
        except ValueError:
            raise ValueError(
                f"CHECKPLAN_MEDIUM_RISK_SCORE must be an integer, got '{raw_score}'"
            ) from None
        if not 0 <= medium_risk_score <= 100:
            raise ValueError("CHECKPLAN_MEDIUM_RISK_SCORE must be between 0 and 100")

        default_project_type = os.getenv("CHECKPLAN_DEFAULT_PROJECT_TYPE", "other")
        if default_project_type not in _PROJECT_TYPES:
            raise ValueError(
                f"CHECKPLAN_DEFAULT_PROJECT_TYPE must be one of "
                f"{sorted(_PROJECT_TYPES)}, got '{default_project_type}'"
            )

        catalog_path = os.getenv("CHECKPLAN_CATALOG_PATH")

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=log_format,
            planner=PlannerConfig(
                medium_risk_score=medium_risk_score,
                include_matrix=os.getenv("CHECKPLAN_INCLUDE_MATRIX", "true").lower()
                == "true",
                default_project_type=default_project_type,
            ),
            catalog=CatalogConfig(
                path=Path(catalog_path) if catalog_path else None,
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If environment values are invalid
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() re-reads the env."""
    global _config
    _config = None
