"""Shared file checks and JSON/YAML readers for ingestion."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

MAX_FILE_SIZE_MB = 50
MAX_ROWS = 50000

JSON_SUFFIXES = (".json",)
YAML_SUFFIXES = (".yaml", ".yml")
TABULAR_SUFFIXES = (".csv", ".xlsx", ".xls")


def check_file(file_path: Path, kind: str) -> None:
    """Raise if the file is missing or over the size limit.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file is too large
    """
    if not file_path.exists():
        raise FileNotFoundError(f"{kind} file not found: {file_path}")

    file_size_mb = file_path.stat().st_size / (1024 * 1024)
    if file_size_mb > MAX_FILE_SIZE_MB:
        raise ValueError(
            f"File too large ({file_size_mb:.1f}MB). Maximum allowed: {MAX_FILE_SIZE_MB}MB"
        )


def check_row_count(count: int) -> None:
    if count > MAX_ROWS:
        raise ValueError(f"Too many rows ({count:,}). Maximum allowed: {MAX_ROWS:,}")


def read_document(file_path: Path) -> Any:
    """Parse a JSON or YAML file.

    Raises:
        ValueError: If the suffix is unsupported or the content does not parse
    """
    suffix = file_path.suffix.lower()
    text = file_path.read_text(encoding="utf-8")

    if suffix in JSON_SUFFIXES:
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e

    if suffix in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    raise ValueError(f"Unsupported file format: {file_path.suffix}. Use JSON or YAML.")


def unwrap_list(data: Any, key: str, file_path: Path) -> list:
    """Accept either a bare list or a mapping holding the list under `key`."""
    if isinstance(data, dict) and key in data:
        data = data[key]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of {key} in {file_path}")
    check_row_count(len(data))
    return data
