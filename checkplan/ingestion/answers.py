"""Q&A answer ingestion."""

from __future__ import annotations

import logging
from pathlib import Path

from checkplan.ingestion.files import check_file, read_document
from checkplan.models import AnswerSet, AnswerValidationError

logger = logging.getLogger(__name__)


def load_answers(file_path: Path) -> AnswerSet:
    """Load answers from a JSON/YAML file.

    The file holds either a question-code -> value mapping or a list of
    stored answer records (`question_code` plus `value_json`,
    `value_boolean` or `value_text`).

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the file does not parse
        AnswerValidationError: If an answer value has an unsupported type
    """
    check_file(file_path, "Answers")
    data = read_document(file_path)

    if data is None:
        answers = AnswerSet()
    elif isinstance(data, list):
        if not all(isinstance(record, dict) for record in data):
            raise AnswerValidationError(f"Expected answer records (mappings) in {file_path}")
        answers = AnswerSet.from_records(data)
    elif isinstance(data, dict):
        answers = AnswerSet.from_mapping(data)
    else:
        raise AnswerValidationError(f"Expected a mapping or list of answers in {file_path}")

    logger.info("Loaded %d answers from %s", len(answers.answers), file_path)
    return answers
