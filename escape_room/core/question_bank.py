"""Loading and validation of the per-level question banks served by the backend.

Directory layout::

    questions/
      level1.json
      level2.json
      level3.json

Each file holds a JSON array of questions:

    [
      {"id": 1, "text": "What is 2 + 2?", "choices": ["3", "4", "5", "22"], "answerIndex": 1},
      ...
    ]

A missing level file yields an empty bank for that level; the client turns
an empty bank into a blocking error for the player.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import re

from escape_room.core.models import Question

logger = logging.getLogger(__name__)

_LEVEL_FILE_PATTERN = re.compile(r"^level(\d+)\.json$")


class QuestionBankError(Exception):
    """Raised when a question bank file cannot be parsed or validated."""


@dataclass(slots=True)
class QuestionBank:
    """All loaded levels keyed by level number."""

    source_dir: Path
    levels: dict[int, list[Question]]

    def questions_for(self, level: int) -> list[Question]:
        return list(self.levels.get(level, []))

    def to_wire(self) -> dict[str, list[dict[str, object]]]:
        return {
            f"level{level}": [question.to_wire() for question in questions]
            for level, questions in sorted(self.levels.items())
        }


def load_question_bank(directory: Path) -> QuestionBank:
    if not directory.is_dir():
        raise QuestionBankError(f"Question directory not found: {directory}")
    levels: dict[int, list[Question]] = {}
    for path in sorted(directory.iterdir()):
        match = _LEVEL_FILE_PATTERN.match(path.name)
        if not match:
            continue
        level = int(match.group(1))
        levels[level] = load_level_file(path, level)
        logger.info("Loaded %s questions for level %s", len(levels[level]), level)
    return QuestionBank(source_dir=directory, levels=levels)


def load_level_file(path: Path, level: int) -> list[Question]:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise QuestionBankError(f"Level {level}: cannot read {path.name}: {exc}") from exc
    if not isinstance(raw, list):
        raise QuestionBankError(f"Level {level}: {path.name} must contain a JSON array.")
    return [_parse_entry(entry, level, position) for position, entry in enumerate(raw, start=1)]


def _parse_entry(entry: object, level: int, position: int) -> Question:
    where = f"Level {level}, question {position}"
    if not isinstance(entry, dict):
        raise QuestionBankError(f"{where}: expected an object.")

    text = str(entry.get("text", "")).strip()
    if not text:
        raise QuestionBankError(f"{where}: question text cannot be empty.")

    choices = entry.get("choices")
    if not isinstance(choices, list) or len(choices) < 2:
        raise QuestionBankError(f"{where}: at least two choices are required.")
    cleaned = [str(choice).strip() for choice in choices]
    if any(not choice for choice in cleaned):
        raise QuestionBankError(f"{where}: choice text cannot be empty.")

    answer_index = entry.get("answerIndex")
    if not isinstance(answer_index, int) or isinstance(answer_index, bool):
        raise QuestionBankError(f"{where}: answerIndex must be an integer.")
    if not 0 <= answer_index < len(cleaned):
        raise QuestionBankError(f"{where}: answerIndex {answer_index} is out of range.")

    return Question(
        id=entry.get("id", position),
        text=text,
        choices=cleaned,
        correct_choice_index=answer_index,
    )


def load_rules(path: Path) -> list[str]:
    """Read the rules list; failures are logged and yield no rules."""
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error("Failed to load rules from %s: %s", path, exc)
        return []
    if isinstance(raw, dict):
        raw = raw.get("rules", [])
    if not isinstance(raw, list):
        logger.error("Rules file %s must contain a list", path)
        return []
    return [str(rule) for rule in raw]
