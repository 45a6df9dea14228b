"""Builds the randomized question set a level session starts with."""

from __future__ import annotations

import logging
import random
from typing import Protocol

from escape_room.constants.quiz_constants import QUESTIONS_PER_LEVEL
from escape_room.core.models import Question
from escape_room.core.shuffle_engine import shuffle_question, shuffle_questions

logger = logging.getLogger(__name__)


class EmptyBankError(Exception):
    """Raised when the backend returns no questions for a level."""

    def __init__(self, level: int) -> None:
        super().__init__(f"No questions available for Level {level}.")
        self.level = level


class QuestionSource(Protocol):
    def get_questions(self, level: int) -> list[Question]: ...


def prepare_session(
    level: int,
    source: QuestionSource,
    *,
    question_count: int = QUESTIONS_PER_LEVEL,
    rng: random.Random | None = None,
) -> list[Question]:
    """Fetch the bank for ``level`` and return a shuffled subset with shuffled choices.

    A bank smaller than ``question_count`` is not an error: the subset shrinks
    to the bank size.
    """
    bank = source.get_questions(level)
    if not bank:
        raise EmptyBankError(level)

    rng = rng or random.Random()
    subset_size = min(question_count, len(bank))
    if subset_size < question_count:
        logger.warning(
            "Level %s bank has %s questions; using all of them instead of %s",
            level,
            len(bank),
            question_count,
        )

    subset = shuffle_questions(bank, rng)[:subset_size]
    return [shuffle_question(question, rng) for question in subset]
