"""Randomized ordering of questions and of each question's choices."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

from escape_room.core.models import Question

T = TypeVar("T")


def shuffle_sequence(items: Sequence[T], rng: random.Random) -> list[T]:
    """Return a Fisher-Yates permutation of ``items`` without touching the input."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def shuffle_choices(
    choices: Sequence[str],
    correct_index: int,
    rng: random.Random,
) -> tuple[list[str], int]:
    """Permute choices and return them with the relocated correct index."""
    combined = shuffle_sequence(list(enumerate(choices)), rng)
    shuffled_choices = [choice for _, choice in combined]
    original_order = [index for index, _ in combined]
    try:
        new_correct_index = original_order.index(correct_index)
    except ValueError:
        new_correct_index = -1
    return shuffled_choices, new_correct_index


def shuffle_question(question: Question, rng: random.Random) -> Question:
    choices, correct_index = shuffle_choices(question.choices, question.correct_choice_index, rng)
    return Question(
        id=question.id,
        text=question.text,
        choices=choices,
        correct_choice_index=correct_index,
    )


def shuffle_questions(questions: Sequence[Question], rng: random.Random) -> list[Question]:
    return shuffle_sequence(questions, rng)
