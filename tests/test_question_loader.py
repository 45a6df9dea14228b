from __future__ import annotations

import random

import pytest

from escape_room.core.services.question_loader import EmptyBankError, prepare_session

from fakes import FakeBackend, make_bank


def test_subset_is_distinct_and_sized():
    bank = make_bank(12)
    questions = prepare_session(1, FakeBackend({1: bank}), question_count=8, rng=random.Random(4))

    assert len(questions) == 8
    assert len({q.id for q in questions}) == 8
    originals = {q.id: q for q in bank}
    for question in questions:
        original = originals[question.id]
        assert question.choices[question.correct_choice_index] == original.choices[original.correct_choice_index]


def test_small_bank_uses_every_question(caplog):
    questions = prepare_session(1, FakeBackend({1: make_bank(5)}), question_count=8)

    assert sorted(q.id for q in questions) == [1, 2, 3, 4, 5]
    assert "using all of them" in caplog.text


def test_empty_bank_raises():
    with pytest.raises(EmptyBankError, match="No questions available for Level 3."):
        prepare_session(3, FakeBackend({}))


def test_backend_errors_propagate():
    backend = FakeBackend()
    backend.questions_error = ConnectionError("down")

    with pytest.raises(ConnectionError):
        prepare_session(1, backend)
