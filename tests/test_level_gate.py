from __future__ import annotations

import pytest

from escape_room.core.services.level_gate import is_level_locked, is_qualified, level_status


@pytest.mark.parametrize(
    "scores, expected",
    [
        ({}, {1: False, 2: True, 3: True}),
        ({1: 3}, {1: False, 2: True, 3: True}),
        ({1: 4}, {1: True, 2: False, 3: True}),
        ({1: 4, 2: 5}, {1: True, 2: False, 3: True}),
        ({1: 4, 2: 6}, {1: True, 2: True, 3: False}),
        ({1: 8, 2: 8, 3: 8}, {1: True, 2: True, 3: False}),
        ({2: 6}, {1: False, 2: True, 3: False}),
    ],
)
def test_levels_unlock_in_sequence(scores, expected):
    assert {level: is_level_locked(level, scores) for level in (1, 2, 3)} == expected


def test_unknown_level_is_locked():
    assert is_level_locked(9, {1: 8, 2: 8, 3: 8})


def test_qualification_uses_level_threshold():
    assert not is_qualified(2, {2: 5})
    assert is_qualified(2, {2: 6})
    assert not is_qualified(1, {})


def test_status_text():
    scores = {1: 4}
    assert level_status(1, scores) == "Score: 4 (qualified)"
    assert level_status(2, scores) == "Not played yet"
    assert level_status(3, scores) == "Requires Level 2 score >= 6"
    assert level_status(2, {1: 4, 2: 3}) == "Score: 3"
