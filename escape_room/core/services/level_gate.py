"""Sequential unlocking of levels from a player's recorded scores."""

from __future__ import annotations

from escape_room.constants.quiz_constants import FINAL_LEVEL, LEVELS


def is_qualified(level: int, scores: dict[int, int]) -> bool:
    score = scores.get(level)
    return score is not None and score >= LEVELS[level].qualification_score


def is_level_locked(level: int, scores: dict[int, int]) -> bool:
    """A level opens once the previous one is qualified and closes again once
    it is qualified itself. The final level never closes.

    ``scores`` maps level number to the player's best recorded score; levels
    the player has not played are absent.
    """
    if level not in LEVELS:
        return True
    previous = level - 1
    if previous in LEVELS and not is_qualified(previous, scores):
        return True
    if level == FINAL_LEVEL:
        return False
    return is_qualified(level, scores)


def level_status(level: int, scores: dict[int, int]) -> str:
    score = scores.get(level)
    if score is not None:
        status = f"Score: {score}"
        if is_qualified(level, scores):
            status += " (qualified)"
        return status
    if is_level_locked(level, scores) and level - 1 in LEVELS:
        return f"Requires Level {level - 1} score >= {LEVELS[level - 1].qualification_score}"
    return "Not played yet"
