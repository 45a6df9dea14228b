"""Service for storing level scores and ranking them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from escape_room.core.models import LeaderboardRow, RegisteredStudent


@dataclass(slots=True)
class ScoreEntry:
    """Mutable score record for one student on one level."""

    student_id: str
    level: int
    score: int
    total_questions: int
    time_taken: int
    last_updated: datetime = field(default_factory=datetime.utcnow)


class Scoreboard:
    """Keeps the latest score per student and level."""

    def __init__(self) -> None:
        self._scores: dict[tuple[str, int], ScoreEntry] = {}

    def record_score(
        self,
        student_id: str,
        level: int,
        score: int,
        time_taken: int,
        total_questions: int,
    ) -> ScoreEntry:
        """Insert or overwrite the score for ``(student_id, level)``."""
        entry = ScoreEntry(
            student_id=student_id,
            level=level,
            score=score,
            total_questions=total_questions,
            time_taken=time_taken,
        )
        self._scores[(student_id, level)] = entry
        return entry

    def get_score(self, student_id: str, level: int) -> ScoreEntry | None:
        return self._scores.get((student_id, level))

    def get_leaderboard(
        self,
        level: int,
        students: dict[str, RegisteredStudent],
        limit: int | None = None,
    ) -> list[LeaderboardRow]:
        """Rows for ``level`` sorted by score (desc) then time taken (asc)."""
        entries = sorted(
            (entry for entry in self._scores.values() if entry.level == level),
            key=lambda e: (-e.score, e.time_taken),
        )
        rows = []
        for entry in entries:
            student = students.get(entry.student_id)
            if student is None:
                continue
            rows.append(
                LeaderboardRow(
                    student_id=entry.student_id,
                    name=student.name,
                    college=student.college,
                    score=entry.score,
                    total=entry.total_questions,
                    time_taken=entry.time_taken,
                )
            )
        return rows if limit is None else rows[:limit]

    def clear(self) -> None:
        """Reset all scores."""
        self._scores.clear()
