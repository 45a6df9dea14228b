"""Service for registering players who log in to the escape room."""

from __future__ import annotations

from datetime import datetime
from itertools import count

from escape_room.core.models import RegisteredStudent


class PlayerRegistry:
    """Issues student IDs and remembers who they belong to."""

    def __init__(self) -> None:
        self._students: dict[str, RegisteredStudent] = {}
        self._ids = count(1)

    def register_student(self, name: str, college: str) -> RegisteredStudent:
        """Register a new attempt; every login gets a fresh student ID."""
        cleaned_name = name.strip()
        cleaned_college = college.strip()
        if not cleaned_name or not cleaned_college:
            raise ValueError("Missing fields")

        student = RegisteredStudent(
            student_id=str(next(self._ids)),
            name=cleaned_name,
            college=cleaned_college,
            registered_at=datetime.utcnow(),
        )
        self._students[student.student_id] = student
        return student

    def has_student(self, student_id: str) -> bool:
        return student_id in self._students

    def get_students(self) -> list[RegisteredStudent]:
        return sorted(self._students.values(), key=lambda s: s.registered_at)
