"""Domain models for the escape room quiz."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(slots=True)
class Question:
    """Multiple-choice question; the correct index refers to the current choice order."""

    id: int | str
    text: str
    choices: list[str]
    correct_choice_index: int

    @classmethod
    def from_wire(cls, data: dict[str, object]) -> "Question":
        return cls(
            id=data["id"],
            text=str(data["text"]),
            choices=[str(choice) for choice in data["choices"]],
            correct_choice_index=int(data["answerIndex"]),
        )

    def to_wire(self) -> dict[str, object]:
        return {
            "id": self.id,
            "text": self.text,
            "choices": list(self.choices),
            "answerIndex": self.correct_choice_index,
        }


@dataclass(slots=True)
class QuizSession:
    """In-progress state of one student playing one level."""

    level: int
    student_id: str
    questions: list[Question]
    selected_answers: list[int | None]
    current_index: int = 0
    remaining_seconds: int = 0
    submitted: bool = False
    violation_count: int = 0

    @classmethod
    def fresh(
        cls,
        level: int,
        student_id: str,
        questions: list[Question],
        duration_seconds: int,
    ) -> "QuizSession":
        return cls(
            level=level,
            student_id=student_id,
            questions=list(questions),
            selected_answers=[None] * len(questions),
            current_index=0,
            remaining_seconds=duration_seconds,
        )

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> Question:
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return self.current_index >= len(self.questions) - 1

    def score(self) -> int:
        """Count answers matching the correct choice; unanswered counts as incorrect."""
        return sum(
            1
            for answer, question in zip(self.selected_answers, self.questions)
            if answer is not None and answer == question.correct_choice_index
        )


@dataclass(slots=True)
class ViolationState:
    """Integrity violation bookkeeping owned by a single session."""

    count: int = 0
    last_event_ms: float | None = None
    warning_visible: bool = False
    forced_submission_pending: bool = False
    last_reason: str | None = None


@dataclass(frozen=True, slots=True)
class PlayerIdentity:
    """Who is playing, as returned by the login endpoint."""

    student_id: str
    name: str = "Player"
    college: str = "College"


@dataclass(frozen=True, slots=True)
class ScoreSubmission:
    """Payload sent to the backend score-submission endpoint."""

    student_id: str
    level: int
    score: int
    time_taken: int
    total_questions: int

    def to_payload(self) -> dict[str, object]:
        return {
            "studentID": self.student_id,
            "level": self.level,
            "score": self.score,
            "timeTaken": self.time_taken,
            "totalQuestions": self.total_questions,
        }


@dataclass(frozen=True, slots=True)
class TerminalResult:
    """Hand-off to the results screen once a level has been submitted."""

    student_id: str
    name: str
    college: str
    level: int
    score: int
    total: int
    time_taken: int
    forced: bool = False
    finished_at: datetime = field(default_factory=datetime.utcnow)

    def to_payload(self) -> dict[str, object]:
        return {
            "studentID": self.student_id,
            "name": self.name,
            "college": self.college,
            "level": self.level,
            "score": self.score,
            "total": self.total,
            "timeTaken": self.time_taken,
        }


@dataclass(slots=True)
class RegisteredStudent:
    """Student registered through the login endpoint."""

    student_id: str
    name: str
    college: str
    registered_at: datetime


@dataclass(slots=True)
class LeaderboardRow:
    """Immutable leaderboard snapshot row."""

    student_id: str
    name: str
    college: str
    score: int
    total: int
    time_taken: int

    def to_payload(self) -> dict[str, object]:
        return {
            "id": self.student_id,
            "name": self.name,
            "college": self.college,
            "score": self.score,
            "total": self.total,
            "timeTaken": self.time_taken,
        }
