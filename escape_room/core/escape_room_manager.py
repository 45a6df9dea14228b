"""Backend business logic shared by all API routes."""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
import secrets
from threading import Lock

from escape_room.constants.network_constants import (
    ADMIN_TOKEN_TTL_SECONDS,
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
)
from escape_room.constants.quiz_constants import LEVEL_PREREQUISITES, LEVELS
from escape_room.core.models import LeaderboardRow, Question, RegisteredStudent
from escape_room.core.question_bank import QuestionBank
from escape_room.core.services.player_registry import PlayerRegistry
from escape_room.core.services.scoreboard import ScoreEntry, Scoreboard

logger = logging.getLogger(__name__)


class EscapeRoomManager:
    """Facade for backend services: question bank, registry, scoreboard and admin sessions."""

    def __init__(
        self,
        question_bank: QuestionBank,
        rules: list[str] | None = None,
        admin_username: str = DEFAULT_ADMIN_USERNAME,
        admin_password: str = DEFAULT_ADMIN_PASSWORD,
    ) -> None:
        self._lock = Lock()

        # Services
        self._bank = question_bank
        self._rules = list(rules or [])
        self._registry = PlayerRegistry()
        self._scoreboard = Scoreboard()

        self._admin_username = admin_username.strip().lower()
        self._admin_password = admin_password.strip()
        self._admin_tokens: dict[str, datetime] = {}

    # --- Questions & Rules ---

    def get_all_questions(self) -> dict[str, list[dict[str, object]]]:
        with self._lock:
            return self._bank.to_wire()

    def get_questions(self, level: int) -> list[Question]:
        with self._lock:
            return self._bank.questions_for(level)

    def get_rules(self) -> list[str]:
        with self._lock:
            return list(self._rules)

    # --- Players ---

    def login(self, name: str, college: str) -> RegisteredStudent:
        with self._lock:
            student = self._registry.register_student(name, college)
            logger.info("Registered student %s (%s)", student.student_id, student.college)
            return student

    # --- Scores ---

    def submit_score(
        self,
        student_id: str,
        level: int,
        score: int,
        time_taken: int,
        total_questions: int,
    ) -> ScoreEntry:
        with self._lock:
            if not self._registry.has_student(student_id):
                raise LookupError(f"Unknown student: {student_id}")
            if level not in LEVELS:
                raise ValueError(f"Unknown level: {level}")
            if total_questions < 0 or not 0 <= score <= total_questions:
                raise ValueError("Score must be between 0 and the number of questions.")
            if time_taken < 0:
                raise ValueError("Time taken cannot be negative.")
            entry = self._scoreboard.record_score(student_id, level, score, time_taken, total_questions)
            logger.info(
                "Saved level %s score %s/%s for student %s",
                level,
                score,
                total_questions,
                student_id,
            )
            return entry

    def get_player_score(self, student_id: str, level: int) -> ScoreEntry | None:
        with self._lock:
            return self._scoreboard.get_score(student_id, level)

    def get_leaderboard(self, level: int) -> list[LeaderboardRow]:
        with self._lock:
            students = {s.student_id: s for s in self._registry.get_students()}
            return self._scoreboard.get_leaderboard(level, students)

    def is_eligible(self, student_id: str, level: int) -> bool:
        with self._lock:
            prerequisite = LEVEL_PREREQUISITES.get(level)
            if prerequisite is None:
                return True
            entry = self._scoreboard.get_score(student_id, prerequisite)
            required = LEVELS[prerequisite].qualification_score
            return entry is not None and entry.score >= required

    # --- Admin ---

    def admin_login(self, username: str, password: str) -> str | None:
        with self._lock:
            if username.strip().lower() != self._admin_username:
                return None
            if not secrets.compare_digest(password.strip(), self._admin_password):
                return None
            now = datetime.utcnow()
            for expired in [t for t, expires_at in self._admin_tokens.items() if expires_at <= now]:
                del self._admin_tokens[expired]
            token = secrets.token_urlsafe(32)
            self._admin_tokens[token] = now + timedelta(seconds=ADMIN_TOKEN_TTL_SECONDS)
            return token

    def is_admin_token_valid(self, token: str) -> bool:
        with self._lock:
            expires_at = self._admin_tokens.get(token)
            if expires_at is None:
                return False
            if expires_at <= datetime.utcnow():
                del self._admin_tokens[token]
                return False
            return True

    def reset_leaderboard(self) -> None:
        with self._lock:
            self._scoreboard.clear()
            logger.warning("Leaderboard scores reset by admin")
