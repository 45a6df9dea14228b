"""Durable snapshots of in-progress level sessions for reload recovery.

Snapshot layout (JSON, one document per student and level)::

    {
      "questions": [{"id": ..., "text": ..., "choices": [...], "answerIndex": 2}, ...],
      "selectedAnswers": [1, null, ...],
      "currentIndex": 3,
      "time": 120,
      "submitted": false,
      "violationCount": 1
    }

The active level screen is the only writer. Reads happen once, when a level
screen mounts, so last-writer-wins needs no locking.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from escape_room.core.models import Question, QuizSession

logger = logging.getLogger(__name__)


def session_key(level: int, student_id: str) -> str:
    return f"level{level}_state_v1_{student_id}"


class QuestionSnapshot(BaseModel):
    id: int | str
    text: str
    choices: list[str]
    answerIndex: int


class SessionSnapshot(BaseModel):
    """Serialized mirror of a QuizSession."""

    model_config = ConfigDict(populate_by_name=True)

    questions: list[QuestionSnapshot]
    selected_answers: list[int | None] = Field(default_factory=list, alias="selectedAnswers")
    current_index: int = Field(default=0, alias="currentIndex")
    time: int
    submitted: bool = False
    violation_count: int = Field(default=0, alias="violationCount")

    @classmethod
    def from_session(cls, session: QuizSession) -> "SessionSnapshot":
        return cls(
            questions=[QuestionSnapshot(**question.to_wire()) for question in session.questions],
            selected_answers=list(session.selected_answers),
            current_index=session.current_index,
            time=session.remaining_seconds,
            submitted=session.submitted,
            violation_count=session.violation_count,
        )

    def to_session(self, level: int, student_id: str, duration_seconds: int) -> QuizSession:
        questions = [Question.from_wire(question.model_dump()) for question in self.questions]
        total = len(questions)
        selected = list(self.selected_answers[:total])
        selected.extend([None] * (total - len(selected)))
        return QuizSession(
            level=level,
            student_id=student_id,
            questions=questions,
            selected_answers=selected,
            current_index=min(max(self.current_index, 0), total - 1),
            remaining_seconds=min(max(self.time, 0), duration_seconds),
            submitted=self.submitted,
            violation_count=max(self.violation_count, 0),
        )


class SessionStore:
    """Key/value persistence for session snapshots.

    Subclasses implement the raw ``_read``/``_write``/``clear`` primitives;
    validation and conversion live here.
    """

    def restore(self, level: int, student_id: str, duration_seconds: int) -> QuizSession | None:
        key = session_key(level, student_id)
        raw = self._read(key)
        if raw is None:
            return None
        try:
            snapshot = SessionSnapshot.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding unreadable snapshot %s: %s", key, exc)
            self.clear(key)
            return None
        if not snapshot.questions or snapshot.submitted:
            logger.info("Discarding stale snapshot %s", key)
            self.clear(key)
            return None
        return snapshot.to_session(level, student_id, duration_seconds)

    def persist(self, session: QuizSession) -> None:
        key = session_key(session.level, session.student_id)
        snapshot = SessionSnapshot.from_session(session)
        self._write(key, snapshot.model_dump_json(by_alias=True))

    def clear(self, key: str) -> None:
        raise NotImplementedError

    def _read(self, key: str) -> str | None:
        raise NotImplementedError

    def _write(self, key: str, document: str) -> None:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Keeps serialized snapshots in a dict; survives controller instances, not processes."""

    def __init__(self) -> None:
        self._documents: dict[str, str] = {}

    def keys(self) -> list[str]:
        return list(self._documents)

    def raw(self, key: str) -> str | None:
        return self._documents.get(key)

    def clear(self, key: str) -> None:
        self._documents.pop(key, None)

    def _read(self, key: str) -> str | None:
        return self._documents.get(key)

    def _write(self, key: str, document: str) -> None:
        self._documents[key] = document


class JsonFileSessionStore(SessionStore):
    """Writes one JSON file per snapshot key under ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def clear(self, key: str) -> None:
        try:
            self.path_for(key).unlink()
        except FileNotFoundError:
            pass

    def _read(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to read snapshot %s: %s", path, exc)
            return None

    def _write(self, key: str, document: str) -> None:
        path = self.path_for(key)
        # Readers never see a partially written snapshot.
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(document)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
