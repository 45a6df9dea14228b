"""Terminal transition of a level session: score, submit, hand off."""

from __future__ import annotations

from enum import Enum, auto
import logging
from typing import Callable, Protocol

from escape_room.constants.quiz_constants import LevelConfig
from escape_room.core.models import PlayerIdentity, QuizSession, ScoreSubmission, TerminalResult
from escape_room.core.scheduling import Scheduler
from escape_room.core.services.session_store import SessionStore, session_key

logger = logging.getLogger(__name__)


class ScoreSink(Protocol):
    def submit_score(self, submission: ScoreSubmission) -> object: ...


class SubmissionPhase(Enum):
    IDLE = auto()
    IN_FLIGHT = auto()
    SUCCEEDED = auto()
    FAILED = auto()


def build_submission(session: QuizSession, duration_seconds: int) -> ScoreSubmission:
    return ScoreSubmission(
        student_id=session.student_id,
        level=session.level,
        score=session.score(),
        time_taken=duration_seconds - session.remaining_seconds,
        total_questions=session.total_questions,
    )


class SubmissionController:
    """Submits a session's score at most once.

    The ``submitted`` flag is checked and set before any I/O happens, so a
    timer expiry racing a manual submit (or a forced submission) can only
    produce one backend call. The snapshot is cleared before the call; a
    failed call is not retried automatically, but ``retry`` lets the player
    resend the retained payload.
    """

    def __init__(
        self,
        config: LevelConfig,
        player: PlayerIdentity,
        backend: ScoreSink,
        store: SessionStore,
        scheduler: Scheduler,
        on_success: Callable[[TerminalResult], None],
        on_failure: Callable[[Exception], None],
    ) -> None:
        self._config = config
        self._player = player
        self._backend = backend
        self._store = store
        self._scheduler = scheduler
        self._on_success = on_success
        self._on_failure = on_failure
        self._phase = SubmissionPhase.IDLE
        self._pending: ScoreSubmission | None = None
        self._forced = False

    @property
    def phase(self) -> SubmissionPhase:
        return self._phase

    @property
    def pending_submission(self) -> ScoreSubmission | None:
        return self._pending

    def submit(
        self,
        session: QuizSession,
        *,
        forced: bool = False,
        stop_timer: Callable[[], None] | None = None,
    ) -> bool:
        if session.submitted or not session.questions:
            return False

        if stop_timer is not None:
            stop_timer()
        session.submitted = True
        self._store.clear(session_key(session.level, session.student_id))

        self._pending = build_submission(session, self._config.duration_seconds)
        self._forced = forced
        logger.info(
            "Submitting level %s for student %s: %s/%s in %ss%s",
            session.level,
            session.student_id,
            self._pending.score,
            self._pending.total_questions,
            self._pending.time_taken,
            " (forced)" if forced else "",
        )
        self._send()
        return True

    def retry(self) -> bool:
        if self._phase is not SubmissionPhase.FAILED or self._pending is None:
            return False
        logger.info("Retrying score submission for level %s", self._pending.level)
        self._send()
        return True

    def _send(self) -> None:
        submission = self._pending
        self._phase = SubmissionPhase.IN_FLIGHT
        self._scheduler.run_io(
            lambda: self._backend.submit_score(submission),
            lambda _ack: self._handle_success(submission),
            self._handle_failure,
        )

    def _handle_success(self, submission: ScoreSubmission) -> None:
        self._phase = SubmissionPhase.SUCCEEDED
        result = TerminalResult(
            student_id=self._player.student_id,
            name=self._player.name,
            college=self._player.college,
            level=submission.level,
            score=submission.score,
            total=submission.total_questions,
            time_taken=submission.time_taken,
            forced=self._forced,
        )
        self._on_success(result)

    def _handle_failure(self, exc: Exception) -> None:
        self._phase = SubmissionPhase.FAILED
        logger.error("Score submission failed: %s", exc)
        self._on_failure(exc)
