"""Generic proctored level controller shared by every level screen.

One instance drives one level for one player: it restores or builds the
session, runs the countdown, routes integrity signals through the escalation
policy and performs the terminal submission exactly once. All callbacks run
on the UI thread; blocking I/O goes through ``Scheduler.run_io``.
"""

from __future__ import annotations

from enum import Enum, auto
import logging
import random
from typing import Protocol

from escape_room.constants.quiz_constants import DEFAULT_POLICY, LevelConfig, ProctoringPolicy
from escape_room.constants.ui_constants import (
    EMPTY_BANK_TEMPLATE,
    LOAD_FAILED_MESSAGE,
    NAVIGATION_BLOCKED_MESSAGE,
    SUBMISSION_FAILED_MESSAGE,
    VIOLATION_MESSAGE_TEMPLATE,
)
from escape_room.core.environment import EnvironmentMonitor
from escape_room.core.models import PlayerIdentity, Question, QuizSession, TerminalResult, ViolationState
from escape_room.core.scheduling import Scheduler, TimerHandle
from escape_room.core.services.countdown_timer import CountdownTimer
from escape_room.core.services.integrity_monitor import IntegrityMonitor
from escape_room.core.services.question_loader import EmptyBankError, QuestionSource, prepare_session
from escape_room.core.services.session_store import SessionStore
from escape_room.core.services.submission_controller import ScoreSink, SubmissionController
from escape_room.core.services.violation_policy import EscalationDecision, ViolationPolicy

logger = logging.getLogger(__name__)


class LevelBackend(QuestionSource, ScoreSink, Protocol):
    """Backend operations a level needs: fetch the bank, submit the score."""


class LevelView(Protocol):
    def show_ready_prompt(self, config: LevelConfig) -> None: ...

    def show_loading(self) -> None: ...

    def show_question(self, session: QuizSession) -> None: ...

    def update_timer(self, remaining_seconds: int) -> None: ...

    def show_warning(self, count: int, reason: str) -> None: ...

    def hide_warning(self) -> None: ...

    def show_violation_notice(self, message: str) -> None: ...

    def show_navigation_blocked(self, message: str) -> None: ...

    def show_error(self, message: str) -> None: ...

    def show_submitting(self) -> None: ...

    def show_results(self, result: TerminalResult) -> None: ...

    def show_submission_failed(self, message: str) -> None: ...


class LevelPhase(Enum):
    IDLE = auto()
    AWAITING_START = auto()
    LOADING = auto()
    IN_PROGRESS = auto()
    SUBMITTING = auto()
    COMPLETED = auto()
    SUBMISSION_FAILED = auto()
    ERROR = auto()


class LevelController:
    """State machine for one proctored level, parameterized by ``LevelConfig``."""

    def __init__(
        self,
        config: LevelConfig,
        player: PlayerIdentity,
        backend: LevelBackend,
        store: SessionStore,
        scheduler: Scheduler,
        environment: EnvironmentMonitor,
        view: LevelView,
        policy: ProctoringPolicy = DEFAULT_POLICY,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.player = player
        self._backend = backend
        self._store = store
        self._scheduler = scheduler
        self._environment = environment
        self._view = view
        self._rng = rng

        self._phase = LevelPhase.IDLE
        self._session: QuizSession | None = None
        self._timer: CountdownTimer | None = None
        self._forced_handle: TimerHandle | None = None
        self._ready = False
        self._mounted = False

        self._violations = ViolationPolicy(policy)
        self._integrity = IntegrityMonitor(
            environment,
            policy,
            on_violation=self._handle_violation,
            on_navigation_blocked=self._handle_navigation_blocked,
        )
        self._submission = SubmissionController(
            config,
            player,
            backend,
            store,
            scheduler,
            on_success=self._handle_submitted,
            on_failure=self._handle_submission_failed,
        )

    # --- Introspection ---

    @property
    def phase(self) -> LevelPhase:
        return self._phase

    @property
    def session(self) -> QuizSession | None:
        return self._session

    @property
    def violation_state(self) -> ViolationState:
        return self._violations.state

    @property
    def timer(self) -> CountdownTimer | None:
        return self._timer

    # --- Lifecycle ---

    def mount(self) -> None:
        """Attach monitors and restore the snapshot or fetch a fresh question set."""
        if self._mounted:
            return
        self._mounted = True
        self._integrity.attach()
        self._phase = LevelPhase.AWAITING_START
        self._view.show_ready_prompt(self.config)

        restored = self._store.restore(
            self.config.level,
            self.player.student_id,
            self.config.duration_seconds,
        )
        if restored is not None:
            logger.info(
                "Resuming level %s for student %s at question %s with %ss left",
                self.config.level,
                self.player.student_id,
                restored.current_index + 1,
                restored.remaining_seconds,
            )
            self._install_session(restored)
            return

        self._scheduler.run_io(
            lambda: prepare_session(
                self.config.level,
                self._backend,
                question_count=self.config.question_count,
                rng=self._rng,
            ),
            self._handle_questions_loaded,
            self._handle_load_failed,
        )

    def unmount(self) -> None:
        """Tear down timers and listeners; the snapshot stays for the next mount."""
        if not self._mounted:
            return
        self._mounted = False
        self._stop_timer()
        self._cancel_forced_submission()
        self._integrity.detach()

    def start(self) -> None:
        """Player acknowledged the proctored environment: go fullscreen, arm, start the clock."""
        if self._phase is not LevelPhase.AWAITING_START:
            return
        self._environment.request_fullscreen()
        self._ready = True
        self._integrity.arm()
        if self._session is None:
            self._phase = LevelPhase.LOADING
            self._view.show_loading()
            return
        self._begin()

    # --- Player actions ---

    def select_answer(self, choice_index: int) -> bool:
        session = self._session
        if self._phase is not LevelPhase.IN_PROGRESS or session is None or session.submitted:
            return False
        if not 0 <= choice_index < len(session.current_question.choices):
            raise ValueError(f"Choice index {choice_index} out of range")
        session.selected_answers[session.current_index] = choice_index
        self._persist()
        self._view.show_question(session)
        return True

    def next_question(self) -> bool:
        session = self._session
        if self._phase is not LevelPhase.IN_PROGRESS or session is None or session.submitted:
            return False
        if session.selected_answers[session.current_index] is None:
            return False
        if session.is_last_question:
            return self.submit()
        session.current_index += 1
        self._persist()
        self._view.show_question(session)
        return True

    def submit(self, forced: bool = False) -> bool:
        """Terminal transition; returns False when the session was already submitted."""
        session = self._session
        if session is None or session.submitted or not session.questions:
            return False
        self._cancel_forced_submission()
        self._integrity.finish()
        self._phase = LevelPhase.SUBMITTING
        self._view.show_submitting()
        return self._submission.submit(session, forced=forced, stop_timer=self._stop_timer)

    def dismiss_warning(self) -> None:
        if self._violations.dismiss_warning():
            self._view.hide_warning()
            self._environment.request_fullscreen()

    def retry_submission(self) -> bool:
        if self._phase is not LevelPhase.SUBMISSION_FAILED:
            return False
        self._phase = LevelPhase.SUBMITTING
        self._view.show_submitting()
        return self._submission.retry()

    # --- Internal transitions ---

    def _install_session(self, session: QuizSession) -> None:
        self._session = session
        state = self._violations.state
        state.count = max(state.count, session.violation_count)
        session.violation_count = state.count

        self._timer = CountdownTimer(
            self._scheduler,
            session.remaining_seconds,
            on_tick=self._handle_tick,
            on_expired=self._handle_expired,
        )

        if self._violations.threshold_reached():
            logger.warning(
                "Violation threshold already reached for level %s; submitting",
                self.config.level,
            )
            self.submit(forced=True)
            return
        if self._ready:
            self._begin()

    def _begin(self) -> None:
        session = self._session
        self._phase = LevelPhase.IN_PROGRESS
        self._view.show_question(session)
        self._view.update_timer(session.remaining_seconds)
        self._timer.start()

    def _handle_questions_loaded(self, questions: list[Question]) -> None:
        if not self._mounted:
            return
        session = QuizSession.fresh(
            self.config.level,
            self.player.student_id,
            questions,
            self.config.duration_seconds,
        )
        session.violation_count = self._violations.state.count
        self._session = session
        self._persist()
        self._install_session(session)

    def _handle_load_failed(self, exc: Exception) -> None:
        if not self._mounted:
            return
        if isinstance(exc, EmptyBankError):
            message = EMPTY_BANK_TEMPLATE.format(level=self.config.level)
        else:
            message = LOAD_FAILED_MESSAGE
        logger.error("Could not load level %s: %s", self.config.level, exc)
        self._integrity.finish()
        self._cancel_forced_submission()
        self._phase = LevelPhase.ERROR
        self._view.show_error(message)

    def _handle_tick(self, remaining_seconds: int) -> None:
        session = self._session
        if session is None or session.submitted:
            return
        session.remaining_seconds = remaining_seconds
        self._persist()
        self._view.update_timer(remaining_seconds)

    def _handle_expired(self) -> None:
        logger.info("Time is up for level %s", self.config.level)
        self.submit(forced=True)

    def _handle_violation(self, reason: str) -> None:
        session = self._session
        if session is not None and session.submitted:
            return
        decision = self._violations.on_violation(reason, self._scheduler.now_ms())
        if decision is EscalationDecision.IGNORED:
            return
        if session is not None:
            session.violation_count = self._violations.state.count
            self._persist()

        if decision is EscalationDecision.WARNING:
            self._view.show_warning(self._violations.state.count, reason)
            return

        self._view.show_violation_notice(VIOLATION_MESSAGE_TEMPLATE.format(reason=reason))
        self._forced_handle = self._scheduler.call_later(
            self._violations.policy.forced_submission_delay_ms,
            self._fire_forced_submission,
        )

    def _fire_forced_submission(self) -> None:
        self._forced_handle = None
        self.submit(forced=True)

    def _handle_navigation_blocked(self) -> None:
        self._view.show_navigation_blocked(NAVIGATION_BLOCKED_MESSAGE)

    def _handle_submitted(self, result: TerminalResult) -> None:
        self._phase = LevelPhase.COMPLETED
        if not self._mounted:
            logger.info("Level %s submitted after the screen was closed", result.level)
            return
        self._view.show_results(result)

    def _handle_submission_failed(self, exc: Exception) -> None:
        self._phase = LevelPhase.SUBMISSION_FAILED
        if self._mounted:
            self._view.show_submission_failed(SUBMISSION_FAILED_MESSAGE)

    def _persist(self) -> None:
        session = self._session
        if session is None or session.submitted:
            return
        try:
            self._store.persist(session)
        except OSError as exc:
            logger.error("Failed to persist level %s snapshot: %s", self.config.level, exc)

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()

    def _cancel_forced_submission(self) -> None:
        if self._forced_handle is not None:
            self._forced_handle.cancel()
            self._forced_handle = None
