"""Debounce and escalation of integrity violations."""

from __future__ import annotations

from enum import Enum, auto
import logging

from escape_room.constants.quiz_constants import ProctoringPolicy
from escape_room.core.models import ViolationState

logger = logging.getLogger(__name__)


class EscalationDecision(Enum):
    IGNORED = auto()
    WARNING = auto()
    FORCE_SUBMIT = auto()


class ViolationPolicy:
    """Counts accepted violations and decides between warning and forced submission.

    Events closer than ``policy.debounce_ms`` to the previous *accepted* event
    are dropped without counting. The count never decreases.
    """

    def __init__(self, policy: ProctoringPolicy, state: ViolationState | None = None) -> None:
        self.policy = policy
        self.state = state or ViolationState()

    def on_violation(self, reason: str, now_ms: float) -> EscalationDecision:
        state = self.state
        if state.last_event_ms is not None and now_ms - state.last_event_ms < self.policy.debounce_ms:
            logger.debug("Debounced violation %r", reason)
            return EscalationDecision.IGNORED

        state.last_event_ms = now_ms
        state.count += 1
        state.last_reason = reason
        logger.warning("Integrity violation #%s: %s", state.count, reason)

        if state.count < self.policy.violation_threshold:
            state.warning_visible = True
            return EscalationDecision.WARNING

        state.warning_visible = False
        if state.forced_submission_pending:
            return EscalationDecision.IGNORED
        state.forced_submission_pending = True
        return EscalationDecision.FORCE_SUBMIT

    def dismiss_warning(self) -> bool:
        if not self.state.warning_visible:
            return False
        self.state.warning_visible = False
        return True

    def threshold_reached(self) -> bool:
        return self.state.count >= self.policy.violation_threshold
