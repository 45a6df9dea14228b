"""Test doubles for the scheduler, environment, backend and level view."""

from __future__ import annotations

from typing import Callable

from escape_room.core.environment import EnvironmentEvent, EnvironmentListener, KeyStroke, SignalKind
from escape_room.core.models import Question, ScoreSubmission


def make_question(qid: int, answer_index: int = 0, choice_count: int = 4) -> Question:
    return Question(
        id=qid,
        text=f"Question {qid}?",
        choices=[f"q{qid}-choice{n}" for n in range(choice_count)],
        correct_choice_index=answer_index,
    )


def make_bank(size: int) -> list[Question]:
    return [make_question(qid, answer_index=qid % 4) for qid in range(1, size + 1)]


class ManualHandle:
    def __init__(self, due_ms: float, callback: Callable[[], None], interval_ms: int | None) -> None:
        self.due_ms = due_ms
        self.callback = callback
        self.interval_ms = interval_ms
        self.cancelled = False

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Fake clock advanced explicitly by tests.

    ``run_io`` runs the work inline unless ``defer_io`` is set, in which case
    the work waits in ``pending_io`` until ``flush_io`` is called.
    """

    def __init__(self, defer_io: bool = False) -> None:
        self.now = 0.0
        self.defer_io = defer_io
        self.pending_io: list[tuple[Callable, Callable, Callable]] = []
        self._handles: list[ManualHandle] = []

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + interval_ms, callback, interval_ms)
        self._handles.append(handle)
        return handle

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self.now + delay_ms, callback, None)
        self._handles.append(handle)
        return handle

    def now_ms(self) -> float:
        return self.now

    def run_io(self, work, on_success, on_failure) -> None:
        if self.defer_io:
            self.pending_io.append((work, on_success, on_failure))
            return
        self._execute(work, on_success, on_failure)

    def flush_io(self) -> None:
        while self.pending_io:
            self._execute(*self.pending_io.pop(0))

    def advance(self, ms: float) -> None:
        target = self.now + ms
        while True:
            due = [h for h in self._handles if h.active and h.due_ms <= target]
            if not due:
                break
            handle = min(due, key=lambda h: h.due_ms)
            self.now = handle.due_ms
            if handle.interval_ms is None:
                handle.cancel()
            else:
                handle.due_ms += handle.interval_ms
            handle.callback()
        self._handles = [h for h in self._handles if h.active]
        self.now = target

    def active_handles(self) -> list[ManualHandle]:
        return [h for h in self._handles if h.active]

    @staticmethod
    def _execute(work, on_success, on_failure) -> None:
        try:
            result = work()
        except Exception as exc:
            on_failure(exc)
        else:
            on_success(result)


class FakeEnvironment:
    def __init__(self, screen: tuple[int, int] = (1920, 1080)) -> None:
        self.listener: EnvironmentListener | None = None
        self.fullscreen = False
        self.screen = screen
        self.viewport = screen
        self.fullscreen_requests = 0

    def subscribe(self, listener: EnvironmentListener) -> None:
        self.listener = listener

    def unsubscribe(self) -> None:
        self.listener = None

    def request_fullscreen(self) -> bool:
        self.fullscreen_requests += 1
        self.fullscreen = True
        self.viewport = self.screen
        return True

    def is_fullscreen(self) -> bool:
        return self.fullscreen

    def viewport_size(self) -> tuple[int, int]:
        return self.viewport

    def screen_size(self) -> tuple[int, int]:
        return self.screen

    def emit(self, kind: SignalKind, key: KeyStroke | None = None) -> bool:
        if self.listener is None:
            return False
        return self.listener(EnvironmentEvent(kind, key=key))

    def exit_fullscreen(self) -> bool:
        self.fullscreen = False
        return self.emit(SignalKind.FULLSCREEN_CHANGED)


class FakeBackend:
    def __init__(self, banks: dict[int, list[Question]] | None = None) -> None:
        self.banks = banks or {}
        self.question_requests: list[int] = []
        self.submit_attempts: list[ScoreSubmission] = []
        self.submissions: list[ScoreSubmission] = []
        self.fail_submissions = 0
        self.questions_error: Exception | None = None

    def get_questions(self, level: int) -> list[Question]:
        self.question_requests.append(level)
        if self.questions_error is not None:
            raise self.questions_error
        return list(self.banks.get(level, []))

    def submit_score(self, submission: ScoreSubmission) -> dict[str, str]:
        self.submit_attempts.append(submission)
        if self.fail_submissions > 0:
            self.fail_submissions -= 1
            raise ConnectionError("backend unavailable")
        self.submissions.append(submission)
        return {"message": "Score saved"}


class RecordingView:
    """Records every LevelView call as ``(method_name, args)``."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple]] = []

    def __getattr__(self, name: str):
        if not name.startswith("show_") and name not in {"update_timer", "hide_warning"}:
            raise AttributeError(name)

        def record(*args) -> None:
            self.calls.append((name, args))

        return record

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]

    def calls_to(self, name: str) -> list[tuple]:
        return [args for call_name, args in self.calls if call_name == name]

    def last(self, name: str) -> tuple:
        matching = self.calls_to(name)
        assert matching, f"{name} was never called"
        return matching[-1]
