"""Qt implementations of the scheduling and environment capabilities."""

from __future__ import annotations

from itertools import count
import logging
import time
from typing import Callable

from PySide6.QtCore import QEvent, QObject, QRunnable, QThreadPool, QTimer, Qt, Signal, Slot
from PySide6.QtGui import QGuiApplication, QKeySequence
from PySide6.QtWidgets import QApplication, QWidget

from escape_room.core.environment import (
    EnvironmentEvent,
    EnvironmentListener,
    KeyStroke,
    SignalKind,
)

logger = logging.getLogger(__name__)


class QtTimerHandle:
    """Cancellable wrapper around a QTimer owned by the scheduler."""

    def __init__(self, timer: QTimer) -> None:
        self._timer: QTimer | None = timer

    @property
    def active(self) -> bool:
        return self._timer is not None and self._timer.isActive()

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class _IoSignals(QObject):
    succeeded = Signal(int, object)
    failed = Signal(int, object)


class _IoTask(QRunnable):
    def __init__(self, token: int, work: Callable[[], object], signals: _IoSignals) -> None:
        super().__init__()
        self._token = token
        self._work = work
        self._signals = signals

    def run(self) -> None:
        try:
            result = self._work()
        except Exception as exc:  # handed to the UI thread's failure callback
            self._signals.failed.emit(self._token, exc)
            return
        self._signals.succeeded.emit(self._token, result)


class QtScheduler(QObject):
    """QTimer-based clock plus a thread pool whose results return on the UI thread."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pool = QThreadPool.globalInstance()
        self._signals = _IoSignals()
        self._signals.succeeded.connect(self._deliver_success)
        self._signals.failed.connect(self._deliver_failure)
        self._callbacks: dict[int, tuple[Callable[[object], None], Callable[[Exception], None]]] = {}
        self._tokens = count(1)

    def call_repeating(self, interval_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return QtTimerHandle(timer)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.setInterval(delay_ms)
        handle = QtTimerHandle(timer)

        def fire() -> None:
            handle.cancel()
            callback()

        timer.timeout.connect(fire)
        timer.start()
        return handle

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0

    def run_io(
        self,
        work: Callable[[], object],
        on_success: Callable[[object], None],
        on_failure: Callable[[Exception], None],
    ) -> None:
        token = next(self._tokens)
        self._callbacks[token] = (on_success, on_failure)
        self._pool.start(_IoTask(token, work, self._signals))

    @Slot(int, object)
    def _deliver_success(self, token: int, result: object) -> None:
        callbacks = self._callbacks.pop(token, None)
        if callbacks is not None:
            callbacks[0](result)

    @Slot(int, object)
    def _deliver_failure(self, token: int, exc: object) -> None:
        callbacks = self._callbacks.pop(token, None)
        if callbacks is not None:
            callbacks[1](exc)


def _is_back_navigation(event) -> bool:
    if event.key() == Qt.Key.Key_Back:
        return True
    return event.key() == Qt.Key.Key_Left and bool(event.modifiers() & Qt.KeyboardModifier.AltModifier)


def _to_key_stroke(event) -> KeyStroke:
    modifiers = event.modifiers()
    return KeyStroke(
        key=QKeySequence(event.key()).toString(),
        ctrl=bool(modifiers & Qt.KeyboardModifier.ControlModifier),
        shift=bool(modifiers & Qt.KeyboardModifier.ShiftModifier),
        meta=bool(modifiers & Qt.KeyboardModifier.MetaModifier),
    )


class QtEnvironmentMonitor(QObject):
    """Reports window-level proctoring signals for one top-level window.

    Key and mouse events are observed application-wide (they are delivered to
    the focused child, not the window); state and resize events are taken
    from the window itself.
    """

    def __init__(self, window: QWidget) -> None:
        super().__init__(window)
        self._window = window
        self._listener: EnvironmentListener | None = None

    def subscribe(self, listener: EnvironmentListener) -> None:
        if self._listener is not None:
            self.unsubscribe()
        self._listener = listener
        QApplication.instance().installEventFilter(self)
        logger.debug("Environment monitor attached to %s", self._window.objectName() or "window")
        QGuiApplication.instance().applicationStateChanged.connect(self._on_application_state)

    def unsubscribe(self) -> None:
        if self._listener is None:
            return
        self._listener = None
        QApplication.instance().removeEventFilter(self)
        QGuiApplication.instance().applicationStateChanged.disconnect(self._on_application_state)

    def request_fullscreen(self) -> bool:
        self._window.showFullScreen()
        self._window.raise_()
        self._window.activateWindow()
        return True

    def is_fullscreen(self) -> bool:
        return bool(self._window.windowState() & Qt.WindowState.WindowFullScreen)

    def viewport_size(self) -> tuple[int, int]:
        return self._window.width(), self._window.height()

    def screen_size(self) -> tuple[int, int]:
        screen = self._window.screen() or QGuiApplication.primaryScreen()
        if screen is None:
            return 0, 0
        geometry = screen.geometry()
        return geometry.width(), geometry.height()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: N802 - Qt override
        if self._listener is None:
            return False
        event_type = event.type()

        if obj is self._window:
            if event_type == QEvent.Type.WindowStateChange:
                if self._window.windowState() & Qt.WindowState.WindowMinimized:
                    return self._emit(EnvironmentEvent(SignalKind.VISIBILITY_HIDDEN))
                return self._emit(EnvironmentEvent(SignalKind.FULLSCREEN_CHANGED))
            if event_type == QEvent.Type.Resize:
                return self._emit(EnvironmentEvent(SignalKind.RESIZE))

        if not isinstance(obj, QWidget) or obj.window() is not self._window:
            return False

        if event_type == QEvent.Type.KeyPress:
            if _is_back_navigation(event):
                return self._emit(EnvironmentEvent(SignalKind.NAVIGATION_ATTEMPT))
            return self._emit(EnvironmentEvent(SignalKind.KEY_PRESS, key=_to_key_stroke(event)))
        if event_type == QEvent.Type.MouseButtonPress and event.button() == Qt.MouseButton.BackButton:
            return self._emit(EnvironmentEvent(SignalKind.NAVIGATION_ATTEMPT))
        return False

    def _on_application_state(self, state: Qt.ApplicationState) -> None:
        if state == Qt.ApplicationState.ApplicationInactive:
            self._emit(EnvironmentEvent(SignalKind.WINDOW_BLUR))
        elif state in (Qt.ApplicationState.ApplicationHidden, Qt.ApplicationState.ApplicationSuspended):
            self._emit(EnvironmentEvent(SignalKind.VISIBILITY_HIDDEN))

    def _emit(self, event: EnvironmentEvent) -> bool:
        listener = self._listener
        if listener is None:
            return False
        return bool(listener(event))
