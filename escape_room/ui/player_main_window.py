"""Qt main window walking the player through login, levels and results."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from escape_room.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from escape_room.constants.quiz_constants import SESSIONS_DIR, get_level_config
from escape_room.constants.ui_constants import LOGIN_TITLE, WINDOW_TITLE
from escape_room.core.backend_client import HttpBackendClient
from escape_room.core.level_controller import LevelController, LevelPhase
from escape_room.core.models import PlayerIdentity, TerminalResult
from escape_room.core.services.session_store import JsonFileSessionStore
from escape_room.styling.styles import Styles
from escape_room.ui.components.level_panel import LevelPanel
from escape_room.ui.components.level_select_panel import LevelSelectPanel
from escape_room.ui.components.results_panel import ResultsPanel
from escape_room.ui.dialog_helpers import ask_player_identity, confirm_leave_quiz, show_error, show_info
from escape_room.ui.qt_adapters import QtEnvironmentMonitor, QtScheduler

_ACTIVE_PHASES = (LevelPhase.AWAITING_START, LevelPhase.LOADING, LevelPhase.IN_PROGRESS)


class PlayerMode(Enum):
    """Which screen the player window is showing."""

    LOGIN = auto()
    LEVEL_SELECT = auto()
    LEVEL = auto()
    RESULTS = auto()


class PlayerMainWindow(QMainWindow):
    """Main Qt window hosting one player's run through the escape room."""

    def __init__(self, client: HttpBackendClient) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.client = client
        self.scheduler = QtScheduler(self)
        self.environment = QtEnvironmentMonitor(self)
        self.session_store = JsonFileSessionStore(SESSIONS_DIR)

        self._mode = PlayerMode.LOGIN
        self._player: PlayerIdentity | None = None
        self._controller: LevelController | None = None
        self._level_panel: LevelPanel | None = None
        self._level_select_panel: LevelSelectPanel | None = None

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        QTimer.singleShot(0, self._handle_login)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)
        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self.top_row = QWidget(self)
        top_layout = QHBoxLayout(self.top_row)
        top_layout.addStretch()
        self.about_button = QPushButton("About", self.top_row)
        self.about_button.clicked.connect(self._handle_about)
        top_layout.addWidget(self.about_button)
        root_layout.addWidget(self.top_row)

        self.mode_stack = QStackedWidget(self)
        root_layout.addWidget(self.mode_stack, stretch=1)

        self.login_page = QWidget(self)
        login_layout = QVBoxLayout(self.login_page)
        self.login_status = QLabel(APP_ABOUT_TEXT, self.login_page)
        self.login_status.setWordWrap(True)
        login_layout.addWidget(self.login_status)
        self.login_button = QPushButton(LOGIN_TITLE, self.login_page)
        self.login_button.clicked.connect(self._handle_login)
        login_layout.addWidget(self.login_button)
        login_layout.addStretch()
        self.mode_stack.addWidget(self.login_page)

        self.results_panel = ResultsPanel(
            self.client,
            self.scheduler,
            on_back=self._show_level_select,
            parent=self,
        )
        self.mode_stack.addWidget(self.results_panel)

        self._set_mode(PlayerMode.LOGIN)

    def _set_mode(self, mode: PlayerMode) -> None:
        self._mode = mode
        self.top_row.setVisible(mode is not PlayerMode.LEVEL)
        if mode is PlayerMode.LOGIN:
            self.mode_stack.setCurrentWidget(self.login_page)
        elif mode is PlayerMode.LEVEL_SELECT and self._level_select_panel is not None:
            self.mode_stack.setCurrentWidget(self._level_select_panel)
        elif mode is PlayerMode.LEVEL and self._level_panel is not None:
            self.mode_stack.setCurrentWidget(self._level_panel)
        elif mode is PlayerMode.RESULTS:
            self.mode_stack.setCurrentWidget(self.results_panel)

    # --- Login ---

    def _handle_login(self) -> None:
        if self._player is not None:
            return
        identity = ask_player_identity(self)
        if identity is None:
            return
        name, college = identity
        self.login_button.setEnabled(False)
        self.scheduler.run_io(
            lambda: self.client.login(name, college),
            self._handle_logged_in,
            self._handle_login_failed,
        )

    def _handle_logged_in(self, player: PlayerIdentity) -> None:
        self._player = player
        self._level_select_panel = LevelSelectPanel(
            self.client,
            self.scheduler,
            player,
            on_level_chosen=self._enter_level,
            parent=self,
        )
        self.mode_stack.addWidget(self._level_select_panel)
        self._show_level_select()

    def _handle_login_failed(self, exc: Exception) -> None:
        self.login_button.setEnabled(True)
        show_error(self, LOGIN_TITLE, str(exc))

    # --- Levels ---

    def _show_level_select(self) -> None:
        self._set_mode(PlayerMode.LEVEL_SELECT)
        if self._level_select_panel is not None:
            self._level_select_panel.refresh()

    def _enter_level(self, level: int) -> None:
        self._teardown_level()
        config = get_level_config(level)
        panel = LevelPanel(self._player, on_finished=self._handle_level_finished, parent=self)
        controller = LevelController(
            config,
            self._player,
            self.client,
            self.session_store,
            self.scheduler,
            self.environment,
            panel,
        )
        panel.bind(controller)
        self.mode_stack.addWidget(panel)
        self._level_panel = panel
        self._controller = controller
        self._set_mode(PlayerMode.LEVEL)
        controller.mount()

    def _handle_level_finished(self, result: TerminalResult) -> None:
        self._teardown_level()
        self.showMaximized()
        self.results_panel.show_result(result)
        self._set_mode(PlayerMode.RESULTS)

    def _teardown_level(self) -> None:
        if self._controller is not None:
            self._controller.unmount()
            self._controller = None
        if self._level_panel is not None:
            self.mode_stack.removeWidget(self._level_panel)
            self._level_panel.deleteLater()
            self._level_panel = None

    # --- Window ---

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        show_info(self, f"About {APP_NAME}", details)

    def closeEvent(self, event: QCloseEvent) -> None:  # noqa: N802 - Qt override
        controller = self._controller
        if controller is not None and controller.phase in _ACTIVE_PHASES:
            if not confirm_leave_quiz(self):
                event.ignore()
                return
        self._teardown_level()
        event.accept()
