"""Component listing the rules and the levels a player may enter."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from escape_room.constants.quiz_constants import LEVELS
from escape_room.constants.ui_constants import LEVEL_LOCKED_MESSAGE, NOT_ELIGIBLE_MESSAGE
from escape_room.core.backend_client import BackendError, HttpBackendClient
from escape_room.core.models import PlayerIdentity
from escape_room.core.scheduling import Scheduler
from escape_room.core.services.level_gate import is_level_locked, level_status
from escape_room.styling.styles import Styles
from escape_room.ui.dialog_helpers import show_warning


class LevelSelectPanel(QWidget):
    """Shows the rules and lets the player pick a level they are eligible for."""

    def __init__(
        self,
        client: HttpBackendClient,
        scheduler: Scheduler,
        player: PlayerIdentity,
        on_level_chosen: Callable[[int], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.client = client
        self.scheduler = scheduler
        self.player = player
        self.on_level_chosen = on_level_chosen
        self._scores: dict[int, int] = {}

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.greeting_label = QLabel(f"Welcome, {self.player.name}!", self)
        self.greeting_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.greeting_label)

        self.rules_list = QListWidget(self)
        self.rules_list.setWordWrap(True)
        layout.addWidget(self.rules_list, stretch=1)

        self.level_list = QListWidget(self)
        for level, config in sorted(LEVELS.items()):
            item = QListWidgetItem(config.display_title)
            item.setData(Qt.ItemDataRole.UserRole, level)
            self.level_list.addItem(item)
        self.level_list.itemDoubleClicked.connect(lambda _item: self._handle_start_click())
        layout.addWidget(self.level_list)

        self.status_label = QLabel("", self)
        self.status_label.setWordWrap(True)
        layout.addWidget(self.status_label)

        self.start_button = QPushButton("Start Level", self)
        self.start_button.clicked.connect(self._handle_start_click)
        layout.addWidget(self.start_button)
        self._apply_scores({})

    def refresh(self) -> None:
        self.scheduler.run_io(self.client.get_rules, self._apply_rules, self._handle_rules_failed)
        self.scheduler.run_io(
            lambda: self.client.get_level_scores(self.player.student_id, sorted(LEVELS)),
            self._apply_scores,
            self._handle_scores_failed,
        )

    def _apply_scores(self, scores: dict[int, int]) -> None:
        self._scores = dict(scores)
        first_open = None
        for row in range(self.level_list.count()):
            item = self.level_list.item(row)
            level = int(item.data(Qt.ItemDataRole.UserRole))
            locked = is_level_locked(level, self._scores)
            item.setText(f"{LEVELS[level].display_title}  |  {level_status(level, self._scores)}")
            flags = item.flags()
            if locked:
                item.setFlags(flags & ~Qt.ItemFlag.ItemIsEnabled)
            else:
                item.setFlags(flags | Qt.ItemFlag.ItemIsEnabled)
                if first_open is None:
                    first_open = row
        self.level_list.setCurrentRow(first_open if first_open is not None else -1)
        self.start_button.setEnabled(first_open is not None)

    def _handle_scores_failed(self, exc: Exception) -> None:
        self.status_label.setText(f"Could not load your scores: {exc}")

    def _apply_rules(self, rules: list[str]) -> None:
        self.rules_list.clear()
        for index, rule in enumerate(rules, start=1):
            self.rules_list.addItem(f"{index}. {rule}")

    def _handle_rules_failed(self, exc: Exception) -> None:
        self.status_label.setText(f"Could not load rules: {exc}")

    def _handle_start_click(self) -> None:
        item = self.level_list.currentItem()
        if item is None:
            return
        level = int(item.data(Qt.ItemDataRole.UserRole))
        if is_level_locked(level, self._scores):
            show_warning(self, LEVELS[level].display_title, LEVEL_LOCKED_MESSAGE)
            return
        self.start_button.setEnabled(False)
        self.scheduler.run_io(
            lambda: self.client.check_eligibility(self.player.student_id, level),
            lambda eligible: self._handle_eligibility(level, bool(eligible)),
            self._handle_eligibility_failed,
        )

    def _handle_eligibility(self, level: int, eligible: bool) -> None:
        self.start_button.setEnabled(True)
        if not eligible:
            show_warning(self, LEVELS[level].display_title, NOT_ELIGIBLE_MESSAGE)
            return
        self.on_level_chosen(level)

    def _handle_eligibility_failed(self, exc: Exception) -> None:
        self.start_button.setEnabled(True)
        message = str(exc) if isinstance(exc, BackendError) else NOT_ELIGIBLE_MESSAGE
        self.status_label.setText(message)
