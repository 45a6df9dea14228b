"""Component showing a finished level's score and the level leaderboard."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from escape_room.constants.quiz_constants import FINAL_LEVEL, LEVELS
from escape_room.constants.ui_constants import (
    FINAL_LEVEL_MESSAGE,
    LEADERBOARD_TITLE,
    NOT_QUALIFIED_MESSAGE,
    QUALIFIED_MESSAGE,
)
from escape_room.core.backend_client import HttpBackendClient
from escape_room.core.models import LeaderboardRow, TerminalResult
from escape_room.core.scheduling import Scheduler
from escape_room.styling.styles import Styles

_LEADERBOARD_COLUMNS = ("#", "Name", "College", "Score", "Time (s)")


def outcome_message(result: TerminalResult) -> str:
    if result.level >= FINAL_LEVEL:
        return FINAL_LEVEL_MESSAGE
    if result.score >= LEVELS[result.level].qualification_score:
        return QUALIFIED_MESSAGE
    return NOT_QUALIFIED_MESSAGE


class ResultsPanel(QWidget):
    """Displays the terminal result and fetches the leaderboard for its level."""

    def __init__(
        self,
        client: HttpBackendClient,
        scheduler: Scheduler,
        on_back: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.client = client
        self.scheduler = scheduler
        self.on_back = on_back
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.score_label = QLabel("", self)
        self.score_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.score_label)

        self.detail_label = QLabel("", self)
        self.detail_label.setWordWrap(True)
        layout.addWidget(self.detail_label)

        layout.addWidget(QLabel(LEADERBOARD_TITLE, self))
        self.leaderboard_table = QTableWidget(0, len(_LEADERBOARD_COLUMNS), self)
        self.leaderboard_table.setHorizontalHeaderLabels(list(_LEADERBOARD_COLUMNS))
        self.leaderboard_table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.leaderboard_table.verticalHeader().setVisible(False)
        self.leaderboard_table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        layout.addWidget(self.leaderboard_table, stretch=1)

        button_row = QHBoxLayout()
        button_row.addStretch()
        self.back_button = QPushButton("Back to Levels", self)
        self.back_button.clicked.connect(self.on_back)
        button_row.addWidget(self.back_button)
        layout.addLayout(button_row)

    def show_result(self, result: TerminalResult) -> None:
        self.score_label.setText(f"Score: {result.score} / {result.total}")
        lines = [outcome_message(result), f"Time taken: {result.time_taken}s"]
        if result.forced:
            lines.append("This level was submitted automatically.")
        self.detail_label.setText("\n".join(lines))
        self.leaderboard_table.setRowCount(0)
        self.scheduler.run_io(
            lambda: self.client.get_leaderboard(result.level),
            self._populate_leaderboard,
            self._handle_leaderboard_failed,
        )

    def _populate_leaderboard(self, rows: list[LeaderboardRow]) -> None:
        self.leaderboard_table.setRowCount(len(rows))
        for position, row in enumerate(rows):
            values = (
                str(position + 1),
                row.name,
                row.college,
                f"{row.score}/{row.total}",
                str(row.time_taken),
            )
            for column, value in enumerate(values):
                self.leaderboard_table.setItem(position, column, QTableWidgetItem(value))

    def _handle_leaderboard_failed(self, exc: Exception) -> None:
        self.detail_label.setText(f"{self.detail_label.text()}\nLeaderboard unavailable: {exc}")
