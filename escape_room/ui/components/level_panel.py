"""Proctored level screen; the Qt view driven by a LevelController."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt, QTimer
from PySide6.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QRadioButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from escape_room.constants.quiz_constants import LevelConfig
from escape_room.constants.ui_constants import (
    LOADING_MESSAGE,
    NEXT_BUTTON,
    READY_BUTTON,
    READY_TITLE_TEMPLATE,
    RETRY_BUTTON,
    SUBMIT_BUTTON,
    SUBMITTING_MESSAGE,
    VIOLATION_FOOTER,
    VIOLATION_TITLE,
    WARNING_MESSAGE,
    WARNING_TITLE,
)
from escape_room.core.level_controller import LevelController
from escape_room.core.markdown_renderer import renderer
from escape_room.core.models import PlayerIdentity, QuizSession, TerminalResult
from escape_room.styling.styles import Styles

_NOTICE_VISIBLE_MS = 3000


def format_clock(seconds: int) -> str:
    return f"{seconds // 60}:{seconds % 60:02d}"


class _Overlay(QFrame):
    """Semi-transparent layer covering the panel with a centered message card."""

    def __init__(self, parent: QWidget, title: str, danger: bool = False) -> None:
        super().__init__(parent)
        self.setStyleSheet(Styles.get_overlay_style())
        outer = QVBoxLayout(self)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)

        card = QFrame(self)
        card.setStyleSheet(Styles.get_overlay_card_style(danger=danger))
        card.setMaximumWidth(460)
        card_layout = QVBoxLayout(card)

        self.title_label = QLabel(title, card)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        self.title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(self.title_label)

        self.message_label = QLabel("", card)
        self.message_label.setWordWrap(True)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(self.message_label)

        self.footer_label = QLabel("", card)
        self.footer_label.setWordWrap(True)
        self.footer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        card_layout.addWidget(self.footer_label)

        self.button = QPushButton("OK", card)
        card_layout.addWidget(self.button, alignment=Qt.AlignmentFlag.AlignCenter)

        outer.addWidget(card)
        self.hide()

    def present(self, message: str, footer: str = "", dismissible: bool = True) -> None:
        self.message_label.setText(message)
        self.footer_label.setText(footer)
        self.footer_label.setVisible(bool(footer))
        self.button.setVisible(dismissible)
        self.setGeometry(self.parentWidget().rect())
        self.raise_()
        self.show()


class LevelPanel(QWidget):
    """Renders whatever phase the bound LevelController is in."""

    def __init__(
        self,
        player: PlayerIdentity,
        on_finished: Callable[[TerminalResult], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.player = player
        self.on_finished = on_finished
        self.controller: LevelController | None = None

        self.setContextMenuPolicy(Qt.ContextMenuPolicy.NoContextMenu)
        self._build_ui()

    def bind(self, controller: LevelController) -> None:
        self.controller = controller

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)

        identity = QLabel(f"{self.player.name} ({self.player.college})", self)
        identity.setAlignment(Qt.AlignmentFlag.AlignRight)
        layout.addWidget(identity)

        self.stack = QStackedWidget(self)
        layout.addWidget(self.stack, stretch=1)

        # Ready page
        self.ready_page = QWidget(self)
        ready_layout = QVBoxLayout(self.ready_page)
        ready_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.ready_title = QLabel("", self.ready_page)
        self.ready_title.setStyleSheet(Styles.get_large_label_style())
        self.ready_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        ready_layout.addWidget(self.ready_title)
        self.ready_button = QPushButton(READY_BUTTON, self.ready_page)
        self.ready_button.clicked.connect(self._handle_ready)
        ready_layout.addWidget(self.ready_button, alignment=Qt.AlignmentFlag.AlignCenter)
        self.stack.addWidget(self.ready_page)

        # Status page (loading, submitting, errors, failed submission)
        self.status_page = QWidget(self)
        status_layout = QVBoxLayout(self.status_page)
        status_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.status_label = QLabel("", self.status_page)
        self.status_label.setWordWrap(True)
        self.status_label.setStyleSheet(Styles.get_large_label_style())
        self.status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        status_layout.addWidget(self.status_label)
        self.retry_button = QPushButton(RETRY_BUTTON, self.status_page)
        self.retry_button.clicked.connect(self._handle_retry)
        self.retry_button.hide()
        status_layout.addWidget(self.retry_button, alignment=Qt.AlignmentFlag.AlignCenter)
        self.stack.addWidget(self.status_page)

        # Question page
        self.question_page = QWidget(self)
        question_layout = QVBoxLayout(self.question_page)
        header = QHBoxLayout()
        self.progress_label = QLabel("", self.question_page)
        header.addWidget(self.progress_label)
        header.addStretch()
        self.timer_label = QLabel("", self.question_page)
        self.timer_label.setStyleSheet(Styles.get_timer_style())
        header.addWidget(self.timer_label)
        question_layout.addLayout(header)

        self.question_label = QLabel("", self.question_page)
        self.question_label.setWordWrap(True)
        self.question_label.setTextFormat(Qt.TextFormat.RichText)
        self.question_label.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)
        self.question_label.setStyleSheet(Styles.get_large_label_style())
        question_layout.addWidget(self.question_label)

        self.choices_layout = QVBoxLayout()
        question_layout.addLayout(self.choices_layout)
        self.choice_group = QButtonGroup(self)
        self.choice_group.setExclusive(True)
        self.choice_group.idClicked.connect(self._handle_choice)
        self.choice_buttons: list[QRadioButton] = []
        question_layout.addStretch()

        footer = QHBoxLayout()
        footer.addStretch()
        self.next_button = QPushButton(NEXT_BUTTON, self.question_page)
        self.next_button.clicked.connect(self._handle_next)
        footer.addWidget(self.next_button)
        question_layout.addLayout(footer)

        self.notice_label = QLabel("", self.question_page)
        self.notice_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.notice_label.hide()
        question_layout.addWidget(self.notice_label)
        self.stack.addWidget(self.question_page)

        self.warning_overlay = _Overlay(self, WARNING_TITLE)
        self.warning_overlay.button.clicked.connect(self._handle_dismiss_warning)
        self.violation_overlay = _Overlay(self, VIOLATION_TITLE, danger=True)

    def resizeEvent(self, event) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        for overlay in (self.warning_overlay, self.violation_overlay):
            if overlay.isVisible():
                overlay.setGeometry(self.rect())

    # --- LevelView ---

    def show_ready_prompt(self, config: LevelConfig) -> None:
        self.ready_title.setText(READY_TITLE_TEMPLATE.format(title=config.display_title))
        self.stack.setCurrentWidget(self.ready_page)

    def show_loading(self) -> None:
        self._show_status(LOADING_MESSAGE)

    def show_question(self, session: QuizSession) -> None:
        question = session.current_question
        self.progress_label.setText(
            f"Question {session.current_index + 1} / {session.total_questions}"
        )
        self.question_label.setText(renderer.render_fragment(question.text))
        self._rebuild_choices(question.choices, session.selected_answers[session.current_index])
        answered = session.selected_answers[session.current_index] is not None
        self.next_button.setText(SUBMIT_BUTTON if session.is_last_question else NEXT_BUTTON)
        self.next_button.setEnabled(answered and not session.submitted)
        self.stack.setCurrentWidget(self.question_page)

    def update_timer(self, remaining_seconds: int) -> None:
        self.timer_label.setText(f"Time: {format_clock(remaining_seconds)}")

    def show_warning(self, count: int, reason: str) -> None:
        self.warning_overlay.present(WARNING_MESSAGE, footer=f"{reason} ({count})")

    def hide_warning(self) -> None:
        self.warning_overlay.hide()

    def show_violation_notice(self, message: str) -> None:
        self.warning_overlay.hide()
        self.violation_overlay.present(message, footer=VIOLATION_FOOTER, dismissible=False)

    def show_navigation_blocked(self, message: str) -> None:
        self.notice_label.setText(message)
        self.notice_label.show()
        QTimer.singleShot(_NOTICE_VISIBLE_MS, self.notice_label.hide)

    def show_error(self, message: str) -> None:
        self._hide_overlays()
        self._show_status(message)

    def show_submitting(self) -> None:
        self.warning_overlay.hide()
        self._show_status(SUBMITTING_MESSAGE)

    def show_results(self, result: TerminalResult) -> None:
        self._hide_overlays()
        self.on_finished(result)

    def show_submission_failed(self, message: str) -> None:
        self._hide_overlays()
        self._show_status(message)
        self.retry_button.show()

    # --- Internal ---

    def _show_status(self, message: str) -> None:
        self.status_label.setText(message)
        self.retry_button.hide()
        self.stack.setCurrentWidget(self.status_page)

    def _hide_overlays(self) -> None:
        self.warning_overlay.hide()
        self.violation_overlay.hide()

    def _rebuild_choices(self, choices: list[str], selected: int | None) -> None:
        for button in self.choice_buttons:
            self.choice_group.removeButton(button)
            button.deleteLater()
        self.choice_buttons = []
        for index, choice in enumerate(choices):
            button = QRadioButton(renderer.render_choice(choice), self.question_page)
            button.setChecked(index == selected)
            self.choice_group.addButton(button, index)
            self.choices_layout.addWidget(button)
            self.choice_buttons.append(button)

    def _handle_ready(self) -> None:
        if self.controller is not None:
            self.controller.start()

    def _handle_choice(self, index: int) -> None:
        if self.controller is not None:
            self.controller.select_answer(index)

    def _handle_next(self) -> None:
        if self.controller is not None:
            self.controller.next_question()

    def _handle_dismiss_warning(self) -> None:
        if self.controller is not None:
            self.controller.dismiss_warning()

    def _handle_retry(self) -> None:
        if self.controller is not None:
            self.controller.retry_submission()
