"""Helper functions for common dialog patterns in the player UI."""

from __future__ import annotations

from PySide6.QtWidgets import QInputDialog, QMessageBox, QWidget

from escape_room.constants.ui_constants import (
    COLLEGE_PROMPT,
    LEAVE_QUIZ_MESSAGE,
    LEAVE_QUIZ_TITLE,
    LOGIN_TITLE,
    NAME_PROMPT,
)


def ask_player_identity(parent: QWidget) -> tuple[str, str] | None:
    """Ask for the player's name and college.

    Returns:
        ``(name, college)`` or None if the player cancelled or left a field blank
    """
    name, ok = QInputDialog.getText(parent, LOGIN_TITLE, NAME_PROMPT)
    if not ok or not name.strip():
        return None
    college, ok = QInputDialog.getText(parent, LOGIN_TITLE, COLLEGE_PROMPT)
    if not ok or not college.strip():
        return None
    return name.strip(), college.strip()


def confirm_leave_quiz(parent: QWidget) -> bool:
    """Ask before closing the window in the middle of a level."""
    reply = QMessageBox.question(
        parent,
        LEAVE_QUIZ_TITLE,
        LEAVE_QUIZ_MESSAGE,
        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
        QMessageBox.StandardButton.No,
    )
    return reply == QMessageBox.StandardButton.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)
