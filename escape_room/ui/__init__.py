"""Qt UI components for the player application."""

from .dialog_helpers import (
    ask_player_identity,
    confirm_leave_quiz,
    show_error,
    show_info,
    show_warning,
)
from .player_main_window import PlayerMainWindow

__all__ = [
    "PlayerMainWindow",
    "ask_player_identity",
    "confirm_leave_quiz",
    "show_error",
    "show_info",
    "show_warning",
]
