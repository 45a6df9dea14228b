"""Application entry point for the EscapeQt player."""

from __future__ import annotations

import os
import sys

from PySide6.QtWidgets import QApplication

from escape_room.constants.network_constants import DEFAULT_PORT
from escape_room.constants.quiz_constants import QUESTIONS_DIR, RULES_FILE
from escape_room.core.backend_client import HttpBackendClient
from escape_room.core.escape_room_manager import EscapeRoomManager
from escape_room.core.question_bank import load_question_bank, load_rules
from escape_room.server.api_server import start_api_server
from escape_room.ui.player_main_window import PlayerMainWindow
from escape_room.utils.logging_config import configure_logging

BACKEND_URL_ENV = "ESCAPE_ROOM_BACKEND_URL"


def main() -> None:
    """Initialize logging, find or start a backend, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting EscapeQt...")

    backend_url = os.environ.get(BACKEND_URL_ENV)
    if not backend_url:
        manager = EscapeRoomManager(load_question_bank(QUESTIONS_DIR), load_rules(RULES_FILE))
        start_api_server(manager, host="127.0.0.1", port=DEFAULT_PORT)
        backend_url = f"http://127.0.0.1:{DEFAULT_PORT}"
        logger.info("Embedded backend listening on %s", backend_url)
    else:
        logger.info("Using backend at %s", backend_url)

    app = QApplication(sys.argv)
    window = PlayerMainWindow(client=HttpBackendClient(backend_url))
    window.showMaximized()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
