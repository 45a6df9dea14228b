"""Standalone entry point for the escape room backend."""

from __future__ import annotations

import argparse
import os

from escape_room.constants.network_constants import (
    DEFAULT_ADMIN_PASSWORD,
    DEFAULT_ADMIN_USERNAME,
    DEFAULT_HOST,
    DEFAULT_PORT,
)
from escape_room.constants.quiz_constants import QUESTIONS_DIR, RULES_FILE
from escape_room.core.escape_room_manager import EscapeRoomManager
from escape_room.core.question_bank import load_question_bank, load_rules
from escape_room.server.api_server import run_api_server
from escape_room.utils.logging_config import configure_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Serve the escape room quiz backend.")
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args()

    logger = configure_logging()
    manager = EscapeRoomManager(
        load_question_bank(QUESTIONS_DIR),
        load_rules(RULES_FILE),
        admin_username=os.environ.get("ESCAPE_ROOM_ADMIN_USERNAME", DEFAULT_ADMIN_USERNAME),
        admin_password=os.environ.get("ESCAPE_ROOM_ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD),
    )
    logger.info("Serving backend on %s:%s", args.host, args.port)
    run_api_server(manager, host=args.host, port=args.port)


if __name__ == "__main__":
    main()
