"""Static metadata describing EscapeQt."""

APP_NAME = "EscapeQt"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "EscapeQt is a timed multi-level escape room quiz. Each level is played in a "
    "proctored fullscreen window and scores are collected by a FastAPI backend."
)
