"""Color palette for EscapeQt supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    TEXT_PRIMARY = ThemeColors(light="#1F1147", dark="#F5F3FF")
    TEXT_MUTED = ThemeColors(light="#6B7280", dark="#C4B5FD")

    BACKGROUND_PRIMARY = ThemeColors(light="#F5F3FF", dark="#2E1065")
    BACKGROUND_CARD = ThemeColors(light="#FFFFFF", dark="#3B0764")

    ACCENT = ThemeColors(light="#7C3AED", dark="#A78BFA")
    ACCENT_TEXT = ThemeColors(light="#FFFFFF", dark="#1F1147")
    SELECTED_CHOICE = ThemeColors(light="#F9A8D4", dark="#BE185D")

    WARNING = ThemeColors(light="#CA8A04", dark="#FACC15")
    DANGER = ThemeColors(light="#DC2626", dark="#F87171")
    OVERLAY = ThemeColors(light="rgba(0, 0, 0, 160)", dark="rgba(0, 0, 0, 190)")
