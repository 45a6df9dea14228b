"""Centralized Qt stylesheets for the player application."""

from .color_palette import ColorPalette, Theme


class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.DARK) -> str:
        return f"""
            QMainWindow, QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 15px;
            }}
            QPushButton {{
                background-color: {ColorPalette.ACCENT.get(theme)};
                color: {ColorPalette.ACCENT_TEXT.get(theme)};
                border: none;
                border-radius: 10px;
                padding: 10px 22px;
                font-weight: bold;
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.TEXT_MUTED.get(theme)};
            }}
            QRadioButton {{
                padding: 10px;
                border-radius: 8px;
            }}
            QRadioButton:checked {{
                background-color: {ColorPalette.SELECTED_CHOICE.get(theme)};
            }}
            QListWidget, QTableWidget {{
                background-color: {ColorPalette.BACKGROUND_CARD.get(theme)};
                border-radius: 6px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 20pt; font-weight: bold;"

    @staticmethod
    def get_timer_style(theme: Theme = Theme.DARK) -> str:
        return f"font-size: 16pt; font-weight: bold; color: {ColorPalette.WARNING.get(theme)};"

    @staticmethod
    def get_overlay_style(theme: Theme = Theme.DARK) -> str:
        return f"background-color: {ColorPalette.OVERLAY.get(theme)};"

    @staticmethod
    def get_overlay_card_style(theme: Theme = Theme.DARK, danger: bool = False) -> str:
        accent = ColorPalette.DANGER if danger else ColorPalette.WARNING
        return (
            f"background-color: {ColorPalette.BACKGROUND_CARD.get(theme)};"
            f"border: 2px solid {accent.get(theme)}; border-radius: 14px; padding: 18px;"
        )
