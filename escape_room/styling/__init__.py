"""Styling module for the EscapeQt player application."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
