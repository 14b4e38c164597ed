"""Styling module for the Banana Monkey client."""

from .color_palette import ColorPalette, Theme

__all__ = ["ColorPalette", "Theme"]
