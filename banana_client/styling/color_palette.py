"""Color palette for the Banana Monkey client supporting light and dark themes."""

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

    # Text colors
    TEXT_PRIMARY = ThemeColors(
        light="#3B2A06",      # Dark banana peel
        dark="#FFF8E1"        # Cream
    )

    TEXT_SECONDARY = ThemeColors(
        light="#7A5C12",
        dark="#E0C98A"
    )

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFBEA",      # Pale yellow
        dark="#1F1A10"
    )

    BACKGROUND_SECONDARY = ThemeColors(
        light="#FFF3C4",
        dark="#2C2517"
    )

    # Accent colors
    BANANA = ThemeColors(
        light="#FACC15",      # Banana yellow
        dark="#FDE047"
    )

    BANANA_DARK = ThemeColors(
        light="#D97706",      # Ripe / disabled
        dark="#B45309"
    )

    FROZEN = ThemeColors(
        light="#38BDF8",      # Ice blue
        dark="#7DD3FC"
    )

    # Status colors
    INFO = ThemeColors(
        light="#2563EB",
        dark="#3B82F6"
    )

    SUCCESS = ThemeColors(
        light="#16A34A",
        dark="#22C55E"
    )

    WARNING = ThemeColors(
        light="#EA580C",
        dark="#F97316"
    )

    ERROR = ThemeColors(
        light="#DC2626",
        dark="#EF4444"
    )

    # Border colors
    BORDER_PRIMARY = ThemeColors(
        light="#E8D48A",
        dark="#5C4D2A"
    )

    # Button colors
    BUTTON_PRIMARY_BG = ThemeColors(
        light="#FACC15",
        dark="#FDE047"
    )

    BUTTON_PRIMARY_TEXT = ThemeColors(
        light="#3B2A06",
        dark="#1F1A10"
    )

    BUTTON_DISABLED_BG = ThemeColors(
        light="#E5C07B",
        dark="#6B5A2E"
    )

    BUTTON_HOVER_BG = ThemeColors(
        light="#EAB308",
        dark="#FACC15"
    )
