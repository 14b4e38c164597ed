"""Centralized styles and font definitions for the application."""

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 8px;
                padding: 8px 14px;
                font-weight: bold;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                background-color: {ColorPalette.BUTTON_DISABLED_BG.get(theme)};
            }}
            QPushButton:checked {{
                background-color: {ColorPalette.BANANA_DARK.get(theme)};
                color: #FFFFFF;
            }}
            QLineEdit {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                padding: 6px;
            }}
            QTableWidget {{
                background-color: {ColorPalette.BACKGROUND_SECONDARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
            }}
            QGroupBox {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
                color: {ColorPalette.TEXT_SECONDARY.get(theme)};
            }}
            QProgressBar {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                max-height: 10px;
            }}
            QProgressBar::chunk {{
                background-color: {ColorPalette.BANANA.get(theme)};
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_timer_label_style(frozen: bool, low: bool, theme: Theme = Theme.LIGHT) -> str:
        if frozen:
            color = ColorPalette.FROZEN.get(theme)
        elif low:
            color = ColorPalette.ERROR.get(theme)
        else:
            color = ColorPalette.TEXT_PRIMARY.get(theme)
        return f"font-size: 22pt; font-weight: bold; color: {color};"

    @staticmethod
    def get_answer_input_style(shaking: bool, theme: Theme = Theme.LIGHT) -> str:
        if not shaking:
            return ""
        return f"border: 2px solid {ColorPalette.ERROR.get(theme)};"
