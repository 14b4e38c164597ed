"""Qt UI components for the Banana Monkey client."""

from .dialog_helpers import (
    confirm_delete_player,
    confirm_delete_puzzle,
    confirm_logout,
    show_error,
    show_info,
    show_warning,
)
from .main_window import MainWindow
from .qt_runner import QtRequestRunner

__all__ = [
    "MainWindow",
    "QtRequestRunner",
    "confirm_delete_player",
    "confirm_delete_puzzle",
    "confirm_logout",
    "show_error",
    "show_info",
    "show_warning",
]
