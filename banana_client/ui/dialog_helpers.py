"""Helper functions for common dialog patterns in the client UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def confirm_delete_player(parent: QWidget, username: str) -> bool:
    """Show confirmation dialog for deleting a player.

    Args:
        parent: Parent widget for the dialog
        username: Name of the player to delete

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete player {username}? This cannot be undone.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_delete_puzzle(parent: QWidget, puzzle_id: int) -> bool:
    reply = QMessageBox.question(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete puzzle {puzzle_id}?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_logout(parent: QWidget) -> bool:
    """Ask before logging out while a round is running."""
    reply = QMessageBox.question(
        parent,
        "Log out",
        "Leaving now abandons the current puzzle. Log out anyway?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    """Show information dialog."""
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Warning message
    """
    QMessageBox.warning(parent, title, message)
