"""Dismissable in-panel banner for notifications produced by the core."""

from __future__ import annotations

from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QWidget

from banana_client.core.models import Notification, NotificationLevel
from banana_client.styling.color_palette import ColorPalette, Theme

_AUTO_HIDE_MS = 3000

_LEVEL_COLORS = {
    NotificationLevel.INFO: ColorPalette.INFO,
    NotificationLevel.SUCCESS: ColorPalette.SUCCESS,
    NotificationLevel.WARNING: ColorPalette.WARNING,
    NotificationLevel.ERROR: ColorPalette.ERROR,
}


class NotificationBanner(QWidget):
    """Shows one notification at a time. Errors stay until dismissed."""

    def __init__(self, parent: QWidget | None = None, theme: Theme = Theme.LIGHT) -> None:
        super().__init__(parent)
        self._theme = theme

        layout = QHBoxLayout()
        layout.setContentsMargins(8, 4, 8, 4)
        self.setLayout(layout)

        self.message_label = QLabel("", self)
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label, stretch=1)

        self.dismiss_button = QPushButton("Dismiss", self)
        self.dismiss_button.clicked.connect(self.dismiss)
        layout.addWidget(self.dismiss_button)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.timeout.connect(self.dismiss)

        self.setVisible(False)

    def show_notification(self, notification: Notification) -> None:
        color = _LEVEL_COLORS[notification.level].get(self._theme)
        self.setStyleSheet(
            f"background-color: {color}; color: #FFFFFF; border-radius: 6px; font-weight: bold;"
        )
        text = notification.message
        if notification.retryable:
            text += "  You can try again."
        self.message_label.setText(text)
        self.setVisible(True)
        self._hide_timer.stop()
        if notification.level is not NotificationLevel.ERROR:
            self._hide_timer.start(_AUTO_HIDE_MS)

    def dismiss(self) -> None:
        self._hide_timer.stop()
        self.setVisible(False)
        self.message_label.setText("")
