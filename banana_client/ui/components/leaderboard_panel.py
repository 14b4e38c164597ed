"""Component showing the global leaderboard."""

from __future__ import annotations

from PySide6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from banana_client.api.player_api import PlayerApi
from banana_client.api.schemas import LeaderboardEntry
from banana_client.constants.ui_constants import LEADERBOARD_COLUMNS, REFRESH_BUTTON
from banana_client.core.errors import SessionExpiredError
from banana_client.core.services.player_session import PlayerSession
from banana_client.styling.styles import Styles
from banana_client.ui.dialog_helpers import show_error
from banana_client.ui.table_helpers import create_table, fill_table


class LeaderboardPanel(QWidget):
    """Ranks come from the server as-is; the client never re-sorts them."""

    def __init__(
        self,
        player_api: PlayerApi,
        session: PlayerSession,
        runner,
        on_session_expired: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.player_api = player_api
        self.session = session
        self.runner = runner
        self.on_session_expired = on_session_expired

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        title = QLabel("Leaderboard", self)
        title.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(title)
        header_row.addStretch()
        self.own_rank_label = QLabel("", self)
        header_row.addWidget(self.own_rank_label)
        self.refresh_button = QPushButton(REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh)
        header_row.addWidget(self.refresh_button)
        layout.addLayout(header_row)

        self.table = create_table(LEADERBOARD_COLUMNS, self)
        layout.addWidget(self.table, stretch=1)

    def refresh(self) -> None:
        self.refresh_button.setEnabled(False)
        self.runner.run(self.player_api.get_leaderboard, self._show_entries, self._handle_failure)

    def _show_entries(self, entries: list[LeaderboardEntry]) -> None:
        self.refresh_button.setEnabled(True)
        fill_table(
            self.table,
            [(e.rank, e.username, e.score, e.games, e.accuracy) for e in entries],
        )
        user = self.session.user
        own = next((e for e in entries if user and e.username == user.username), None)
        self.own_rank_label.setText(f"Your rank: #{own.rank}" if own else "")

    def _handle_failure(self, exc: Exception) -> None:
        self.refresh_button.setEnabled(True)
        if isinstance(exc, SessionExpiredError):
            self.on_session_expired()
            return
        show_error(self, "Leaderboard", f"Failed to load leaderboard. {exc}")
