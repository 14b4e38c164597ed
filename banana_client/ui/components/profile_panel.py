"""Component showing the player's profile statistics and recent games."""

from __future__ import annotations

from PySide6.QtWidgets import QGridLayout, QGroupBox, QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from banana_client.api.player_api import PlayerApi
from banana_client.api.schemas import GameHistoryEntry, Profile
from banana_client.constants.ui_constants import HISTORY_COLUMNS, REFRESH_BUTTON
from banana_client.core.errors import SessionExpiredError
from banana_client.styling.styles import Styles
from banana_client.ui.dialog_helpers import show_error
from banana_client.ui.table_helpers import create_table, fill_table


class ProfilePanel(QWidget):
    """Read-only view of ``GET /api/profile/``."""

    def __init__(
        self,
        player_api: PlayerApi,
        runner,
        on_session_expired: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.player_api = player_api
        self.runner = runner
        self.on_session_expired = on_session_expired

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.name_label = QLabel("", self)
        self.name_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.name_label)
        header_row.addStretch()
        self.refresh_button = QPushButton(REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh)
        header_row.addWidget(self.refresh_button)
        layout.addLayout(header_row)

        stats_group = QGroupBox("Statistics", self)
        stats_grid = QGridLayout()
        stats_group.setLayout(stats_grid)
        self.stat_labels: dict[str, QLabel] = {}
        for index, (key, title) in enumerate(
            (("score", "Score"), ("coins", "Coins"), ("games_played", "Games played"), ("accuracy", "Accuracy"))
        ):
            stats_grid.addWidget(QLabel(title, stats_group), 0, index)
            value_label = QLabel("-", stats_group)
            value_label.setStyleSheet(Styles.get_large_label_style())
            stats_grid.addWidget(value_label, 1, index)
            self.stat_labels[key] = value_label
        layout.addWidget(stats_group)

        layout.addWidget(QLabel("Recent games", self))
        self.history_table = create_table(HISTORY_COLUMNS, self)
        layout.addWidget(self.history_table, stretch=1)

    def refresh(self) -> None:
        self.refresh_button.setEnabled(False)
        self.runner.run(self.player_api.get_profile, self._show_profile, self._handle_failure)
        self.runner.run(self.player_api.get_history, self._show_history, self._handle_failure)

    def _show_profile(self, profile: Profile) -> None:
        self.refresh_button.setEnabled(True)
        self.name_label.setText(f"{profile.username} ({profile.email})")
        self.stat_labels["score"].setText(str(profile.score))
        self.stat_labels["coins"].setText(str(profile.coins))
        self.stat_labels["games_played"].setText(str(profile.games_played))
        self.stat_labels["accuracy"].setText(f"{profile.accuracy:.1f}%")

    def _show_history(self, games: list[GameHistoryEntry]) -> None:
        fill_table(
            self.history_table,
            [
                (
                    game.puzzle_id,
                    game.player_answer,
                    game.is_correct,
                    game.points_earned,
                    game.time_taken,
                    game.created_at,
                )
                for game in games
            ],
        )

    def _handle_failure(self, exc: Exception) -> None:
        self.refresh_button.setEnabled(True)
        if isinstance(exc, SessionExpiredError):
            self.on_session_expired()
            return
        show_error(self, "Profile", f"Failed to load profile. {exc}")
