"""Component for the admin console: players, aggregate stats and puzzles."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from banana_client.api.admin_api import AdminApi
from banana_client.api.schemas import AdminStats, PlayerSummary, Puzzle, PuzzleDraft
from banana_client.constants.game_constants import DIFFICULTIES, DEFAULT_DIFFICULTY
from banana_client.constants.ui_constants import (
    ADD_PUZZLE_BUTTON,
    DAILY_STATS_COLUMNS,
    DELETE_PLAYER_BUTTON,
    DELETE_PUZZLE_BUTTON,
    PLAYER_COLUMNS,
    REFRESH_BUTTON,
)
from banana_client.core.errors import SessionExpiredError
from banana_client.ui.dialog_helpers import (
    confirm_delete_player,
    confirm_delete_puzzle,
    show_error,
    show_info,
    show_warning,
)
from banana_client.ui.table_helpers import create_table, fill_table

logger = logging.getLogger(__name__)


class AdminPanel(QWidget):
    """UI component for administrators."""

    def __init__(
        self,
        admin_api: AdminApi,
        runner,
        on_session_expired: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.admin_api = admin_api
        self.runner = runner
        self.on_session_expired = on_session_expired
        self._players: list[PlayerSummary] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Aggregate stats
        stats_group = QGroupBox("Overview", self)
        stats_grid = QGridLayout()
        stats_group.setLayout(stats_grid)
        self.stat_labels: dict[str, QLabel] = {}
        for index, (key, title) in enumerate(
            (
                ("total_players", "Players"),
                ("total_games", "Games"),
                ("total_correct_answers", "Correct answers"),
                ("overall_accuracy", "Accuracy"),
            )
        ):
            stats_grid.addWidget(QLabel(title, stats_group), 0, index)
            value_label = QLabel("-", stats_group)
            stats_grid.addWidget(value_label, 1, index)
            self.stat_labels[key] = value_label
        layout.addWidget(stats_group)

        self.daily_table = create_table(DAILY_STATS_COLUMNS, self)
        self.daily_table.setMaximumHeight(160)
        layout.addWidget(self.daily_table)

        # Players
        players_group = QGroupBox("Players", self)
        players_layout = QVBoxLayout()
        players_group.setLayout(players_layout)
        self.players_table = create_table(PLAYER_COLUMNS, players_group)
        players_layout.addWidget(self.players_table, stretch=1)
        players_buttons = QHBoxLayout()
        self.refresh_button = QPushButton(REFRESH_BUTTON, players_group)
        self.refresh_button.clicked.connect(self.refresh)
        players_buttons.addWidget(self.refresh_button)
        players_buttons.addStretch()
        self.delete_player_button = QPushButton(DELETE_PLAYER_BUTTON, players_group)
        self.delete_player_button.clicked.connect(self._handle_delete_player)
        players_buttons.addWidget(self.delete_player_button)
        players_layout.addLayout(players_buttons)
        layout.addWidget(players_group, stretch=1)

        # Puzzles
        puzzle_group = QGroupBox("Puzzles", self)
        puzzle_form = QFormLayout()
        puzzle_group.setLayout(puzzle_form)
        self.image_url_input = QLineEdit(puzzle_group)
        puzzle_form.addRow("Image URL", self.image_url_input)
        self.solution_input = QLineEdit(puzzle_group)
        puzzle_form.addRow("Solution", self.solution_input)
        self.difficulty_combo = QComboBox(puzzle_group)
        self.difficulty_combo.addItems(list(DIFFICULTIES))
        self.difficulty_combo.setCurrentText(DEFAULT_DIFFICULTY)
        puzzle_form.addRow("Difficulty", self.difficulty_combo)
        self.add_puzzle_button = QPushButton(ADD_PUZZLE_BUTTON, puzzle_group)
        self.add_puzzle_button.clicked.connect(self._handle_add_puzzle)
        puzzle_form.addRow(self.add_puzzle_button)

        delete_row = QHBoxLayout()
        self.puzzle_id_input = QSpinBox(puzzle_group)
        self.puzzle_id_input.setRange(1, 10_000_000)
        delete_row.addWidget(self.puzzle_id_input)
        self.delete_puzzle_button = QPushButton(DELETE_PUZZLE_BUTTON, puzzle_group)
        self.delete_puzzle_button.clicked.connect(self._handle_delete_puzzle)
        delete_row.addWidget(self.delete_puzzle_button)
        puzzle_form.addRow("Puzzle ID", delete_row)
        layout.addWidget(puzzle_group)

    # --- Loading ---

    def refresh(self) -> None:
        self.refresh_button.setEnabled(False)
        self.runner.run(self.admin_api.list_players, self._show_players, self._handle_failure)
        self.runner.run(self.admin_api.get_stats, self._show_stats, self._handle_failure)

    def _show_players(self, players: list[PlayerSummary]) -> None:
        self.refresh_button.setEnabled(True)
        self._players = players
        fill_table(self.players_table, [(p.id, p.username, p.email, p.score) for p in players])

    def _show_stats(self, stats: AdminStats) -> None:
        self.stat_labels["total_players"].setText(str(stats.total_players))
        self.stat_labels["total_games"].setText(str(stats.total_games))
        self.stat_labels["total_correct_answers"].setText(str(stats.total_correct_answers))
        self.stat_labels["overall_accuracy"].setText(f"{stats.overall_accuracy:.1f}%")
        fill_table(
            self.daily_table,
            [(d.date, d.games, d.correct, d.accuracy) for d in stats.daily_stats],
        )

    # --- Players ---

    def _handle_delete_player(self) -> None:
        row = self.players_table.currentRow()
        if row < 0 or row >= len(self._players):
            show_warning(self, "No player selected", "Select a player to delete first.")
            return
        player = self._players[row]
        if not confirm_delete_player(self, player.username):
            return
        logger.info("Deleting player %s (%s)", player.id, player.username)
        self.runner.run(
            lambda: self.admin_api.delete_player(player.id),
            lambda _result: self.refresh(),
            self._handle_failure,
        )

    # --- Puzzles ---

    def _handle_add_puzzle(self) -> None:
        image_url = self.image_url_input.text().strip()
        solution = self.solution_input.text().strip()
        if not image_url or not solution:
            show_warning(self, "Missing fields", "Image URL and solution are required.")
            return
        draft = PuzzleDraft(
            image_url=image_url,
            solution=solution,
            difficulty=self.difficulty_combo.currentText(),
        )
        self.add_puzzle_button.setEnabled(False)
        self.runner.run(
            lambda: self.admin_api.create_puzzle(draft),
            self._handle_puzzle_created,
            self._handle_failure,
        )

    def _handle_puzzle_created(self, puzzle: Puzzle) -> None:
        self.add_puzzle_button.setEnabled(True)
        self.image_url_input.clear()
        self.solution_input.clear()
        show_info(self, "Puzzle added", f"Puzzle {puzzle.id} ({puzzle.difficulty}) created.")

    def _handle_delete_puzzle(self) -> None:
        puzzle_id = self.puzzle_id_input.value()
        if not confirm_delete_puzzle(self, puzzle_id):
            return
        self.runner.run(
            lambda: self.admin_api.delete_puzzle(puzzle_id),
            lambda _result: show_info(self, "Puzzle deleted", f"Puzzle {puzzle_id} deleted."),
            self._handle_failure,
        )

    def _handle_failure(self, exc: Exception) -> None:
        self.refresh_button.setEnabled(True)
        self.add_puzzle_button.setEnabled(True)
        if isinstance(exc, SessionExpiredError):
            self.on_session_expired()
            return
        show_error(self, "Admin", str(exc) or "Request failed.")
