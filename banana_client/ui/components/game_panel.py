"""Component for playing rounds: difficulty selection, countdown, answer and power-ups."""

from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Qt, QTimer
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QProgressBar,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from banana_client.api.game_api import GameApi
from banana_client.constants.game_constants import (
    DIFFICULTIES,
    DOUBLE_POINTS_COST,
    FREEZE_COSTS,
    FREEZE_POLL_INTERVAL_MS,
    SHAKE_DURATION_MS,
    TICK_INTERVAL_MS,
    TIME_LOW_WARNING_SECONDS,
)
from banana_client.constants.ui_constants import (
    ANSWER_PLACEHOLDER,
    CHANGE_DIFFICULTY_BUTTON,
    DIFFICULTY_LABELS,
    DIFFICULTY_PROMPT,
    DOUBLE_POINTS_BUTTON_TEMPLATE,
    FREEZE_BUTTON_TEMPLATE,
    FROZEN_LABEL,
    LOADING_MESSAGE,
    SKIP_BUTTON,
    STATS_TEMPLATE,
    SUBMIT_BUTTON,
)
from banana_client.core.models import RoundState
from banana_client.core.round_controller import RoundController
from banana_client.styling.styles import Styles
from banana_client.ui.components.notification_banner import NotificationBanner

logger = logging.getLogger(__name__)


class RoundTimers(QObject):
    """Countdown tick and freeze poll bound to the puzzle they were created for.

    Only one of the two timers runs at a time: the tick while the countdown is
    live, the poll while a freeze window is active.
    """

    def __init__(self, controller: RoundController, puzzle_id: str, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.puzzle_id = puzzle_id

        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(lambda: controller.tick(puzzle_id))

        self.freeze_timer = QTimer(self)
        self.freeze_timer.setInterval(FREEZE_POLL_INTERVAL_MS)
        self.freeze_timer.timeout.connect(lambda: controller.check_freeze_expiry(puzzle_id))

    def sync(self, frozen: bool) -> None:
        if frozen:
            self.tick_timer.stop()
            if not self.freeze_timer.isActive():
                self.freeze_timer.start()
        else:
            self.freeze_timer.stop()
            if not self.tick_timer.isActive():
                self.tick_timer.start()

    def cancel(self) -> None:
        self.tick_timer.stop()
        self.freeze_timer.stop()
        self.deleteLater()


class GamePanel(QWidget):
    """UI component for the game page; all decisions are delegated to the controller."""

    def __init__(
        self,
        controller: RoundController,
        game_api: GameApi,
        runner,
        on_session_changed: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.controller = controller
        self.game_api = game_api
        self.runner = runner
        self.on_session_changed = on_session_changed

        self._timers: RoundTimers | None = None
        self._shake_scheduled: bool = False

        self._build_ui()
        self.controller.on_change = self._handle_controller_change
        self.controller.on_notify = self.banner.show_notification
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.banner = NotificationBanner(self)
        layout.addWidget(self.banner)

        self.page_stack = QStackedWidget(self)
        self.page_stack.addWidget(self._build_difficulty_page())
        self.page_stack.addWidget(self._build_round_page())
        layout.addWidget(self.page_stack, stretch=1)

    def _build_difficulty_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        prompt = QLabel(DIFFICULTY_PROMPT, page)
        prompt.setAlignment(Qt.AlignCenter)
        prompt.setStyleSheet(Styles.get_large_label_style())
        layout.addStretch()
        layout.addWidget(prompt)

        self.difficulty_buttons: dict[str, QPushButton] = {}
        for level in DIFFICULTIES:
            button = QPushButton(DIFFICULTY_LABELS[level], page)
            button.setMinimumHeight(48)
            button.clicked.connect(lambda _checked=False, lvl=level: self._handle_difficulty(lvl))
            layout.addWidget(button)
            self.difficulty_buttons[level] = button
        layout.addStretch()
        return page

    def _build_round_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        # Timer row
        timer_row = QHBoxLayout()
        self.difficulty_label = QLabel("", page)
        timer_row.addWidget(self.difficulty_label)
        timer_row.addStretch()
        self.double_points_label = QLabel("2x ACTIVE", page)
        self.double_points_label.setVisible(False)
        timer_row.addWidget(self.double_points_label)
        self.timer_label = QLabel("", page)
        timer_row.addWidget(self.timer_label)
        layout.addLayout(timer_row)

        self.time_progress = QProgressBar(page)
        self.time_progress.setRange(0, 1000)
        self.time_progress.setTextVisible(False)
        layout.addWidget(self.time_progress)

        # Puzzle image
        self.image_label = QLabel(LOADING_MESSAGE, page)
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setMinimumHeight(280)
        layout.addWidget(self.image_label, stretch=1)

        # Answer row
        answer_row = QHBoxLayout()
        self.answer_input = QLineEdit(page)
        self.answer_input.setPlaceholderText(ANSWER_PLACEHOLDER)
        self.answer_input.textChanged.connect(self.controller.update_answer)
        self.answer_input.returnPressed.connect(self._handle_submit)
        answer_row.addWidget(self.answer_input, stretch=1)

        self.submit_button = QPushButton(SUBMIT_BUTTON, page)
        self.submit_button.clicked.connect(self._handle_submit)
        answer_row.addWidget(self.submit_button)

        self.skip_button = QPushButton(SKIP_BUTTON, page)
        self.skip_button.clicked.connect(self.controller.skip_round)
        answer_row.addWidget(self.skip_button)
        layout.addLayout(answer_row)

        # Power-ups
        power_group = QGroupBox("Power-ups", page)
        power_row = QHBoxLayout()
        power_group.setLayout(power_row)
        self.freeze_buttons: dict[int, QPushButton] = {}
        for seconds, cost in FREEZE_COSTS.items():
            button = QPushButton(FREEZE_BUTTON_TEMPLATE.format(seconds=seconds, cost=cost), power_group)
            button.clicked.connect(lambda _checked=False, s=seconds: self.controller.activate_freeze(s))
            power_row.addWidget(button)
            self.freeze_buttons[seconds] = button
        self.double_points_button = QPushButton(
            DOUBLE_POINTS_BUTTON_TEMPLATE.format(cost=DOUBLE_POINTS_COST), power_group
        )
        self.double_points_button.clicked.connect(self.controller.activate_double_points)
        power_row.addWidget(self.double_points_button)
        layout.addWidget(power_group)

        # Stats and navigation
        bottom_row = QHBoxLayout()
        self.stats_label = QLabel("", page)
        bottom_row.addWidget(self.stats_label)
        bottom_row.addStretch()
        self.change_difficulty_button = QPushButton(CHANGE_DIFFICULTY_BUTTON, page)
        self.change_difficulty_button.clicked.connect(self.leave)
        bottom_row.addWidget(self.change_difficulty_button)
        layout.addLayout(bottom_row)
        return page

    # --- User actions ---

    def _handle_difficulty(self, level: str) -> None:
        self.banner.dismiss()
        self.controller.select_difficulty(level)

    def _handle_submit(self) -> None:
        self.controller.submit_answer(self.answer_input.text())

    def leave(self) -> None:
        """Abandon the running round, e.g. when navigating to another page."""
        self.controller.leave()

    # --- Rendering ---

    def _handle_controller_change(self) -> None:
        self.refresh()
        self.on_session_changed()

    def refresh(self) -> None:
        state = self.controller.state
        current = self.controller.current_round

        if state is RoundState.IDLE:
            self._cancel_timers()
            self.page_stack.setCurrentIndex(0)
            for button in self.difficulty_buttons.values():
                button.setEnabled(True)
            return

        self.page_stack.setCurrentIndex(1)
        if state is RoundState.LOADING or current is None:
            self._cancel_timers()
            self.image_label.setPixmap(QPixmap())
            self.image_label.setText(LOADING_MESSAGE)
            self.answer_input.clear()
            self._set_round_controls_enabled(False)
            self._update_stats()
            return

        if self._timers is None or self._timers.puzzle_id != current.puzzle_id:
            self._start_round_view(current.puzzle_id, current.image_url)
        self._timers.sync(self.controller.is_frozen())

        frozen = self.controller.is_frozen()
        remaining = current.remaining_seconds
        timer_text = f"{remaining}s"
        if frozen:
            timer_text = f"{FROZEN_LABEL} {timer_text}"
        self.timer_label.setText(timer_text)
        self.timer_label.setStyleSheet(
            Styles.get_timer_label_style(frozen=frozen, low=remaining <= TIME_LOW_WARNING_SECONDS)
        )
        fraction = remaining / current.time_limit_seconds if current.time_limit_seconds else 0.0
        self.time_progress.setValue(int(fraction * 1000))
        self.difficulty_label.setText(DIFFICULTY_LABELS.get(current.difficulty, current.difficulty))
        self.double_points_label.setVisible(self.controller.is_double_points_active())

        can_submit = self.controller.can_submit()
        self.answer_input.setEnabled(can_submit)
        self.submit_button.setEnabled(can_submit)
        self.skip_button.setEnabled(can_submit)
        for seconds, button in self.freeze_buttons.items():
            button.setEnabled(self.controller.can_activate_freeze(seconds))
        self.double_points_button.setEnabled(self.controller.can_activate_double_points())

        self._update_shake()
        self._update_stats()

    def _start_round_view(self, puzzle_id: str, image_url: str) -> None:
        self._cancel_timers()
        self._timers = RoundTimers(self.controller, puzzle_id, self)
        self.answer_input.clear()
        self.answer_input.setFocus()
        self.image_label.setPixmap(QPixmap())
        self.image_label.setText(LOADING_MESSAGE)
        if image_url:
            self.runner.run(
                lambda: self.game_api.fetch_image(image_url),
                lambda data: self._show_image(puzzle_id, data),
                lambda exc: self._show_image_error(puzzle_id, exc),
            )

    def _show_image(self, puzzle_id: str, data: bytes) -> None:
        if self._timers is None or self._timers.puzzle_id != puzzle_id:
            return
        pixmap = QPixmap()
        if not pixmap.loadFromData(data):
            self.image_label.setText("Could not display the puzzle image.")
            return
        self.image_label.setPixmap(
            pixmap.scaled(self.image_label.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation)
        )

    def _show_image_error(self, puzzle_id: str, exc: Exception) -> None:
        if self._timers is None or self._timers.puzzle_id != puzzle_id:
            return
        logger.warning("Image for puzzle %s failed to load: %s", puzzle_id, exc)
        self.image_label.setText(str(exc))

    def _cancel_timers(self) -> None:
        if self._timers is not None:
            self._timers.cancel()
            self._timers = None

    def _set_round_controls_enabled(self, enabled: bool) -> None:
        self.answer_input.setEnabled(enabled)
        self.submit_button.setEnabled(enabled)
        self.skip_button.setEnabled(enabled)
        for button in self.freeze_buttons.values():
            button.setEnabled(enabled)
        self.double_points_button.setEnabled(enabled)

    def _update_shake(self) -> None:
        shaking = self.controller.is_shaking()
        self.answer_input.setStyleSheet(Styles.get_answer_input_style(shaking))
        if shaking and not self._shake_scheduled:
            self._shake_scheduled = True
            QTimer.singleShot(SHAKE_DURATION_MS, self._end_shake)

    def _end_shake(self) -> None:
        self._shake_scheduled = False
        self.controller.clear_shake()

    def _update_stats(self) -> None:
        stats = self.controller.get_stats()
        self.stats_label.setText(
            STATS_TEMPLATE.format(correct=stats.correct, wrong=stats.wrong, streak=stats.streak)
        )
