"""State machine for one puzzle round: countdown, power-ups and answer submission.

Three independent sources drive the controller: a 1 s countdown tick, a
sub-second freeze-expiry poll and network completions delivered by a request
runner. All of them run on the same thread. Deferred callbacks carry the puzzle
id they were created for and are ignored once that round has been replaced.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

from banana_client.api.game_api import GameApi
from banana_client.api.schemas import AnswerResult, DoublePointsResult, FreezeResult, Question
from banana_client.constants.game_constants import (
    DIFFICULTIES,
    DIFFICULTY_TIME_LIMITS,
    DOUBLE_POINTS_COST,
    FREEZE_COSTS,
)
from banana_client.core.errors import ApiRejectedError, BananaClientError, SessionExpiredError
from banana_client.core.models import (
    Notification,
    NotificationLevel,
    PowerUpWindow,
    Round,
    RoundState,
)
from banana_client.core.services.player_session import PlayerSession
from banana_client.core.services.request_runner import ImmediateRunner
from banana_client.core.services.round_stats import RoundStats, RoundStatsSnapshot

logger = logging.getLogger(__name__)


class RoundController:
    """Owns the single active round and mediates every change to it."""

    def __init__(
        self,
        game_api: GameApi,
        session: PlayerSession,
        runner: Any | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._api = game_api
        self._session = session
        self._runner = runner or ImmediateRunner()
        self._clock = clock

        self._state = RoundState.IDLE
        self._round: Round | None = None
        self._difficulty: str | None = None
        self._freeze = PowerUpWindow()
        self._double_points = False
        self._shake = False
        self._stats = RoundStats()

        # Bumped whenever a question load is started or abandoned.
        self._load_generation = 0
        self._freeze_pending = False
        self._double_points_pending = False

        self.on_change: Callable[[], None] | None = None
        self.on_notify: Callable[[Notification], None] | None = None
        self.on_session_expired: Callable[[], None] | None = None

    # --- Queries ---

    @property
    def state(self) -> RoundState:
        return self._state

    @property
    def current_round(self) -> Round | None:
        return self._round

    @property
    def difficulty(self) -> str | None:
        return self._difficulty

    @property
    def freeze_window(self) -> PowerUpWindow:
        return self._freeze

    def is_frozen(self) -> bool:
        return self._freeze.active

    def is_double_points_active(self) -> bool:
        return self._double_points

    def is_shaking(self) -> bool:
        return self._shake

    def get_stats(self) -> RoundStatsSnapshot:
        return self._stats.snapshot()

    def can_submit(self) -> bool:
        return self._state is RoundState.ACTIVE and self._round is not None

    def can_activate_freeze(self, seconds: int) -> bool:
        cost = FREEZE_COSTS.get(seconds)
        return (
            cost is not None
            and self._state is RoundState.ACTIVE
            and self._round is not None
            and not self._freeze.active
            and not self._freeze_pending
            and self._session.coins >= cost
        )

    def can_activate_double_points(self) -> bool:
        return (
            self._state is RoundState.ACTIVE
            and self._round is not None
            and not self._double_points
            and not self._double_points_pending
            and self._session.coins >= DOUBLE_POINTS_COST
        )

    # --- Round lifecycle ---

    def select_difficulty(self, level: str) -> bool:
        if self._state is not RoundState.IDLE:
            return False
        if level not in DIFFICULTIES:
            self._notify(NotificationLevel.WARNING, f"Unknown difficulty: {level}")
            return False
        self._difficulty = level
        self._request_question(level)
        return True

    def skip_round(self) -> bool:
        if self._state is not RoundState.ACTIVE or self._round is None:
            return False
        logger.info("Skipping puzzle %s", self._round.puzzle_id)
        self._request_question(self._difficulty)
        return True

    def leave(self) -> None:
        """Abandon the current round (navigation away); in-flight results are discarded."""
        self._load_generation += 1
        self._discard_round()
        self._stats.clear()
        self._set_state(RoundState.IDLE)
        self._changed()

    def update_answer(self, text: str) -> None:
        if self._round is not None and self._state is RoundState.ACTIVE:
            self._round.submitted_answer = text

    def clear_shake(self) -> None:
        if self._shake:
            self._shake = False
            self._changed()

    def _request_question(self, difficulty: str) -> None:
        self._discard_round()
        self._load_generation += 1
        generation = self._load_generation
        self._set_state(RoundState.LOADING)
        self._changed()
        self._runner.run(
            lambda: self._api.get_question(difficulty),
            lambda question: self._handle_question_loaded(generation, question),
            lambda exc: self._handle_question_failed(generation, exc),
        )

    def _handle_question_loaded(self, generation: int, question: Question) -> None:
        if generation != self._load_generation or self._state is not RoundState.LOADING:
            logger.debug("Discarding superseded question %s", question.puzzle_id)
            return
        time_limit = DIFFICULTY_TIME_LIMITS[question.difficulty]
        self._round = Round(
            puzzle_id=question.puzzle_id,
            difficulty=question.difficulty,
            time_limit_seconds=time_limit,
            remaining_seconds=time_limit,
            image_url=question.image_url,
            points_value=question.points_value,
        )
        self._freeze.clear()
        self._shake = False
        self._set_state(RoundState.ACTIVE)
        logger.info(
            "Round started: puzzle=%s difficulty=%s limit=%ss",
            question.puzzle_id,
            question.difficulty,
            time_limit,
        )
        self._changed()

    def _handle_question_failed(self, generation: int, exc: Exception) -> None:
        if generation != self._load_generation:
            return
        self._discard_round()
        self._set_state(RoundState.IDLE)
        if not self._handle_session_expiry(exc):
            self._notify(
                NotificationLevel.ERROR,
                _describe(exc, "Failed to load question."),
                retryable=True,
            )
        self._changed()

    def _discard_round(self) -> None:
        self._round = None
        self._freeze.clear()
        self._shake = False
        self._freeze_pending = False
        self._double_points_pending = False

    # --- Timers ---

    def tick(self, puzzle_id: str | None = None) -> None:
        """Advance the countdown by one second unless frozen or bound to an old round."""
        current = self._round
        if current is None or self._state not in (RoundState.ACTIVE, RoundState.SUBMITTING):
            return
        if puzzle_id is not None and puzzle_id != current.puzzle_id:
            logger.debug("Ignoring tick for stale puzzle %s", puzzle_id)
            return
        if self._freeze.active or current.remaining_seconds <= 0:
            return
        current.remaining_seconds -= 1
        if current.remaining_seconds <= 0:
            current.remaining_seconds = 0
            self._handle_timeout(current)
            return
        self._changed()

    def check_freeze_expiry(self, puzzle_id: str | None = None) -> None:
        current = self._round
        if current is None or not self._freeze.active:
            return
        if puzzle_id is not None and puzzle_id != current.puzzle_id:
            return
        expires_at = self._freeze.expires_at
        if expires_at is not None and self._clock() < expires_at:
            return
        self._freeze.clear()
        logger.info("Freeze ended on puzzle %s", current.puzzle_id)
        self._notify(NotificationLevel.INFO, "Timer freeze ended!")
        self._changed()

    def _handle_timeout(self, expired: Round) -> None:
        logger.info("Puzzle %s timed out", expired.puzzle_id)
        self._stats.record_wrong()
        self._notify(NotificationLevel.WARNING, "Time's up!")
        self._request_question(self._difficulty)

    # --- Answer submission ---

    def submit_answer(self, text: str) -> bool:
        current = self._round
        if current is None or self._state is not RoundState.ACTIVE:
            return False
        answer = text.strip()
        if not answer:
            self._notify(NotificationLevel.WARNING, "Type an answer first.")
            return False
        current.submitted_answer = answer
        time_taken = current.elapsed_seconds
        puzzle_id = current.puzzle_id
        self._set_state(RoundState.SUBMITTING)
        self._changed()
        self._runner.run(
            lambda: self._api.submit_answer(puzzle_id, answer, time_taken),
            lambda result: self._handle_answer_result(puzzle_id, result),
            lambda exc: self._handle_submit_failed(puzzle_id, exc),
        )
        return True

    def _handle_answer_result(self, puzzle_id: str, result: AnswerResult) -> None:
        current = self._round
        if current is None or current.puzzle_id != puzzle_id or self._state is not RoundState.SUBMITTING:
            logger.info("Discarding answer result for superseded puzzle %s", puzzle_id)
            return
        if result.correct:
            self._session.apply_authoritative(score=result.total_score, coins=result.total_coins)
            self._session.save()
            self._stats.record_correct()
            self._double_points = False
            self._notify(NotificationLevel.SUCCESS, _reward_message(result))
            self._request_question(self._difficulty)
            return
        self._stats.record_wrong()
        self._shake = True
        self._set_state(RoundState.ACTIVE)
        self._notify(NotificationLevel.ERROR, "Wrong answer! Try again.")
        self._changed()

    def _handle_submit_failed(self, puzzle_id: str, exc: Exception) -> None:
        current = self._round
        if current is None or current.puzzle_id != puzzle_id or self._state is not RoundState.SUBMITTING:
            return
        if self._handle_session_expiry(exc):
            self._discard_round()
            self._set_state(RoundState.IDLE)
            self._changed()
            return
        self._set_state(RoundState.ACTIVE)
        self._notify(
            NotificationLevel.ERROR,
            _describe(exc, "Failed to submit answer."),
            retryable=True,
        )
        self._changed()

    # --- Power-ups ---

    def activate_freeze(self, seconds: int) -> bool:
        if not self.can_activate_freeze(seconds):
            return False
        puzzle_id = self._round.puzzle_id
        self._freeze_pending = True
        self._changed()
        self._runner.run(
            lambda: self._api.freeze_timer(puzzle_id, seconds),
            lambda result: self._handle_freeze_result(puzzle_id, seconds, result),
            lambda exc: self._handle_freeze_failed(puzzle_id, exc),
        )
        return True

    def _handle_freeze_result(self, puzzle_id: str, seconds: int, result: FreezeResult) -> None:
        if not self._is_current(puzzle_id):
            logger.info("Discarding freeze result for superseded puzzle %s", puzzle_id)
            return
        self._freeze_pending = False
        if not result.success or result.active_until is None:
            self._notify(NotificationLevel.ERROR, "Timer freeze was not granted.")
            self._changed()
            return
        self._freeze.active = True
        self._freeze.expires_at = result.active_until.timestamp()
        self._session.apply_authoritative(coins=result.coins_left)
        self._session.save()
        logger.info("Freeze active on puzzle %s until %s", puzzle_id, result.active_until)
        self._notify(NotificationLevel.SUCCESS, f"Timer frozen for {seconds} seconds!")
        self._changed()

    def activate_double_points(self) -> bool:
        if not self.can_activate_double_points():
            return False
        puzzle_id = self._round.puzzle_id
        self._double_points_pending = True
        self._changed()
        self._runner.run(
            lambda: self._api.double_points(puzzle_id),
            lambda result: self._handle_double_points_result(puzzle_id, result),
            lambda exc: self._handle_double_points_failed(puzzle_id, exc),
        )
        return True

    def _handle_double_points_result(self, puzzle_id: str, result: DoublePointsResult) -> None:
        if not self._is_current(puzzle_id):
            logger.info("Discarding double-points result for superseded puzzle %s", puzzle_id)
            return
        self._double_points_pending = False
        if not result.success:
            self._notify(NotificationLevel.ERROR, "Double points were not granted.")
            self._changed()
            return
        self._double_points = True
        self._session.apply_authoritative(coins=result.coins_left)
        self._session.save()
        self._notify(NotificationLevel.SUCCESS, "2x points active for your next correct answer!")
        self._changed()

    def _handle_freeze_failed(self, puzzle_id: str, exc: Exception) -> None:
        if not self._is_current(puzzle_id):
            return
        self._freeze_pending = False
        self._report_power_up_failure(exc, "Failed to freeze timer.")

    def _handle_double_points_failed(self, puzzle_id: str, exc: Exception) -> None:
        if not self._is_current(puzzle_id):
            return
        self._double_points_pending = False
        self._report_power_up_failure(exc, "Failed to activate double points.")

    def _report_power_up_failure(self, exc: Exception, fallback: str) -> None:
        if self._handle_session_expiry(exc):
            self._discard_round()
            self._set_state(RoundState.IDLE)
        else:
            self._notify(NotificationLevel.ERROR, _describe(exc, fallback))
        self._changed()

    # --- Helpers ---

    def _is_current(self, puzzle_id: str) -> bool:
        return self._round is not None and self._round.puzzle_id == puzzle_id

    def _set_state(self, state: RoundState) -> None:
        if state is not self._state:
            logger.debug("Round state %s -> %s", self._state.name, state.name)
            self._state = state

    def _handle_session_expiry(self, exc: Exception) -> bool:
        if not isinstance(exc, SessionExpiredError):
            return False
        self._notify(NotificationLevel.ERROR, str(exc))
        if self.on_session_expired is not None:
            self.on_session_expired()
        return True

    def _notify(self, level: NotificationLevel, message: str, retryable: bool = False) -> None:
        if self.on_notify is not None:
            self.on_notify(Notification(level=level, message=message, retryable=retryable))

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change()


def _describe(exc: Exception, fallback: str) -> str:
    if isinstance(exc, ApiRejectedError):
        return exc.message
    if isinstance(exc, BananaClientError) and str(exc):
        return f"{fallback} {exc}"
    return fallback


def _reward_message(result: AnswerResult) -> str:
    rewards = []
    if result.points_earned > 0:
        rewards.append(f"+{result.points_earned} points")
    if result.coins_earned > 0:
        rewards.append(f"+{result.coins_earned} coins")
    if rewards:
        return f"Correct! {' & '.join(rewards)}"
    return "Correct!"
