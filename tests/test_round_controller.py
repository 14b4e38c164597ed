import random

import pytest

from banana_client.api.schemas import DoublePointsResult, FreezeResult
from banana_client.core.errors import ApiRejectedError, NetworkError, SessionExpiredError
from banana_client.core.models import NotificationLevel, Round, RoundState
from tests.conftest import make_answer


def start_round(controller, difficulty="medium"):
    assert controller.select_difficulty(difficulty)
    assert controller.state is RoundState.ACTIVE
    return controller.current_round


def grant_freeze(game_api, clock, seconds=5, coins_left=80):
    game_api.freeze_result = FreezeResult(
        success=True,
        coins_left=coins_left,
        active_until=clock.at(seconds),
        freeze_seconds=seconds,
        coins_spent=100 - coins_left,
    )


# --- Round lifecycle ---


def test_starts_idle(controller):
    assert controller.state is RoundState.IDLE
    assert controller.current_round is None
    assert not controller.can_submit()


@pytest.mark.parametrize("difficulty, limit", [("easy", 60), ("medium", 45), ("hard", 30)])
def test_time_limit_follows_difficulty(controller, difficulty, limit):
    current = start_round(controller, difficulty)
    assert current.time_limit_seconds == limit
    assert current.remaining_seconds == limit


def test_select_difficulty_goes_through_loading(deferred_controller, deferred_runner, game_api):
    assert deferred_controller.select_difficulty("easy")
    assert deferred_controller.state is RoundState.LOADING
    assert deferred_controller.current_round is None

    deferred_runner.resolve_next()

    assert deferred_controller.state is RoundState.ACTIVE
    assert deferred_controller.current_round.puzzle_id == "puzzle-1"
    assert game_api.question_requests == ["easy"]


def test_select_difficulty_only_from_idle(controller, game_api):
    start_round(controller)
    assert not controller.select_difficulty("hard")
    assert game_api.question_requests == ["medium"]


def test_unknown_difficulty_is_rejected(controller, game_api, notifications):
    assert not controller.select_difficulty("impossible")
    assert controller.state is RoundState.IDLE
    assert game_api.question_requests == []
    assert notifications[-1].level is NotificationLevel.WARNING


def test_ticks_then_submit_reports_elapsed_time(controller, game_api):
    current = start_round(controller)
    for _ in range(10):
        controller.tick()
    assert current.remaining_seconds == 35

    game_api.answer_results.append(make_answer(False))
    assert controller.submit_answer("banana")

    assert game_api.submissions == [("puzzle-1", "banana", 10)]


def test_submit_trims_answer_and_rejects_empty(controller, game_api, notifications):
    start_round(controller)

    assert not controller.submit_answer("   ")
    assert game_api.submissions == []
    assert notifications[-1].level is NotificationLevel.WARNING

    game_api.answer_results.append(make_answer(False))
    controller.submit_answer("  monkey ")
    assert game_api.submissions[0][1] == "monkey"


def test_correct_answer_updates_session_and_loads_next(controller, game_api, session, notifications):
    start_round(controller)
    game_api.answer_results.append(make_answer(True, total_score=55, total_coins=105))

    controller.submit_answer("banana")

    assert session.score == 55
    assert session.coins == 105
    assert controller.state is RoundState.ACTIVE
    assert controller.current_round.puzzle_id == "puzzle-2"
    assert game_api.question_requests == ["medium", "medium"]
    assert controller.get_stats().correct == 1
    assert notifications[-1].level is NotificationLevel.SUCCESS
    assert notifications[-1].message == "Correct! +10 points & +5 coins"


def test_wrong_answer_keeps_round_and_shakes(controller, game_api, session):
    current = start_round(controller)
    controller.tick()
    game_api.answer_results.append(make_answer(False, total_score=999, total_coins=999))

    controller.submit_answer("apple")

    assert controller.state is RoundState.ACTIVE
    assert controller.current_round is current
    assert current.remaining_seconds == 44
    assert controller.is_shaking()
    assert controller.get_stats().wrong == 1
    assert session.score == 40
    assert session.coins == 100

    controller.clear_shake()
    assert not controller.is_shaking()


def test_second_submit_while_pending_is_ignored(deferred_controller, deferred_runner, game_api):
    deferred_controller.select_difficulty("medium")
    deferred_runner.resolve_next()

    assert deferred_controller.submit_answer("banana")
    assert deferred_controller.state is RoundState.SUBMITTING
    assert not deferred_controller.submit_answer("banana")
    assert not deferred_controller.can_submit()
    assert len(deferred_runner.pending) == 1


def test_skip_round_loads_new_question_without_scoring(controller, game_api):
    start_round(controller, "hard")
    assert controller.skip_round()
    assert controller.current_round.puzzle_id == "puzzle-2"
    assert game_api.question_requests == ["hard", "hard"]
    stats = controller.get_stats()
    assert (stats.correct, stats.wrong) == (0, 0)


def test_leave_discards_in_flight_question(deferred_controller, deferred_runner):
    deferred_controller.select_difficulty("medium")
    deferred_controller.leave()
    deferred_runner.resolve_next()

    assert deferred_controller.state is RoundState.IDLE
    assert deferred_controller.current_round is None


def test_leave_resets_stats(controller, game_api):
    start_round(controller)
    game_api.answer_results.append(make_answer(False))
    controller.submit_answer("wrong")
    controller.leave()
    assert controller.get_stats().wrong == 0
    assert controller.state is RoundState.IDLE


# --- Countdown ---


def test_timeout_counts_wrong_and_fetches_exactly_once(controller, game_api, notifications):
    start_round(controller, "hard")
    for _ in range(30):
        controller.tick()

    assert game_api.question_requests == ["hard", "hard"]
    assert controller.get_stats().wrong == 1
    assert any(n.message == "Time's up!" for n in notifications)

    current = controller.current_round
    assert current.puzzle_id == "puzzle-2"
    assert current.remaining_seconds == 30


def test_ticks_after_timeout_while_loading_do_nothing(deferred_controller, deferred_runner, game_api):
    deferred_controller.select_difficulty("hard")
    deferred_runner.resolve_next()
    for _ in range(35):
        deferred_controller.tick()

    assert deferred_controller.state is RoundState.LOADING
    assert game_api.question_requests == ["hard"]
    assert len(deferred_runner.pending) == 1
    assert deferred_controller.get_stats().wrong == 1


def test_tick_for_stale_puzzle_is_ignored(controller):
    current = start_round(controller)
    controller.tick("puzzle-0")
    assert current.remaining_seconds == 45
    controller.tick(current.puzzle_id)
    assert current.remaining_seconds == 44


def test_countdown_continues_while_submitting(deferred_controller, deferred_runner):
    deferred_controller.select_difficulty("medium")
    deferred_runner.resolve_next()
    deferred_controller.submit_answer("banana")

    deferred_controller.tick()

    assert deferred_controller.current_round.remaining_seconds == 44


def test_late_answer_after_timeout_is_discarded(deferred_controller, deferred_runner, game_api, session):
    deferred_controller.select_difficulty("hard")
    deferred_runner.resolve_next()
    game_api.answer_results.append(make_answer(True, total_score=999, total_coins=999))
    deferred_controller.submit_answer("banana")
    for _ in range(30):
        deferred_controller.tick()

    deferred_runner.resolve_all()

    assert session.score == 40
    assert session.coins == 100
    assert deferred_controller.current_round.puzzle_id == "puzzle-2"
    assert deferred_controller.state is RoundState.ACTIVE
    assert deferred_controller.get_stats().correct == 0


def test_remaining_never_increases_or_goes_negative(controller, game_api, clock):
    rng = random.Random(7)
    start_round(controller, "hard")
    last_seen = {}
    for _ in range(500):
        action = rng.choice(["tick", "tick", "tick", "poll", "freeze", "advance"])
        if action == "tick":
            controller.tick()
        elif action == "poll":
            controller.check_freeze_expiry()
        elif action == "advance":
            clock.advance(rng.choice([0.25, 1.0, 3.0]))
        elif controller.can_activate_freeze(5):
            grant_freeze(game_api, clock, coins_left=100)
            controller.activate_freeze(5)

        current = controller.current_round
        assert 0 <= current.remaining_seconds <= current.time_limit_seconds
        previous = last_seen.get(current.puzzle_id)
        if previous is not None:
            assert current.remaining_seconds <= previous
        last_seen[current.puzzle_id] = current.remaining_seconds


def test_elapsed_seconds_is_clamped():
    assert Round("p", "easy", 60, 60).elapsed_seconds == 0
    assert Round("p", "easy", 60, 0).elapsed_seconds == 60
    assert Round("p", "easy", 60, 75).elapsed_seconds == 0


# --- Timer freeze ---


def test_freeze_pauses_countdown_until_expiry(controller, game_api, clock, session, notifications):
    current = start_round(controller)
    controller.tick()
    grant_freeze(game_api, clock, seconds=5, coins_left=80)

    assert controller.activate_freeze(5)
    assert controller.is_frozen()
    assert session.coins == 80
    for _ in range(3):
        controller.tick()
    assert current.remaining_seconds == 44

    clock.advance(4.75)
    controller.check_freeze_expiry()
    assert controller.is_frozen()

    clock.advance(0.25)
    controller.check_freeze_expiry()
    assert not controller.is_frozen()
    assert current.remaining_seconds == 44
    assert notifications[-1].message == "Timer freeze ended!"

    controller.tick()
    assert current.remaining_seconds == 43


def test_second_freeze_while_active_is_rejected(controller, game_api, clock, session):
    start_round(controller)
    grant_freeze(game_api, clock)
    controller.activate_freeze(5)
    expires_at = controller.freeze_window.expires_at

    assert not controller.can_activate_freeze(10)
    assert not controller.activate_freeze(10)
    assert controller.freeze_window.expires_at == expires_at
    assert len(game_api.freeze_requests) == 1
    assert session.coins == 80


def test_freeze_needs_enough_coins(controller, game_api, session):
    start_round(controller)
    session.apply_authoritative(coins=19)
    assert not controller.activate_freeze(5)
    assert controller.can_activate_freeze(5) is False
    assert game_api.freeze_requests == []


def test_unknown_freeze_duration_is_rejected(controller, game_api):
    start_round(controller)
    assert not controller.activate_freeze(7)
    assert game_api.freeze_requests == []


def test_rejected_freeze_changes_nothing(controller, game_api, session, notifications):
    current = start_round(controller)
    game_api.errors["freeze_timer"] = ApiRejectedError("Not enough coins", status_code=400)

    controller.activate_freeze(5)

    assert not controller.is_frozen()
    assert session.coins == 100
    assert notifications[-1].level is NotificationLevel.ERROR
    assert notifications[-1].message == "Not enough coins"
    controller.tick()
    assert current.remaining_seconds == 44
    assert controller.can_activate_freeze(5)


def test_unsuccessful_freeze_payload_changes_nothing(controller, game_api, session):
    start_round(controller)
    game_api.freeze_result = FreezeResult(success=False, coins_left=0)

    controller.activate_freeze(5)

    assert not controller.is_frozen()
    assert session.coins == 100


def test_freeze_result_for_old_round_is_discarded(deferred_controller, deferred_runner, game_api, clock, session):
    deferred_controller.select_difficulty("medium")
    deferred_runner.resolve_next()
    grant_freeze(game_api, clock)
    deferred_controller.activate_freeze(5)
    deferred_controller.skip_round()

    deferred_runner.resolve_all()

    assert deferred_controller.current_round.puzzle_id == "puzzle-2"
    assert not deferred_controller.is_frozen()
    assert session.coins == 100


def test_freeze_is_cleared_by_next_round(controller, game_api, clock):
    start_round(controller)
    grant_freeze(game_api, clock)
    controller.activate_freeze(5)
    controller.skip_round()
    assert not controller.is_frozen()
    assert controller.freeze_window.expires_at is None


# --- Double points ---


def test_double_points_until_next_correct_answer(controller, game_api, session):
    start_round(controller)
    game_api.double_points_result = DoublePointsResult(success=True, coins_left=50, multiplier=2.0)

    assert controller.activate_double_points()
    assert controller.is_double_points_active()
    assert session.coins == 50
    assert not controller.can_activate_double_points()

    game_api.answer_results.append(make_answer(False, total_coins=50))
    controller.submit_answer("nope")
    assert controller.is_double_points_active()

    game_api.answer_results.append(make_answer(True, total_score=60, total_coins=55, points_earned=20))
    controller.submit_answer("banana")
    assert not controller.is_double_points_active()
    assert session.score == 60


def test_double_points_failure_changes_nothing(controller, game_api, session):
    start_round(controller)
    game_api.errors["double_points"] = NetworkError("Could not reach the game server.")

    controller.activate_double_points()

    assert not controller.is_double_points_active()
    assert session.coins == 100
    assert controller.can_activate_double_points()


# --- Failures ---


def test_question_load_failure_returns_to_idle(controller, game_api, notifications):
    game_api.errors["get_question"] = NetworkError("Could not reach the game server.")

    controller.select_difficulty("easy")

    assert controller.state is RoundState.IDLE
    assert notifications[-1].level is NotificationLevel.ERROR
    assert notifications[-1].retryable

    del game_api.errors["get_question"]
    assert controller.select_difficulty("easy")
    assert controller.state is RoundState.ACTIVE


def test_submit_network_failure_returns_to_active_without_retry(controller, game_api, notifications):
    current = start_round(controller)
    game_api.errors["submit_answer"] = NetworkError("Could not reach the game server.")

    controller.submit_answer("banana")

    assert controller.state is RoundState.ACTIVE
    assert controller.current_round is current
    assert len(game_api.submissions) == 1
    assert notifications[-1].retryable
    assert controller.can_submit()


def test_session_expiry_during_submit_ends_round(controller, game_api, notifications):
    expired = []
    controller.on_session_expired = lambda: expired.append(True)
    start_round(controller)
    game_api.errors["submit_answer"] = SessionExpiredError("Your session has expired. Please log in again.")

    controller.submit_answer("banana")

    assert expired == [True]
    assert controller.state is RoundState.IDLE
    assert controller.current_round is None


def test_change_observer_is_notified(controller):
    changes = []
    controller.on_change = lambda: changes.append(controller.state)
    start_round(controller)
    assert changes[0] is RoundState.LOADING
    assert changes[-1] is RoundState.ACTIVE


def test_double_points_result_for_old_round_is_discarded(deferred_controller, deferred_runner, game_api, session):
    deferred_controller.select_difficulty("medium")
    deferred_runner.resolve_next()
    game_api.double_points_result = DoublePointsResult(success=True, coins_left=50, multiplier=2.0)
    deferred_controller.activate_double_points()
    deferred_controller.skip_round()

    deferred_runner.resolve_all()

    assert deferred_controller.current_round.puzzle_id == "puzzle-2"
    assert not deferred_controller.is_double_points_active()
    assert session.coins == 100
    assert deferred_controller.can_activate_double_points()


# --- Chosen difficulty ---


def test_follow_up_questions_use_chosen_difficulty(controller, game_api):
    game_api.served_difficulty = "easy"
    start_round(controller, "hard")
    assert controller.current_round.time_limit_seconds == 60

    controller.skip_round()
    game_api.answer_results.append(make_answer(True, total_score=50, total_coins=105))
    controller.submit_answer("banana")
    for _ in range(60):
        controller.tick()

    assert game_api.question_requests == ["hard", "hard", "hard", "hard"]
    assert controller.difficulty == "hard"
