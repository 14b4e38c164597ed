import json
import os
from datetime import datetime, timezone

import pytest
import requests
from PySide6.QtWidgets import QApplication

from banana_client.api.schemas import (
    AnswerResult,
    AuthTokens,
    DoublePointsResult,
    FreezeResult,
    LoginChallenge,
    Question,
    RegisteredUser,
    UserRecord,
)
from banana_client.core.models import User
from banana_client.core.round_controller import RoundController
from banana_client.core.services.player_session import PlayerSession


class FakeClock:
    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def at(self, offset: float) -> datetime:
        return datetime.fromtimestamp(self.now + offset, tz=timezone.utc)


class FakeGameApi:
    """Records every call; results and errors are configured per test."""

    def __init__(self) -> None:
        self.question_requests: list[str] = []
        self.submissions: list[tuple[str, str, int]] = []
        self.freeze_requests: list[tuple[str, int]] = []
        self.double_points_requests: list[str] = []
        self.answer_results: list[AnswerResult] = []
        self.freeze_result: FreezeResult | None = None
        self.double_points_result: DoublePointsResult | None = None
        self.errors: dict[str, Exception] = {}
        # Difficulty the server reports back; defaults to the requested one.
        self.served_difficulty: str | None = None

    def get_question(self, difficulty: str) -> Question:
        self.question_requests.append(difficulty)
        if "get_question" in self.errors:
            raise self.errors["get_question"]
        return Question(
            puzzle_id=f"puzzle-{len(self.question_requests)}",
            image_url="",
            difficulty=self.served_difficulty or difficulty,
            points_value=10,
        )

    def submit_answer(self, puzzle_id: str, answer: str, time_taken: int) -> AnswerResult:
        self.submissions.append((puzzle_id, answer, time_taken))
        if "submit_answer" in self.errors:
            raise self.errors["submit_answer"]
        return self.answer_results.pop(0)

    def freeze_timer(self, puzzle_id: str, freeze_seconds: int) -> FreezeResult:
        self.freeze_requests.append((puzzle_id, freeze_seconds))
        if "freeze_timer" in self.errors:
            raise self.errors["freeze_timer"]
        return self.freeze_result

    def double_points(self, puzzle_id: str) -> DoublePointsResult:
        self.double_points_requests.append(puzzle_id)
        if "double_points" in self.errors:
            raise self.errors["double_points"]
        return self.double_points_result


class FakeAuthApi:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.tokens = AuthTokens(
            access="access-9",
            refresh="refresh-9",
            user=UserRecord(id=9, username="kong", email="kong@example.com", role="player", score=20, coins=75),
        )
        self.logout_error: Exception | None = None

    def register(self, username, email, password):
        self.calls.append(("register", username, email))
        return RegisteredUser(id=9, username=username, email=email)

    def login(self, username, password):
        self.calls.append(("login", username))
        return LoginChallenge(otp_sent=True, email="kong@example.com")

    def verify_otp(self, email, otp):
        self.calls.append(("verify_otp", email, otp))
        return self.tokens

    def logout(self, access_token):
        self.calls.append(("logout", access_token))
        if self.logout_error is not None:
            raise self.logout_error


class DeferredRunner:
    """Holds requests until the test resolves them, like a slow network."""

    def __init__(self) -> None:
        self.pending: list[tuple] = []

    def run(self, call, on_success, on_failure) -> None:
        self.pending.append((call, on_success, on_failure))

    def resolve_next(self) -> None:
        call, on_success, on_failure = self.pending.pop(0)
        try:
            result = call()
        except Exception as exc:
            on_failure(exc)
            return
        on_success(result)

    def resolve_all(self) -> None:
        while self.pending:
            self.resolve_next()


def make_answer(correct: bool, total_score: int = 0, total_coins: int = 100, **extra) -> AnswerResult:
    return AnswerResult(
        correct=correct,
        points_earned=extra.pop("points_earned", 10 if correct else 0),
        coins_earned=extra.pop("coins_earned", 5 if correct else 0),
        total_score=total_score,
        total_coins=total_coins,
        **extra,
    )


def make_response(status: int, body=None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = b"" if body is None else json.dumps(body).encode("utf-8")
    response.headers["Content-Type"] = "application/json"
    return response


class FakeHttpSession:
    """Stands in for ``requests.Session``; replies are queued per test."""

    def __init__(self) -> None:
        self.headers: dict[str, str] = {}
        self.calls: list[dict] = []
        self.replies: list = []

    def queue(self, status: int, body=None) -> None:
        self.replies.append(make_response(status, body))

    def queue_error(self, exc: Exception) -> None:
        self.replies.append(exc)

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        self.calls.append(
            {"method": method, "url": url, "params": params, "json": json, "headers": dict(headers or {})}
        )
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def get(self, url, timeout=None):
        return self.request("GET", url, timeout=timeout)


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def session():
    player_session = PlayerSession()
    player_session.set_tokens("access-1", "refresh-1")
    player_session.set_user(User(id=7, username="kong", email="kong@example.com", score=40, coins=100))
    return player_session


@pytest.fixture()
def game_api():
    return FakeGameApi()


@pytest.fixture()
def notifications():
    return []


@pytest.fixture()
def controller(game_api, session, clock, notifications):
    round_controller = RoundController(game_api, session, clock=clock)
    round_controller.on_notify = notifications.append
    return round_controller


@pytest.fixture()
def deferred_runner():
    return DeferredRunner()


@pytest.fixture()
def deferred_controller(game_api, session, clock, notifications, deferred_runner):
    round_controller = RoundController(game_api, session, runner=deferred_runner, clock=clock)
    round_controller.on_notify = notifications.append
    return round_controller


@pytest.fixture()
def http():
    return FakeHttpSession()


@pytest.fixture()
def auth_api():
    return FakeAuthApi()


@pytest.fixture(scope="session")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return QApplication.instance() or QApplication([])
