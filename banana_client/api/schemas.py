"""Wire schemas for the Banana Monkey HTTP API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, field_validator

Difficulty = Literal["easy", "medium", "hard"]


def _coerce_id(value: object) -> object:
    # The server sends puzzle ids as strings in some payloads and ints in others.
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


# --- Auth ---


class UserRecord(BaseModel):
    """User block returned by the OTP verification endpoint."""

    id: int = 0
    username: str = ""
    email: str = ""
    role: str | None = None
    score: int | None = None
    coins: int | None = None


class LoginChallenge(BaseModel):
    """First login step: the server emailed a one-time code."""

    otp_sent: bool
    email: str


class AuthTokens(BaseModel):
    access: str
    refresh: str
    user: UserRecord | None = None


class RefreshedToken(BaseModel):
    access: str


class RegisteredUser(BaseModel):
    id: int
    username: str
    email: str


# --- Game ---


class Question(BaseModel):
    """Puzzle served by ``GET /api/game/question/``."""

    puzzle_id: str
    image_url: str
    difficulty: Difficulty
    points_value: int = 0
    time_limit: int | None = None
    created_at: datetime | None = None

    @field_validator("puzzle_id", mode="before")
    @classmethod
    def puzzle_id_as_text(cls, value: object) -> object:
        return _coerce_id(value)


class AnswerResult(BaseModel):
    correct: bool
    points_earned: int = 0
    coins_earned: int = 0
    total_score: int
    total_coins: int
    time_taken: float | None = None
    multiplier: float | None = None
    speed_bonus: int | None = None


class FreezeResult(BaseModel):
    success: bool
    coins_left: int
    active_until: datetime | None = None
    freeze_seconds: int | None = None
    coins_spent: int | None = None


class DoublePointsResult(BaseModel):
    success: bool
    coins_left: int
    multiplier: float | None = None
    coins_spent: int | None = None
    active_for_next: bool | None = None


# --- Player ---


class GameHistoryEntry(BaseModel):
    puzzle_id: str
    player_answer: str = ""
    is_correct: bool
    points_earned: int = 0
    time_taken: float = 0
    created_at: datetime | None = None

    @field_validator("puzzle_id", mode="before")
    @classmethod
    def puzzle_id_as_text(cls, value: object) -> object:
        return _coerce_id(value)


class Profile(BaseModel):
    id: int
    username: str
    email: str
    role: str = "player"
    score: int = 0
    coins: int = 0
    games_played: int = 0
    accuracy: float = 0.0
    recent_games: list[GameHistoryEntry] = []


class LeaderboardEntry(BaseModel):
    username: str
    score: int
    rank: int
    games: int | None = None
    accuracy: float | None = None


# --- Admin ---


class PlayerSummary(BaseModel):
    id: int
    username: str
    email: str
    score: int = 0


class DailyStat(BaseModel):
    date: str
    games: int = 0
    correct: int = 0
    accuracy: float = 0.0


class AdminStats(BaseModel):
    total_players: int = 0
    total_games: int = 0
    total_correct_answers: int = 0
    overall_accuracy: float = 0.0
    daily_stats: list[DailyStat] = []


class PuzzleDraft(BaseModel):
    """Payload for ``POST /api/admin/puzzles/``."""

    image_url: str
    solution: str
    difficulty: Difficulty


class Puzzle(BaseModel):
    id: int
    image_url: str
    difficulty: str
    solution: str
