"""Domain models for the Banana Monkey client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class RoundState(Enum):
    """Lifecycle state of the round controller."""

    IDLE = auto()
    LOADING = auto()
    ACTIVE = auto()
    SUBMITTING = auto()


class NotificationLevel(Enum):
    INFO = auto()
    SUCCESS = auto()
    WARNING = auto()
    ERROR = auto()


@dataclass(slots=True)
class Notification:
    """User-facing message produced by the core; the UI decides how to show it."""

    level: NotificationLevel
    message: str
    retryable: bool = False


@dataclass(slots=True)
class PowerUpWindow:
    """Timer-freeze effect; ``expires_at`` is an epoch timestamp taken from the server."""

    active: bool = False
    expires_at: float | None = None

    def clear(self) -> None:
        self.active = False
        self.expires_at = None


@dataclass(slots=True)
class Round:
    """One active puzzle attempt."""

    puzzle_id: str
    difficulty: str
    time_limit_seconds: int
    remaining_seconds: int
    image_url: str = ""
    points_value: int = 0
    submitted_answer: str = ""

    @property
    def elapsed_seconds(self) -> int:
        elapsed = self.time_limit_seconds - self.remaining_seconds
        return max(0, min(self.time_limit_seconds, elapsed))


@dataclass(slots=True)
class User:
    """Player record as last confirmed by the server."""

    id: int
    username: str
    email: str
    role: str = "player"
    score: int = 0
    coins: int = 0

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"
