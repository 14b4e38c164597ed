"""Game-related constants shared across UI and core layers."""

DIFFICULTIES: tuple[str, ...] = ("easy", "medium", "hard")
DEFAULT_DIFFICULTY: str = "medium"

DIFFICULTY_TIME_LIMITS: dict[str, int] = {
    "easy": 60,
    "medium": 45,
    "hard": 30,
}

# Display-only costs; the server decides the real deduction.
FREEZE_COSTS: dict[int, int] = {
    5: 20,
    10: 35,
}
DOUBLE_POINTS_COST: int = 50

TICK_INTERVAL_MS: int = 1000
FREEZE_POLL_INTERVAL_MS: int = 250
SHAKE_DURATION_MS: int = 500
TIME_LOW_WARNING_SECONDS: int = 10

OTP_CODE_LENGTH: int = 6
