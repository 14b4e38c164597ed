"""Network configuration constants for the Banana Monkey client."""

DEFAULT_API_BASE_URL: str = "http://127.0.0.1:8000"
DEFAULT_REQUEST_TIMEOUT_SECONDS: float = 15.0
REQUEST_WORKER_COUNT: int = 4

# Auth
REGISTER_PATH: str = "/api/register/"
LOGIN_PATH: str = "/api/login/"
VERIFY_OTP_PATH: str = "/api/verify-otp/"
LOGOUT_PATH: str = "/api/logout/"
TOKEN_REFRESH_PATH: str = "/api/token/refresh/"

# Game
QUESTION_PATH: str = "/api/game/question/"
ANSWER_PATH: str = "/api/game/answer/"
FREEZE_TIMER_PATH: str = "/api/game/freeze-timer/"
DOUBLE_POINTS_PATH: str = "/api/game/double-points/"

# Player
PROFILE_PATH: str = "/api/profile/"
HISTORY_PATH: str = "/api/history/"
LEADERBOARD_PATH: str = "/api/leaderboard/"

# Admin
ADMIN_PLAYERS_PATH: str = "/api/admin/players/"
ADMIN_DELETE_PLAYER_PATH: str = "/api/admin/players/{player_id}/delete/"
ADMIN_STATS_PATH: str = "/api/admin/stats/"
ADMIN_PUZZLES_PATH: str = "/api/admin/puzzles/"
ADMIN_DELETE_PUZZLE_PATH: str = "/api/admin/puzzles/{puzzle_id}/delete/"
