"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "Banana Monkey"

NAV_BUTTON_PLAY: str = "Play"
NAV_BUTTON_PROFILE: str = "Profile"
NAV_BUTTON_LEADERBOARD: str = "Leaderboard"
NAV_BUTTON_ADMIN: str = "Admin"
NAV_BUTTON_HELP: str = "Help"
NAV_BUTTON_ABOUT: str = "About"
NAV_BUTTON_LOGOUT: str = "Logout"

LOGIN_TITLE: str = "Welcome back, monkey!"
LOGIN_BUTTON: str = "Send login code"
REGISTER_BUTTON: str = "Create account"
OTP_TITLE: str = "Check your email"
OTP_PROMPT_TEMPLATE: str = "We sent a 6-digit code to {email}."
OTP_VERIFY_BUTTON: str = "Verify"
OTP_BACK_BUTTON: str = "Back"

DIFFICULTY_PROMPT: str = "Choose your challenge"
DIFFICULTY_LABELS: dict[str, str] = {
    "easy": "Easy Peasy (60s)",
    "medium": "Monkey Challenge (45s)",
    "hard": "Banana Expert (30s)",
}
ANSWER_PLACEHOLDER: str = "Type your answer and press Enter"
SUBMIT_BUTTON: str = "Submit"
SKIP_BUTTON: str = "Skip"
CHANGE_DIFFICULTY_BUTTON: str = "Change difficulty"
FREEZE_BUTTON_TEMPLATE: str = "Freeze {seconds}s ({cost} coins)"
DOUBLE_POINTS_BUTTON_TEMPLATE: str = "2x Points ({cost} coins)"
LOADING_MESSAGE: str = "Loading puzzle..."
FROZEN_LABEL: str = "Frozen"

HEADER_TEMPLATE: str = "{username}  |  Score: {score}  |  Coins: {coins}"
STATS_TEMPLATE: str = "Correct: {correct}   Wrong: {wrong}   Streak: {streak}"

LEADERBOARD_COLUMNS: tuple[str, ...] = ("Rank", "Player", "Score", "Games", "Accuracy")
HISTORY_COLUMNS: tuple[str, ...] = ("Puzzle", "Answer", "Result", "Points", "Time (s)", "Played")
PLAYER_COLUMNS: tuple[str, ...] = ("ID", "Username", "Email", "Score")
DAILY_STATS_COLUMNS: tuple[str, ...] = ("Date", "Games", "Correct", "Accuracy")
REFRESH_BUTTON: str = "Refresh"
DELETE_PLAYER_BUTTON: str = "Delete selected player"
ADD_PUZZLE_BUTTON: str = "Add puzzle"
DELETE_PUZZLE_BUTTON: str = "Delete puzzle"
