"""Static metadata describing the Banana Monkey client."""

APP_NAME = "Banana Monkey"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "Banana Monkey is a timed picture puzzle game. Pick a difficulty, look at the image "
    "and type the answer before the clock runs out. Spend coins on power-ups to freeze "
    "the timer or double the points of your next correct answer."
)

HELP_TEXT = (
    "Log in with your username and password, then enter the six-digit code sent to your email.\n\n"
    "Easy rounds last 60 seconds, medium 45 and hard 30. A wrong answer can be retried while "
    "time remains; running out of time counts as a miss and loads the next puzzle.\n\n"
    "Freeze 5s / Freeze 10s stop the countdown for a while. 2x Points doubles the reward of "
    "your next correct answer. Coin costs are decided by the server."
)
