"""Static metadata describing CityQuiz."""

APP_NAME = "CityQuiz"
APP_VERSION = "0.1.0"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "CityQuiz runs multiplayer city guessing games: players join a game, "
    "answer one question per round and compete for first place on the scoreboard."
)
