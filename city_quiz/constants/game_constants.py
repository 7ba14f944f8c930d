"""Game-related constants shared across the engine and the API."""

import os
from pathlib import Path

DEFAULT_POINTS_PER_CORRECT_ANSWER: int = 10
DEFAULT_TIME_WEIGHTED_POINTS: int = 1000
DEFAULT_TOTAL_ROUNDS: int = 5
DEFAULT_COUNTDOWN_SECONDS: int = 15
OPTIONS_PER_QUESTION: int = 4

DEFAULT_QUESTION_BANK_PATH: Path = Path(__file__).resolve().parent.parent / "data" / "city_questions.txt"
# Directory for JSON game snapshots; unset keeps games in memory only.
GAME_DATA_DIR: str | None = os.environ.get("CITY_QUIZ_DATA_DIR") or None
