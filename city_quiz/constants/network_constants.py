"""Network configuration constants for the quiz server."""

import os

DEFAULT_HOST: str = os.environ.get("CITY_QUIZ_HOST", "0.0.0.0")
DEFAULT_PORT: int = int(os.environ.get("CITY_QUIZ_PORT", "8000"))
API_LOG_LEVEL: str = os.environ.get("CITY_QUIZ_LOG_LEVEL", "info")
