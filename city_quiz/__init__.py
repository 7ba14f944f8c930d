"""CityQuiz: a multiplayer, round-based city guessing game engine."""

from .core.errors import (
    GameError,
    GameNotFoundError,
    InvalidConfigurationError,
    NoActiveRoundError,
    NotFoundError,
    PlayerNotFoundError,
    ProviderError,
    SessionEndedError,
)
from .core.game_manager import GameManager
from .core.models import CityCategory, GameConfig

__all__ = [
    "CityCategory",
    "GameConfig",
    "GameManager",
    "GameError",
    "GameNotFoundError",
    "InvalidConfigurationError",
    "NoActiveRoundError",
    "NotFoundError",
    "PlayerNotFoundError",
    "ProviderError",
    "SessionEndedError",
]
