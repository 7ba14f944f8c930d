"""Domain models for the city quiz engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class CityCategory(str, Enum):
    """Content categories a game can draw its questions from."""

    WORLD = "WORLD"
    EUROPE = "EUROPE"
    ASIA = "ASIA"
    AFRICA = "AFRICA"
    NORTH_AMERICA = "NORTH_AMERICA"
    SOUTH_AMERICA = "SOUTH_AMERICA"
    OCEANIA = "OCEANIA"
    LANDMARKS = "LANDMARKS"
    CAPITALS = "CAPITALS"


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Settings fixed when a game is created."""

    category: CityCategory
    total_rounds: int
    countdown_seconds: int


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question supplied by a question provider."""

    prompt: str
    options: list[str]
    correct_answer: str
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class QuestionView:
    """Question as shown to players: everything but the correct answer."""

    game_id: int
    round_number: int
    prompt: str
    options: list[str]
    countdown_seconds: int
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class Account:
    """Identity record owned by the account directory."""

    account_id: int
    display_name: str


@dataclass(frozen=True, slots=True)
class Participant:
    """An account's membership and running score within one game."""

    account_id: int
    display_name: str
    score: int = 0
    joined_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass(frozen=True, slots=True)
class RankingEntry:
    """One line of a derived scoreboard."""

    account_id: int
    display_name: str
    score: int
    rank: int


@dataclass(frozen=True, slots=True)
class ProgressView:
    """Read-only snapshot of a game's progress and scoreboard."""

    game_id: int
    category: CityCategory
    current_round: int
    total_rounds: int
    countdown_seconds: int
    is_ended: bool
    round_open: bool
    ranking: list[RankingEntry]
