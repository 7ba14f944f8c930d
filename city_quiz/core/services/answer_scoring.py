"""Scoring policies turning a submitted answer into a score delta.

A policy receives the pending correct answer and the submitted text, plus the
round timing when it is known, and returns a non-negative integer. Policies
are pure: the same inputs always give the same delta.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from city_quiz.constants.game_constants import (
    DEFAULT_POINTS_PER_CORRECT_ANSWER,
    DEFAULT_TIME_WEIGHTED_POINTS,
)


class ScoringPolicy(Protocol):
    def score(
        self,
        correct_answer: str,
        submitted_answer: str,
        *,
        elapsed_seconds: float | None = None,
        countdown_seconds: int | None = None,
    ) -> int: ...


def normalize_answer(answer: str) -> str:
    """Case-fold and collapse whitespace so "  new  YORK" matches "New York"."""
    return " ".join(answer.split()).casefold()


def answers_match(correct_answer: str, submitted_answer: str) -> bool:
    return normalize_answer(correct_answer) == normalize_answer(submitted_answer)


@dataclass(frozen=True, slots=True)
class ExactMatchScoring:
    """Fixed points for a correct answer, nothing otherwise."""

    points: int = DEFAULT_POINTS_PER_CORRECT_ANSWER

    def __post_init__(self) -> None:
        if self.points < 0:
            raise ValueError("Points must not be negative.")

    def score(
        self,
        correct_answer: str,
        submitted_answer: str,
        *,
        elapsed_seconds: float | None = None,
        countdown_seconds: int | None = None,
    ) -> int:
        return self.points if answers_match(correct_answer, submitted_answer) else 0


@dataclass(frozen=True, slots=True)
class TimeWeightedScoring:
    """Faster correct answers earn more, from 100% down to a 50% floor.

    Without timing data a correct answer is worth full points.
    """

    points: int = DEFAULT_TIME_WEIGHTED_POINTS

    def __post_init__(self) -> None:
        if self.points < 0:
            raise ValueError("Points must not be negative.")

    def score(
        self,
        correct_answer: str,
        submitted_answer: str,
        *,
        elapsed_seconds: float | None = None,
        countdown_seconds: int | None = None,
    ) -> int:
        if not answers_match(correct_answer, submitted_answer):
            return 0
        if elapsed_seconds is None or not countdown_seconds or countdown_seconds <= 0:
            return self.points

        elapsed = min(max(elapsed_seconds, 0.0), float(countdown_seconds))
        speed_factor = 1 - (elapsed / countdown_seconds) / 2
        return max(int(self.points * speed_factor), self.points // 2)
