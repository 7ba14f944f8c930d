"""Service for managing the round index and the pending answer of a game."""

from __future__ import annotations

from datetime import datetime, timezone

from city_quiz.core.errors import SessionEndedError
from city_quiz.core.models import Question


class RoundState:
    """Tracks which round is being played and the answer that scores it."""

    def __init__(
        self,
        total_rounds: int,
        current_round: int = 0,
        pending_answer: str | None = None,
        round_started_at: datetime | None = None,
    ) -> None:
        if total_rounds <= 0:
            raise ValueError("Total rounds must be a positive integer.")
        if not 0 <= current_round <= total_rounds:
            raise ValueError(f"Round {current_round} is outside 0..{total_rounds}.")
        self._total_rounds = total_rounds
        self._current_round = current_round
        self._pending_answer = pending_answer
        self._round_started_at = round_started_at if pending_answer is not None else None

    @property
    def total_rounds(self) -> int:
        return self._total_rounds

    @property
    def current_round(self) -> int:
        return self._current_round

    @property
    def pending_answer(self) -> str | None:
        return self._pending_answer

    def is_ended(self) -> bool:
        return self._current_round >= self._total_rounds

    def is_round_open(self) -> bool:
        return self._pending_answer is not None

    def open_round(self, question: Question) -> int:
        """Start the next round with ``question``. Returns the new round index."""
        if self.is_ended():
            raise SessionEndedError()
        self._pending_answer = None
        self._current_round += 1
        self._pending_answer = question.correct_answer
        self._round_started_at = datetime.now(timezone.utc)
        return self._current_round

    def close_round(self) -> None:
        self._pending_answer = None
        self._round_started_at = None

    def get_round_start_time(self) -> datetime | None:
        return self._round_started_at

    def elapsed_seconds(self, now: datetime | None = None) -> float | None:
        """Seconds since the open round started, or None between rounds."""
        if self._round_started_at is None:
            return None
        now = now or datetime.now(timezone.utc)
        return max(0.0, (now - self._round_started_at).total_seconds())
