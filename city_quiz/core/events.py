"""Game event notifications.

The engine reports what happened through a listener instead of printing.
``LoggingGameEventListener`` is the default and writes one log line per event.
"""

from __future__ import annotations

import logging
from typing import Protocol

from city_quiz.core.models import GameConfig, Participant, QuestionView, RankingEntry

logger = logging.getLogger(__name__)


class GameEventListener(Protocol):
    def game_created(self, game_id: int, config: GameConfig) -> None: ...

    def player_joined(self, game_id: int, participant: Participant) -> None: ...

    def player_left(self, game_id: int, account_id: int) -> None: ...

    def round_started(self, game_id: int, question: QuestionView) -> None: ...

    def answer_scored(self, game_id: int, participant: Participant, delta: int) -> None: ...

    def round_closed(self, game_id: int, round_number: int) -> None: ...

    def game_finished(self, game_id: int, ranking: list[RankingEntry]) -> None: ...


class LoggingGameEventListener:
    """Writes game events to the ``city_quiz.core.events`` logger."""

    def game_created(self, game_id: int, config: GameConfig) -> None:
        logger.info(
            "Game %s created: category=%s rounds=%s countdown=%ss",
            game_id,
            config.category.value,
            config.total_rounds,
            config.countdown_seconds,
        )

    def player_joined(self, game_id: int, participant: Participant) -> None:
        logger.info("Player added to game %s: %s", game_id, participant.display_name)

    def player_left(self, game_id: int, account_id: int) -> None:
        logger.info("Account %s removed from game %s", account_id, game_id)

    def round_started(self, game_id: int, question: QuestionView) -> None:
        logger.info("Game %s round %s started", game_id, question.round_number)

    def answer_scored(self, game_id: int, participant: Participant, delta: int) -> None:
        logger.info(
            "Game %s: %s scored %s (total %s)",
            game_id,
            participant.display_name,
            delta,
            participant.score,
        )

    def round_closed(self, game_id: int, round_number: int) -> None:
        logger.info("Game %s round %s closed", game_id, round_number)

    def game_finished(self, game_id: int, ranking: list[RankingEntry]) -> None:
        winners = ", ".join(entry.display_name for entry in ranking if entry.rank == 1)
        logger.info("Game %s finished; winners: %s", game_id, winners or "none")
