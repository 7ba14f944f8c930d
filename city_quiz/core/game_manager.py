"""Business logic for running games, shared by every transport."""

from __future__ import annotations

import logging

from city_quiz.core.accounts import AccountDirectory
from city_quiz.core.errors import (
    AccountNotFoundError,
    GameNotFoundError,
    ProviderError,
    SessionEndedError,
)
from city_quiz.core.events import GameEventListener, LoggingGameEventListener
from city_quiz.core.game_repository import GameRepository, InMemoryGameRepository
from city_quiz.core.models import (
    GameConfig,
    Participant,
    ProgressView,
    Question,
    QuestionView,
    RankingEntry,
)
from city_quiz.core.question_bank import QuestionProvider
from city_quiz.core.services.answer_scoring import ExactMatchScoring, ScoringPolicy
from city_quiz.core.services.quiz_game import QuizGame, validate_config

logger = logging.getLogger(__name__)


def _require_live(game: QuizGame) -> None:
    # A caller may have fetched the game just before another thread deleted it.
    if game.deleted:
        raise GameNotFoundError(game.game_id)


class GameManager:
    """Facade over games: creation, roster, rounds, answers and scoreboards.

    Every operation on a game runs under that game's lock, so mutations on
    one game are serialized while different games proceed independently.
    """

    def __init__(
        self,
        question_provider: QuestionProvider,
        accounts: AccountDirectory,
        repository: GameRepository | None = None,
        scoring_policy: ScoringPolicy | None = None,
        listener: GameEventListener | None = None,
    ) -> None:
        self._provider = question_provider
        self._accounts = accounts
        self._repository = repository if repository is not None else InMemoryGameRepository()
        self._scoring = scoring_policy if scoring_policy is not None else ExactMatchScoring()
        self._listener = listener if listener is not None else LoggingGameEventListener()

    # --- Lifecycle ---

    def create_game(self, config: GameConfig) -> ProgressView:
        validate_config(config)
        game = QuizGame(self._repository.next_id(), config)
        with game.lock:
            self._repository.add(game)
            progress = game.progress()
        self._listener.game_created(game.game_id, config)
        return progress

    def delete_game(self, game_id: int) -> None:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            self._repository.delete(game_id)
            game.deleted = True
        logger.info("Game %s deleted", game_id)

    def list_games(self) -> list[int]:
        return self._repository.list_ids()

    # --- Roster ---

    def join_game(self, game_id: int, account_id: int) -> Participant:
        game = self._repository.get(game_id)
        account = self._accounts.find_account(account_id)
        with game.lock:
            _require_live(game)
            participant, is_new = game.add_player(account)
            if is_new:
                self._repository.save(game)
        if is_new:
            self._listener.player_joined(game_id, participant)
        return participant

    def remove_player(self, game_id: int, account_id: int) -> None:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            removed = game.remove_player(account_id)
            if removed:
                self._repository.save(game)
        if removed:
            self._listener.player_left(game_id, account_id)

    # --- Rounds ---

    def advance_round(self, game_id: int) -> QuestionView:
        """Open the next round and return its question without the answer.

        The round index only moves once the provider has produced a question.
        """
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            if game.is_ended():
                raise SessionEndedError(game_id)
            question = self._fetch_question(game)
            view = game.open_round(question)
            self._repository.save(game)
        self._listener.round_started(game_id, view)
        return view

    def close_round(self, game_id: int) -> ProgressView:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            game.close_round()
            self._repository.save(game)
            round_number = game.current_round
            finished = game.is_ended()
            progress = game.progress()
        self._listener.round_closed(game_id, round_number)
        if finished:
            self._finish_game(game_id, progress.ranking)
        return progress

    def submit_answer(self, game_id: int, account_id: int, answer_text: str) -> int:
        _, delta = self._score_answer(game_id, account_id, answer_text)
        return delta

    def submit_answer_detailed(
        self,
        game_id: int,
        account_id: int,
        answer_text: str,
    ) -> tuple[Participant, int]:
        """Like ``submit_answer`` but also returns the updated participant."""
        return self._score_answer(game_id, account_id, answer_text)

    # --- Queries ---

    def get_progress(self, game_id: int) -> ProgressView:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            return game.progress()

    def get_winners(self, game_id: int) -> list[RankingEntry]:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            return game.winners()

    def get_player(self, game_id: int, account_id: int) -> Participant:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            return game.get_player(account_id)

    def get_participants(self, game_id: int) -> tuple[Participant, ...]:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            return game.participants()

    # --- Internals ---

    def _fetch_question(self, game: QuizGame) -> Question:
        category = game.config.category
        try:
            return self._provider.next_question(category)
        except ProviderError:
            logger.warning("No question for game %s (category %s)", game.game_id, category.value)
            raise
        except Exception as exc:
            logger.exception("Question provider failed for game %s", game.game_id)
            raise ProviderError(f"Question provider failed: {exc}") from exc

    def _score_answer(
        self,
        game_id: int,
        account_id: int,
        answer_text: str,
    ) -> tuple[Participant, int]:
        game = self._repository.get(game_id)
        with game.lock:
            _require_live(game)
            delta, participant = game.submit_answer(account_id, answer_text, self._scoring)
            if delta:
                self._repository.save(game)
        self._listener.answer_scored(game_id, participant, delta)
        return participant, delta

    def _finish_game(self, game_id: int, ranking: list[RankingEntry]) -> None:
        for entry in ranking:
            try:
                self._accounts.record_final_score(entry.account_id, entry.score)
            except AccountNotFoundError:
                logger.warning("Final score of unknown account %s not recorded", entry.account_id)
        self._listener.game_finished(game_id, ranking)

