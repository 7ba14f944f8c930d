"""A single game: its configuration, roster and round state."""

from __future__ import annotations

from datetime import datetime
from threading import Lock

from city_quiz.core.errors import (
    InvalidConfigurationError,
    NoActiveRoundError,
    PlayerNotFoundError,
    SessionEndedError,
)
from city_quiz.core.models import (
    Account,
    CityCategory,
    GameConfig,
    Participant,
    ProgressView,
    Question,
    QuestionView,
    RankingEntry,
)
from city_quiz.core.services.answer_scoring import ScoringPolicy
from city_quiz.core.services.player_roster import PlayerRoster
from city_quiz.core.services.ranking import rank_participants, select_winners
from city_quiz.core.services.round_state import RoundState


def validate_config(config: GameConfig) -> None:
    if not isinstance(config.category, CityCategory):
        raise InvalidConfigurationError(f"Unknown category: {config.category!r}.")
    if config.total_rounds <= 0:
        raise InvalidConfigurationError("Total rounds must be a positive integer.")
    if config.countdown_seconds <= 0:
        raise InvalidConfigurationError("Countdown must be a positive number of seconds.")


class QuizGame:
    """State of one game.

    The game does no locking of its own; ``lock`` is held by the
    ``GameManager`` around every call.
    """

    def __init__(
        self,
        game_id: int,
        config: GameConfig,
        roster: PlayerRoster | None = None,
        round_state: RoundState | None = None,
    ) -> None:
        validate_config(config)
        self.lock = Lock()
        self._game_id = game_id
        self._config = config
        self._roster = roster if roster is not None else PlayerRoster()
        self._round_state = round_state if round_state is not None else RoundState(config.total_rounds)
        # Set under ``lock`` once the game has been removed from its repository.
        self.deleted = False

    @property
    def game_id(self) -> int:
        return self._game_id

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def current_round(self) -> int:
        return self._round_state.current_round

    @property
    def pending_answer(self) -> str | None:
        return self._round_state.pending_answer

    @property
    def round_started_at(self) -> datetime | None:
        return self._round_state.get_round_start_time()

    def is_ended(self) -> bool:
        return self._round_state.is_ended()

    def is_round_open(self) -> bool:
        return self._round_state.is_round_open()

    # --- Roster ---

    def add_player(self, account: Account) -> tuple[Participant, bool]:
        if self.is_ended():
            raise SessionEndedError(self._game_id)
        return self._roster.add(account)

    def remove_player(self, account_id: int) -> bool:
        return self._roster.remove(account_id)

    def get_player(self, account_id: int) -> Participant:
        participant = self._roster.find(account_id)
        if participant is None:
            raise PlayerNotFoundError(self._game_id, account_id)
        return participant

    def participants(self) -> tuple[Participant, ...]:
        return self._roster.participants()

    # --- Rounds ---

    def open_round(self, question: Question) -> QuestionView:
        if self.is_ended():
            raise SessionEndedError(self._game_id)
        round_number = self._round_state.open_round(question)
        return QuestionView(
            game_id=self._game_id,
            round_number=round_number,
            prompt=question.prompt,
            options=list(question.options),
            countdown_seconds=self._config.countdown_seconds,
            image_url=question.image_url,
        )

    def close_round(self) -> None:
        if not self.is_round_open():
            raise NoActiveRoundError(self._game_id)
        self._round_state.close_round()

    def submit_answer(
        self,
        account_id: int,
        answer_text: str,
        policy: ScoringPolicy,
    ) -> tuple[int, Participant]:
        """Score ``answer_text`` for a player. Returns the delta and new snapshot."""
        self.get_player(account_id)
        pending = self._round_state.pending_answer
        if pending is None:
            raise NoActiveRoundError(self._game_id)

        delta = policy.score(
            pending,
            answer_text,
            elapsed_seconds=self._round_state.elapsed_seconds(),
            countdown_seconds=self._config.countdown_seconds,
        )
        if delta < 0:
            raise ValueError(f"Scoring policy returned a negative delta: {delta}.")
        return delta, self._roster.add_score(account_id, delta)

    # --- Queries ---

    def ranking(self) -> list[RankingEntry]:
        return rank_participants(self._roster)

    def winners(self) -> list[RankingEntry]:
        return select_winners(self.ranking())

    def progress(self) -> ProgressView:
        return ProgressView(
            game_id=self._game_id,
            category=self._config.category,
            current_round=self._round_state.current_round,
            total_rounds=self._config.total_rounds,
            countdown_seconds=self._config.countdown_seconds,
            is_ended=self.is_ended(),
            round_open=self.is_round_open(),
            ranking=self.ranking(),
        )
