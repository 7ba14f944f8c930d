from __future__ import annotations

from threading import Lock

import pytest

from city_quiz.core.accounts import InMemoryAccountDirectory
from city_quiz.core.game_manager import GameManager
from city_quiz.core.models import CityCategory, GameConfig, Question


def make_question(correct: str = "Paris", prompt: str = "Where is the Eiffel Tower?") -> Question:
    options = [correct] + [name for name in ("Lyon", "Nice", "Lille", "Nantes") if name != correct][:3]
    return Question(prompt=prompt, options=options, correct_answer=correct)


class ScriptedQuestionProvider:
    """Serves questions with the given correct answers, cycling forever."""

    def __init__(self, answers: list[str] | None = None) -> None:
        self._answers = answers or ["Paris"]
        self._index = 0
        self._lock = Lock()
        self.requested: list[CityCategory] = []
        self.failure: Exception | None = None

    def next_question(self, category: CityCategory) -> Question:
        if self.failure is not None:
            raise self.failure
        with self._lock:
            self.requested.append(category)
            answer = self._answers[self._index % len(self._answers)]
            self._index += 1
        return make_question(answer)


class FailingQuestionProvider:
    def next_question(self, category: CityCategory) -> Question:
        raise RuntimeError("question service unavailable")


class RecordingListener:
    def __init__(self) -> None:
        self.events: list[tuple] = []

    def game_created(self, game_id, config):
        self.events.append(("game_created", game_id))

    def player_joined(self, game_id, participant):
        self.events.append(("player_joined", game_id, participant.account_id))

    def player_left(self, game_id, account_id):
        self.events.append(("player_left", game_id, account_id))

    def round_started(self, game_id, question):
        self.events.append(("round_started", game_id, question.round_number))

    def answer_scored(self, game_id, participant, delta):
        self.events.append(("answer_scored", game_id, participant.account_id, delta))

    def round_closed(self, game_id, round_number):
        self.events.append(("round_closed", game_id, round_number))

    def game_finished(self, game_id, ranking):
        self.events.append(("game_finished", game_id, [entry.account_id for entry in ranking]))

    def names(self) -> list[str]:
        return [event[0] for event in self.events]


@pytest.fixture()
def accounts() -> InMemoryAccountDirectory:
    directory = InMemoryAccountDirectory()
    directory.create_account("alice")
    directory.create_account("bob")
    directory.create_account("cara")
    return directory


@pytest.fixture()
def provider() -> ScriptedQuestionProvider:
    return ScriptedQuestionProvider(["Paris", "Rome", "Bern"])


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture()
def manager(provider, accounts, listener) -> GameManager:
    return GameManager(question_provider=provider, accounts=accounts, listener=listener)


@pytest.fixture()
def landmarks_config() -> GameConfig:
    return GameConfig(category=CityCategory.LANDMARKS, total_rounds=3, countdown_seconds=15)
