"""Question providers: the source of one question per round."""

from __future__ import annotations

from collections import deque
from pathlib import Path
import random
from threading import Lock
from typing import Protocol

from city_quiz.constants.game_constants import DEFAULT_QUESTION_BANK_PATH, OPTIONS_PER_QUESTION
from city_quiz.core.errors import ProviderError
from city_quiz.core.models import CityCategory, Question
from city_quiz.core.question_importer import load_questions_from_file


class QuestionProvider(Protocol):
    def next_question(self, category: CityCategory) -> Question: ...


class QuestionBank:
    """Serves randomized, non-repeating questions per category.

    Each category is drawn from a shuffled pool which is refilled once all of
    its questions have been served. Option order is shuffled on every draw.
    """

    def __init__(
        self,
        questions: dict[CityCategory, list[Question]],
        seed: int | None = None,
    ) -> None:
        self._questions: dict[CityCategory, list[Question]] = {}
        for category, items in questions.items():
            for question in items:
                _validate_question(question)
            if items:
                self._questions[category] = list(items)
        self._pools: dict[CityCategory, deque[Question]] = {}
        self._lock = Lock()
        self._rng = random.Random(seed)

    @classmethod
    def from_file(cls, file_path: Path, seed: int | None = None) -> "QuestionBank":
        imported = load_questions_from_file(file_path)
        return cls(imported.questions, seed=seed)

    @classmethod
    def from_default_file(cls, seed: int | None = None) -> "QuestionBank":
        return cls.from_file(DEFAULT_QUESTION_BANK_PATH, seed=seed)

    def categories(self) -> list[CityCategory]:
        return list(self._questions)

    def question_count(self, category: CityCategory) -> int:
        return len(self._questions.get(category, []))

    def next_question(self, category: CityCategory) -> Question:
        with self._lock:
            questions = self._questions.get(category)
            if not questions:
                raise ProviderError(f"No questions available for category {category.value}.")
            pool = self._pools.setdefault(category, deque())
            if not pool:
                shuffled = list(questions)
                self._rng.shuffle(shuffled)
                pool.extend(shuffled)
            question = pool.popleft()
            options = list(question.options)
            self._rng.shuffle(options)
        return Question(
            prompt=question.prompt,
            options=options,
            correct_answer=question.correct_answer,
            image_url=question.image_url,
        )


def _validate_question(question: Question) -> None:
    if len(question.options) != OPTIONS_PER_QUESTION:
        raise ValueError(f"Each question must have exactly {OPTIONS_PER_QUESTION} options.")
    if question.correct_answer not in question.options:
        raise ValueError(f"Correct answer '{question.correct_answer}' is not one of the options.")
