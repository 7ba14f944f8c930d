from __future__ import annotations

import pytest

from city_quiz.core.services.answer_scoring import (
    ExactMatchScoring,
    TimeWeightedScoring,
    normalize_answer,
)


@pytest.mark.parametrize(
    ("submitted", "expected"),
    [
        ("Paris", 10),
        ("paris", 10),
        ("  PARIS ", 10),
        ("Lyon", 0),
        ("", 0),
        ("Paris, France", 0),
    ],
)
def test_exact_match_scoring(submitted: str, expected: int) -> None:
    assert ExactMatchScoring().score("Paris", submitted) == expected


def test_normalize_collapses_inner_whitespace() -> None:
    assert normalize_answer("  new   YORK ") == normalize_answer("New York")


def test_exact_match_uses_configured_points() -> None:
    assert ExactMatchScoring(points=3).score("Rome", "rome") == 3


def test_negative_points_are_rejected() -> None:
    with pytest.raises(ValueError):
        ExactMatchScoring(points=-1)


@pytest.mark.parametrize(
    ("elapsed", "expected"),
    [
        (0.0, 1000),
        (5.0, 750),
        (10.0, 500),
        (25.0, 500),
        (None, 1000),
    ],
)
def test_time_weighted_scoring(elapsed: float | None, expected: int) -> None:
    policy = TimeWeightedScoring()

    assert policy.score("Paris", "paris", elapsed_seconds=elapsed, countdown_seconds=10) == expected


def test_time_weighted_wrong_answer_scores_nothing() -> None:
    assert TimeWeightedScoring().score("Paris", "Lyon", elapsed_seconds=0.0, countdown_seconds=10) == 0


def test_scoring_is_deterministic() -> None:
    policy = TimeWeightedScoring(points=100)
    results = {policy.score("Bern", "bern", elapsed_seconds=3.3, countdown_seconds=15) for _ in range(5)}

    assert len(results) == 1
