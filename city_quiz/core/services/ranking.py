"""Scoreboard helpers: ranking and winner selection.

Ranks follow standard competition ranking ("1224"): players with equal
scores share a rank, and the next lower score is ranked one past the number
of players strictly ahead of it. Scores [50, 50, 30, 10] rank as [1, 1, 3, 4].
"""

from __future__ import annotations

from typing import Iterable

from city_quiz.core.models import Participant, RankingEntry


def rank_participants(participants: Iterable[Participant]) -> list[RankingEntry]:
    """Return the scoreboard sorted by score, keeping roster order on ties."""
    ordered = sorted(participants, key=lambda p: -p.score)

    ranking: list[RankingEntry] = []
    previous_score: int | None = None
    rank = 0
    for position, participant in enumerate(ordered, start=1):
        if participant.score != previous_score:
            rank = position
            previous_score = participant.score
        ranking.append(
            RankingEntry(
                account_id=participant.account_id,
                display_name=participant.display_name,
                score=participant.score,
                rank=rank,
            )
        )
    return ranking


def select_winners(ranking: Iterable[RankingEntry]) -> list[RankingEntry]:
    """Return every entry sharing first place."""
    return [entry for entry in ranking if entry.rank == 1]
