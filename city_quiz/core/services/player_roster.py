"""Service tracking the players of a single game."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterator

from city_quiz.core.models import Account, Participant


class PlayerRoster:
    """Insertion-ordered collection of participants keyed by account id."""

    def __init__(self, participants: list[Participant] | None = None) -> None:
        self._players: dict[int, Participant] = {}
        for participant in participants or []:
            if participant.account_id in self._players:
                raise ValueError(f"Duplicate participant {participant.account_id}.")
            self._players[participant.account_id] = participant

    def add(self, account: Account) -> tuple[Participant, bool]:
        """Register an account. Returns the participant and whether it is new."""
        entry = self._players.get(account.account_id)
        if entry is not None:
            return entry, False
        entry = Participant(account_id=account.account_id, display_name=account.display_name)
        self._players[account.account_id] = entry
        return entry, True

    def remove(self, account_id: int) -> bool:
        return self._players.pop(account_id, None) is not None

    def find(self, account_id: int) -> Participant | None:
        return self._players.get(account_id)

    def add_score(self, account_id: int, delta: int) -> Participant:
        """Add ``delta`` to a participant's score and return the new snapshot."""
        entry = self._players.get(account_id)
        if entry is None:
            raise KeyError(account_id)
        updated = replace(entry, score=entry.score + delta)
        self._players[account_id] = updated
        return updated

    def participants(self) -> tuple[Participant, ...]:
        """Return the participants in join order."""
        return tuple(self._players.values())

    def total_score(self) -> int:
        return sum(p.score for p in self._players.values())

    def __iter__(self) -> Iterator[Participant]:
        return iter(self.participants())

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, account_id: object) -> bool:
        return account_id in self._players
