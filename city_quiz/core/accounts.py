"""Account lookup used by the engine to snapshot player names."""

from __future__ import annotations

from dataclasses import dataclass
from threading import Lock
from typing import Protocol

from city_quiz.core.errors import AccountConflictError, AccountNotFoundError
from city_quiz.core.models import Account


class AccountDirectory(Protocol):
    def find_account(self, account_id: int) -> Account: ...

    def record_final_score(self, account_id: int, score: int) -> None: ...


@dataclass(slots=True)
class AccountStats:
    games_played: int = 0
    total_score: int = 0


class InMemoryAccountDirectory:
    """Process-local account store."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._accounts: dict[int, Account] = {}
        self._stats: dict[int, AccountStats] = {}
        self._account_counter: int = 0

    def create_account(self, username: str) -> Account:
        cleaned = username.strip()
        if not cleaned:
            raise ValueError("Username must not be empty.")
        with self._lock:
            if any(a.display_name == cleaned for a in self._accounts.values()):
                raise AccountConflictError(f"Username '{cleaned}' is already taken.")
            self._account_counter += 1
            account = Account(account_id=self._account_counter, display_name=cleaned)
            self._accounts[account.account_id] = account
            self._stats[account.account_id] = AccountStats()
            return account

    def find_account(self, account_id: int) -> Account:
        with self._lock:
            account = self._accounts.get(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def list_accounts(self) -> list[Account]:
        with self._lock:
            return list(self._accounts.values())

    def record_final_score(self, account_id: int, score: int) -> None:
        with self._lock:
            stats = self._stats.get(account_id)
            if stats is None:
                raise AccountNotFoundError(account_id)
            stats.games_played += 1
            stats.total_score += score

    def get_stats(self, account_id: int) -> AccountStats:
        with self._lock:
            stats = self._stats.get(account_id)
            if stats is None:
                raise AccountNotFoundError(account_id)
            return AccountStats(games_played=stats.games_played, total_score=stats.total_score)
