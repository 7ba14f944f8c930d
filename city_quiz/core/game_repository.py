"""Storage of games by id.

``InMemoryGameRepository`` keeps games for the life of the process.
``JsonFileGameRepository`` additionally writes one JSON document per game so
games survive a restart. A game's participants are stored inside its document,
so deleting the game deletes them with it.
"""

from __future__ import annotations

from datetime import datetime
import json
import logging
from pathlib import Path
from threading import Lock
from typing import Any, Protocol

from city_quiz.core.errors import GameNotFoundError
from city_quiz.core.models import CityCategory, GameConfig, Participant
from city_quiz.core.services.player_roster import PlayerRoster
from city_quiz.core.services.quiz_game import QuizGame
from city_quiz.core.services.round_state import RoundState

logger = logging.getLogger(__name__)

_FILE_PREFIX = "game-"


class GameRepository(Protocol):
    def next_id(self) -> int: ...

    def add(self, game: QuizGame) -> None: ...

    def get(self, game_id: int) -> QuizGame: ...

    def save(self, game: QuizGame) -> None: ...

    def delete(self, game_id: int) -> None: ...

    def list_ids(self) -> list[int]: ...


class InMemoryGameRepository:
    def __init__(self) -> None:
        self._lock = Lock()
        self._games: dict[int, QuizGame] = {}
        self._id_counter: int = 0

    def next_id(self) -> int:
        with self._lock:
            self._id_counter += 1
            return self._id_counter

    def add(self, game: QuizGame) -> None:
        with self._lock:
            if game.game_id in self._games:
                raise ValueError(f"Game {game.game_id} is already stored.")
            self._games[game.game_id] = game
            self._id_counter = max(self._id_counter, game.game_id)
        self.save(game)

    def get(self, game_id: int) -> QuizGame:
        with self._lock:
            game = self._games.get(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    def save(self, game: QuizGame) -> None:
        """Nothing to flush; games are live objects."""

    def delete(self, game_id: int) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(game_id)

    def list_ids(self) -> list[int]:
        with self._lock:
            return sorted(self._games)


class JsonFileGameRepository(InMemoryGameRepository):
    """Game store backed by ``<directory>/game-<id>.json`` files."""

    def __init__(self, directory: Path) -> None:
        super().__init__()
        self._directory = Path(directory).resolve()
        self._directory.mkdir(parents=True, exist_ok=True)
        self._load_existing()

    def save(self, game: QuizGame) -> None:
        document = json.dumps(game_to_snapshot(game), indent=2)
        target = self._path_for(game.game_id)
        temporary = target.with_suffix(".json.tmp")
        # Holding the lock keeps a delete from running between check and write.
        with self._lock:
            if self._games.get(game.game_id) is not game:
                raise GameNotFoundError(game.game_id)
            temporary.write_text(document, encoding="utf-8")
            temporary.replace(target)

    def delete(self, game_id: int) -> None:
        with self._lock:
            if self._games.pop(game_id, None) is None:
                raise GameNotFoundError(game_id)
            self._path_for(game_id).unlink(missing_ok=True)

    def _path_for(self, game_id: int) -> Path:
        return self._directory / f"{_FILE_PREFIX}{game_id}.json"

    def _load_existing(self) -> None:
        for path in sorted(self._directory.glob(f"{_FILE_PREFIX}*.json")):
            try:
                snapshot = json.loads(path.read_text(encoding="utf-8"))
                game = game_from_snapshot(snapshot)
            except (json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping unreadable game file %s: %s", path.name, exc)
                continue
            self._games[game.game_id] = game
            self._id_counter = max(self._id_counter, game.game_id)
        if self._games:
            logger.info("Loaded %s game(s) from %s", len(self._games), self._directory)


def game_to_snapshot(game: QuizGame) -> dict[str, Any]:
    config = game.config
    started_at = game.round_started_at
    return {
        "game_id": game.game_id,
        "category": config.category.value,
        "total_rounds": config.total_rounds,
        "countdown_seconds": config.countdown_seconds,
        "current_round": game.current_round,
        "pending_answer": game.pending_answer,
        "round_started_at": started_at.isoformat() if started_at is not None else None,
        "participants": [
            {
                "account_id": p.account_id,
                "display_name": p.display_name,
                "score": p.score,
                "joined_at": p.joined_at.isoformat(),
            }
            for p in game.participants()
        ],
    }


def game_from_snapshot(snapshot: dict[str, Any]) -> QuizGame:
    config = GameConfig(
        category=CityCategory(snapshot["category"]),
        total_rounds=int(snapshot["total_rounds"]),
        countdown_seconds=int(snapshot["countdown_seconds"]),
    )
    participants = [
        Participant(
            account_id=int(item["account_id"]),
            display_name=item["display_name"],
            score=int(item["score"]),
            joined_at=datetime.fromisoformat(item["joined_at"]),
        )
        for item in snapshot.get("participants", [])
    ]
    started_at = snapshot.get("round_started_at")
    return QuizGame(
        game_id=int(snapshot["game_id"]),
        config=config,
        roster=PlayerRoster(participants),
        round_state=RoundState(
            config.total_rounds,
            current_round=int(snapshot["current_round"]),
            pending_answer=snapshot.get("pending_answer"),
            round_started_at=datetime.fromisoformat(started_at) if started_at else None,
        ),
    )
