"""FastAPI server that exposes the game engine over HTTP."""

from __future__ import annotations

from threading import Thread

from fastapi import Depends, FastAPI, HTTPException, Response
from pydantic import BaseModel
import uvicorn

from city_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION
from city_quiz.constants.game_constants import DEFAULT_COUNTDOWN_SECONDS, DEFAULT_TOTAL_ROUNDS
from city_quiz.constants.network_constants import API_LOG_LEVEL, DEFAULT_HOST, DEFAULT_PORT
from city_quiz.core.accounts import InMemoryAccountDirectory
from city_quiz.core.errors import (
    AccountConflictError,
    GameError,
    InvalidConfigurationError,
    NoActiveRoundError,
    NotFoundError,
    ProviderError,
    SessionEndedError,
)
from city_quiz.core.game_manager import GameManager
from city_quiz.core.models import CityCategory, GameConfig
from city_quiz.server.mappers import (
    account_to_dict,
    participant_to_dict,
    progress_to_dict,
    question_to_dict,
    ranking_entry_to_dict,
)


class GamePayload(BaseModel):
    """Payload schema for creating a game."""

    category: CityCategory
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    countdown_time: int = DEFAULT_COUNTDOWN_SECONDS


class AnswerPayload(BaseModel):
    """Payload schema for submitted answers."""

    answer: str


class UserPayload(BaseModel):
    """Payload schema for registering an account."""

    username: str


def _to_http_exception(exc: GameError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidConfigurationError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, (SessionEndedError, NoActiveRoundError, AccountConflictError)):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, ProviderError):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _get_dependency(value):
    def dependency():
        return value

    return dependency


def create_api_app(game_manager: GameManager, accounts: InMemoryAccountDirectory) -> FastAPI:
    """Create a FastAPI application wired to the provided game manager."""
    app = FastAPI(
        title=f"{APP_NAME} API",
        version=APP_VERSION,
        description=APP_ABOUT_TEXT,
        license_info={"name": APP_LICENSE},
    )
    manager_dep = _get_dependency(game_manager)
    accounts_dep = _get_dependency(accounts)

    # --- Accounts ---

    @app.post("/users", status_code=201)
    def create_user(
        payload: UserPayload,
        directory: InMemoryAccountDirectory = Depends(accounts_dep),
    ) -> dict[str, object]:
        try:
            account = directory.create_account(payload.username)
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return account_to_dict(account)

    @app.get("/users/{user_id}")
    def get_user(
        user_id: int,
        directory: InMemoryAccountDirectory = Depends(accounts_dep),
    ) -> dict[str, object]:
        try:
            account = directory.find_account(user_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return account_to_dict(account)

    # --- Games ---

    @app.post("/games", status_code=201)
    def create_game(
        payload: GamePayload,
        manager: GameManager = Depends(manager_dep),
    ) -> dict[str, object]:
        config = GameConfig(
            category=payload.category,
            total_rounds=payload.total_rounds,
            countdown_seconds=payload.countdown_time,
        )
        try:
            progress = manager.create_game(config)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return progress_to_dict(progress)

    @app.get("/games/{game_id}")
    def get_game(game_id: int, manager: GameManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            progress = manager.get_progress(game_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return progress_to_dict(progress)

    @app.put("/games/{game_id}")
    def go_next_round(game_id: int, manager: GameManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            question = manager.advance_round(game_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return question_to_dict(question)

    @app.post("/games/{game_id}/round/close")
    def close_round(game_id: int, manager: GameManager = Depends(manager_dep)) -> dict[str, object]:
        try:
            progress = manager.close_round(game_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return progress_to_dict(progress)

    @app.get("/games/{game_id}/winners")
    def get_winners(game_id: int, manager: GameManager = Depends(manager_dep)) -> list[dict[str, object]]:
        try:
            winners = manager.get_winners(game_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return [ranking_entry_to_dict(entry) for entry in winners]

    @app.delete("/games/{game_id}", status_code=204)
    def delete_game(game_id: int, manager: GameManager = Depends(manager_dep)) -> Response:
        try:
            manager.delete_game(game_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return Response(status_code=204)

    # --- Players ---

    @app.post("/games/{game_id}/players/{player_id}", status_code=201)
    def add_player(
        game_id: int,
        player_id: int,
        manager: GameManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            participant = manager.join_game(game_id, player_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return participant_to_dict(participant)

    @app.delete("/games/{game_id}/players/{player_id}", status_code=204)
    def remove_player(
        game_id: int,
        player_id: int,
        manager: GameManager = Depends(manager_dep),
    ) -> Response:
        try:
            manager.remove_player(game_id, player_id)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return Response(status_code=204)

    @app.post("/games/{game_id}/players/{player_id}/answers")
    def submit_answer(
        game_id: int,
        player_id: int,
        payload: AnswerPayload,
        manager: GameManager = Depends(manager_dep),
    ) -> dict[str, object]:
        try:
            participant, delta = manager.submit_answer_detailed(game_id, player_id, payload.answer)
        except GameError as exc:
            raise _to_http_exception(exc) from exc
        return {"score_delta": delta, "score": participant.score}

    return app


def start_api_server(
    game_manager: GameManager,
    accounts: InMemoryAccountDirectory,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(game_manager, accounts)
    config = uvicorn.Config(app=app, host=host, port=port, log_level=API_LOG_LEVEL)
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="CityQuizApiServer", daemon=True)
    thread.start()
    return thread
