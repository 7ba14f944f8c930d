from __future__ import annotations

from fastapi.testclient import TestClient
import pytest

from city_quiz.constants.about import APP_ABOUT_TEXT, APP_LICENSE
from city_quiz.constants.game_constants import DEFAULT_COUNTDOWN_SECONDS, DEFAULT_TOTAL_ROUNDS
from city_quiz.core.game_manager import GameManager
from city_quiz.server.api_server import create_api_app
from conftest import RecordingListener


@pytest.fixture()
def client(provider, accounts) -> TestClient:
    manager = GameManager(question_provider=provider, accounts=accounts, listener=RecordingListener())
    return TestClient(create_api_app(manager, accounts))


def _create_game(client: TestClient, rounds: int = 3) -> int:
    res = client.post(
        "/games",
        json={"category": "LANDMARKS", "total_rounds": rounds, "countdown_time": 15},
    )
    assert res.status_code == 201
    return res.json()["game_id"]


def test_create_game_returns_progress(client) -> None:
    res = client.post("/games", json={"category": "EUROPE", "total_rounds": 2, "countdown_time": 10})

    assert res.status_code == 201
    body = res.json()
    assert body["category"] == "EUROPE"
    assert body["current_round"] == 0
    assert body["total_rounds"] == 2
    assert body["countdown_time"] == 10
    assert body["is_ended"] is False
    assert body["ranking"] == []


@pytest.mark.parametrize(
    "payload",
    [
        {"category": "EUROPE", "total_rounds": 0, "countdown_time": 10},
        {"category": "EUROPE", "total_rounds": 2, "countdown_time": -1},
        {"category": "MARS", "total_rounds": 2, "countdown_time": 10},
        {"total_rounds": 2, "countdown_time": 10},
    ],
)
def test_create_game_validation(client, payload) -> None:
    assert client.post("/games", json=payload).status_code == 422


def test_create_game_uses_default_settings(client) -> None:
    res = client.post("/games", json={"category": "EUROPE"})

    assert res.status_code == 201
    assert res.json()["total_rounds"] == DEFAULT_TOTAL_ROUNDS
    assert res.json()["countdown_time"] == DEFAULT_COUNTDOWN_SECONDS


def test_openapi_describes_the_app(client) -> None:
    info = client.get("/openapi.json").json()["info"]

    assert info["description"] == APP_ABOUT_TEXT
    assert info["license"]["name"] == APP_LICENSE


def test_game_flow_over_http(client) -> None:
    game_id = _create_game(client)
    assert client.post(f"/games/{game_id}/players/1").status_code == 201
    assert client.post(f"/games/{game_id}/players/2").status_code == 201

    res = client.put(f"/games/{game_id}")
    assert res.status_code == 200
    question = res.json()
    assert question["round"] == 1
    assert "Paris" in question["options"]
    assert "correct_answer" not in question
    assert question["prompt_html"].startswith("<p>")

    res = client.post(f"/games/{game_id}/players/1/answers", json={"answer": "Paris"})
    assert res.status_code == 200
    assert res.json() == {"score_delta": 10, "score": 10}
    res = client.post(f"/games/{game_id}/players/2/answers", json={"answer": "Lyon"})
    assert res.json()["score_delta"] == 0

    client.put(f"/games/{game_id}")
    client.put(f"/games/{game_id}")
    assert client.put(f"/games/{game_id}").status_code == 409

    state = client.get(f"/games/{game_id}").json()
    assert state["is_ended"] is True
    assert [(row["player_name"], row["rank"]) for row in state["ranking"]] == [("alice", 1), ("bob", 2)]

    winners = client.get(f"/games/{game_id}/winners").json()
    assert [row["player_id"] for row in winners] == [1]


def test_answer_without_open_round_conflicts(client) -> None:
    game_id = _create_game(client)
    client.post(f"/games/{game_id}/players/1")

    res = client.post(f"/games/{game_id}/players/1/answers", json={"answer": "Paris"})

    assert res.status_code == 409


def test_close_round_over_http(client) -> None:
    game_id = _create_game(client, rounds=1)
    client.post(f"/games/{game_id}/players/1")
    client.put(f"/games/{game_id}")

    res = client.post(f"/games/{game_id}/round/close")

    assert res.status_code == 200
    assert res.json()["round_open"] is False
    assert client.post(f"/games/{game_id}/round/close").status_code == 409


def test_not_found_responses(client) -> None:
    game_id = _create_game(client)

    assert client.get("/games/999").status_code == 404
    assert client.put("/games/999").status_code == 404
    assert client.post(f"/games/{game_id}/players/999").status_code == 404
    assert client.post(f"/games/{game_id}/players/3/answers", json={"answer": "x"}).status_code == 404
    assert client.get("/users/999").status_code == 404


def test_remove_player_is_idempotent(client) -> None:
    game_id = _create_game(client)
    client.post(f"/games/{game_id}/players/1")

    assert client.delete(f"/games/{game_id}/players/1").status_code == 204
    assert client.delete(f"/games/{game_id}/players/1").status_code == 204
    assert client.get(f"/games/{game_id}").json()["ranking"] == []


def test_delete_game(client) -> None:
    game_id = _create_game(client)

    assert client.delete(f"/games/{game_id}").status_code == 204
    assert client.get(f"/games/{game_id}").status_code == 404


def test_users_endpoints(client) -> None:
    res = client.post("/users", json={"username": "dora"})
    assert res.status_code == 201
    user = res.json()
    assert user["username"] == "dora"

    assert client.get(f"/users/{user['id']}").json() == user
    assert client.post("/users", json={"username": "dora"}).status_code == 409
    assert client.post("/users", json={"username": "  "}).status_code == 422


def test_provider_failure_maps_to_service_unavailable(client, provider) -> None:
    game_id = _create_game(client)
    provider.failure = RuntimeError("down")

    res = client.put(f"/games/{game_id}")

    assert res.status_code == 503
    assert client.get(f"/games/{game_id}").json()["current_round"] == 0
