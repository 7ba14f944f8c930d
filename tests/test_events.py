from __future__ import annotations

import logging

from city_quiz.core.accounts import InMemoryAccountDirectory
from city_quiz.core.game_manager import GameManager
from city_quiz.core.models import CityCategory, GameConfig
from conftest import ScriptedQuestionProvider


def test_default_listener_logs_game_events(caplog) -> None:
    accounts = InMemoryAccountDirectory()
    alice = accounts.create_account("alice")
    manager = GameManager(question_provider=ScriptedQuestionProvider(), accounts=accounts)

    with caplog.at_level(logging.INFO, logger="city_quiz.core.events"):
        game_id = manager.create_game(GameConfig(CityCategory.CAPITALS, 1, 5)).game_id
        manager.join_game(game_id, alice.account_id)
        manager.advance_round(game_id)
        manager.submit_answer(game_id, alice.account_id, "Paris")
        manager.close_round(game_id)

    messages = [record.getMessage() for record in caplog.records]
    assert f"Game {game_id} created: category=CAPITALS rounds=1 countdown=5s" in messages
    assert f"Player added to game {game_id}: alice" in messages
    assert f"Game {game_id}: alice scored 10 (total 10)" in messages
    assert f"Game {game_id} finished; winners: alice" in messages
