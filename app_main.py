"""Application entry point for the CityQuiz server."""

from __future__ import annotations

from pathlib import Path

from city_quiz.constants.game_constants import GAME_DATA_DIR
from city_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from city_quiz.core.accounts import InMemoryAccountDirectory
from city_quiz.core.game_manager import GameManager
from city_quiz.core.game_repository import InMemoryGameRepository, JsonFileGameRepository
from city_quiz.core.question_bank import QuestionBank
from city_quiz.server.api_server import start_api_server
from city_quiz.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, wire the engine and serve the API until interrupted."""
    logger = configure_logging()
    logger.info("Starting CityQuiz server…")

    question_bank = QuestionBank.from_default_file()
    accounts = InMemoryAccountDirectory()
    if GAME_DATA_DIR:
        repository = JsonFileGameRepository(Path(GAME_DATA_DIR))
        logger.info("Storing games in %s", GAME_DATA_DIR)
    else:
        repository = InMemoryGameRepository()

    game_manager = GameManager(
        question_provider=question_bank,
        accounts=accounts,
        repository=repository,
    )
    server_thread = start_api_server(game_manager, accounts, host=DEFAULT_HOST, port=DEFAULT_PORT)
    logger.info("API available at http://%s:%s/", DEFAULT_HOST, DEFAULT_PORT)
    try:
        server_thread.join()
    except KeyboardInterrupt:
        logger.info("Shutting down.")


if __name__ == "__main__":
    main()
