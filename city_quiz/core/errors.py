"""Exception hierarchy raised by the game engine and its collaborators."""

from __future__ import annotations


class GameError(Exception):
    """Base class for every error the engine reports to callers."""


class NotFoundError(GameError):
    """A game, participant or account does not exist."""


class GameNotFoundError(NotFoundError):
    def __init__(self, game_id: int) -> None:
        self.game_id = game_id
        super().__init__(f"Game {game_id} does not exist.")


class PlayerNotFoundError(NotFoundError):
    def __init__(self, game_id: int, account_id: int) -> None:
        self.game_id = game_id
        self.account_id = account_id
        super().__init__(f"Account {account_id} is not a player of game {game_id}.")


class AccountNotFoundError(NotFoundError):
    def __init__(self, account_id: int) -> None:
        self.account_id = account_id
        super().__init__(f"Account {account_id} does not exist.")


class AccountConflictError(GameError):
    """Raised when an account name is already taken."""


class InvalidConfigurationError(GameError):
    """Raised when a game is created with non-positive rounds or countdown."""


class SessionEndedError(GameError):
    def __init__(self, game_id: int | None = None) -> None:
        self.game_id = game_id
        label = "The game" if game_id is None else f"Game {game_id}"
        super().__init__(f"{label} has already played all of its rounds.")


class NoActiveRoundError(GameError):
    def __init__(self, game_id: int | None = None) -> None:
        self.game_id = game_id
        label = "the game" if game_id is None else f"game {game_id}"
        super().__init__(f"No round is currently open in {label}.")


class ProviderError(GameError):
    """The question provider could not supply a question."""
