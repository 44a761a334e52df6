"""
Error taxonomy.

Core code raises these; wordle.main turns each kind into an HTTP status and a
safe message.
"""


class WordleError(Exception):
    """Base class for everything the service raises on purpose."""


# --- Game ---

class GameError(WordleError):
    pass


class GameAlreadyCompleted(GameError):
    def __init__(self) -> None:
        super().__init__("Game is already completed")


class InvalidWord(GameError):
    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class GameNotFound(GameError):
    """Missing game, or a game owned by somebody else. Callers can't tell which."""

    def __init__(self) -> None:
        super().__init__("Game not found")


# --- Repository ---

class RepositoryError(WordleError):
    pass


class RepositoryNotFound(RepositoryError):
    def __init__(self, what: str = "Item") -> None:
        super().__init__(f"{what} not found")


class RepositoryUnavailable(RepositoryError):
    """Transient: connection dropped, database down, etc. Safe to retry."""


class RepositoryInternal(RepositoryError):
    """Storage or serialization fault. Details are for logs only."""


# --- Auth / config ---

class AuthError(WordleError):
    """Any token problem. The reason is logged, never returned to the client."""


class ConfigError(WordleError, RuntimeError):
    pass
