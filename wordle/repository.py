"""
Persistence boundary.

GameRepository / UserRepository are the only ways the coordinator touches
storage. Two implementations exist:
- wordle.store: in-memory dicts (default, and what the tests use)
- DBGameRepository / DBUserRepository below: SQLAlchemy, one session per call

Every method may raise RepositoryNotFound, RepositoryUnavailable or
RepositoryInternal.
"""

from __future__ import annotations

import contextlib
import logging
from datetime import datetime, timezone
from typing import Iterator, Protocol

from sqlalchemy import delete, update
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .entities import Game, Guess, User, utcnow
from .errors import RepositoryInternal, RepositoryNotFound, RepositoryUnavailable
from .models import GameRow, GuessRow, UserRow
from .types import GameId, LetterResult, UserId

logger = logging.getLogger(__name__)


class GameRepository(Protocol):
    def get_game(self, game_id: GameId) -> Game: ...

    def save_game(self, game: Game) -> None: ...

    def clear_all_games(self) -> int: ...


class UserRepository(Protocol):
    def get_user(self, user_id: UserId) -> User: ...

    def save_user(self, user: User) -> None: ...

    def update_user_current_game(self, user_id: UserId, game_id: GameId) -> bool: ...

    def reset_all_users_current_game(self) -> int: ...


# --- Row <-> entity helpers ---

def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone=True columns
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def _to_game(row: GameRow) -> Game:
    return Game(
        id=row.id,
        user_id=row.user_id,
        word=row.word,
        max_attempts=row.max_attempts,
        day=row.day,
        guesses=[
            Guess(
                word=g.word,
                results=[LetterResult(r) for r in g.results],
                created_at=_aware(g.created_at),
            )
            for g in row.guesses
        ],
        completed=row.completed,
        won=row.won,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _to_user(row: UserRow) -> User:
    return User(
        id=row.id,
        username=row.username,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        current_game_id=row.current_game_id,
    )


@contextlib.contextmanager
def _translate_errors(operation: str) -> Iterator[None]:
    try:
        yield
    except (OperationalError, InterfaceError, DisconnectionError) as e:
        logger.warning("Database unavailable during %s: %s", operation, e)
        raise RepositoryUnavailable(f"Database unavailable during {operation}") from e
    except SQLAlchemyError as e:
        raise RepositoryInternal(f"Database error during {operation}: {e}") from e
    except (KeyError, ValueError, TypeError) as e:
        raise RepositoryInternal(f"Could not decode stored data during {operation}: {e}") from e


class DBGameRepository:
    """GameRepository backed by SQLAlchemy."""

    def __init__(self, sessions: sessionmaker) -> None:
        self._sessions = sessions

    def _session(self) -> Session:
        return self._sessions()

    def get_game(self, game_id: GameId) -> Game:
        with _translate_errors("get_game"), self._session() as db:
            row = db.get(GameRow, game_id)
            if row is None:
                raise RepositoryNotFound("Game")
            return _to_game(row)

    def save_game(self, game: Game) -> None:
        with _translate_errors("save_game"), self._session() as db, db.begin():
            row = db.get(GameRow, game.id)
            if row is None:
                row = GameRow(id=game.id)
                db.add(row)

            row.user_id = game.user_id
            row.word = game.word
            row.max_attempts = game.max_attempts
            row.day = game.day
            row.completed = game.completed
            row.won = game.won
            row.created_at = game.created_at
            row.updated_at = game.updated_at
            # guesses are append-only, but rewriting the list keeps this a plain upsert
            row.guesses = [
                GuessRow(
                    position=i,
                    word=g.word,
                    results=[r.value for r in g.results],
                    created_at=g.created_at,
                )
                for i, g in enumerate(game.guesses)
            ]

    def clear_all_games(self) -> int:
        with _translate_errors("clear_all_games"), self._session() as db, db.begin():
            db.execute(delete(GuessRow))
            result = db.execute(delete(GameRow))
            return result.rowcount or 0


class DBUserRepository:
    """UserRepository backed by SQLAlchemy."""

    def __init__(self, sessions: sessionmaker) -> None:
        self._sessions = sessions

    def get_user(self, user_id: UserId) -> User:
        with _translate_errors("get_user"), self._sessions() as db:
            row = db.get(UserRow, user_id)
            if row is None:
                raise RepositoryNotFound("User")
            return _to_user(row)

    def save_user(self, user: User) -> None:
        with _translate_errors("save_user"), self._sessions() as db, db.begin():
            row = db.get(UserRow, user.id)
            if row is None:
                row = UserRow(id=user.id)
                db.add(row)
            row.username = user.username
            row.created_at = user.created_at
            row.updated_at = user.updated_at
            row.current_game_id = user.current_game_id

    def update_user_current_game(self, user_id: UserId, game_id: GameId) -> bool:
        with _translate_errors("update_user_current_game"), self._sessions() as db, db.begin():
            result = db.execute(
                update(UserRow)
                .where(UserRow.id == user_id)
                .values(current_game_id=game_id, updated_at=utcnow())
            )
            return (result.rowcount or 0) > 0

    def reset_all_users_current_game(self) -> int:
        with _translate_errors("reset_all_users_current_game"), self._sessions() as db, db.begin():
            result = db.execute(
                update(UserRow)
                .where(UserRow.current_game_id.is_not(None))
                .values(current_game_id=None, updated_at=utcnow())
            )
            return result.rowcount or 0
