"""
In-memory store
Holds games and users in plain dicts, one lock per collection.

Entities are deep-copied on the way in and on the way out, so a caller's changes
only land when it calls save_*.
"""

from copy import deepcopy
from threading import RLock
from typing import Dict

from .entities import Game, User, utcnow
from .errors import RepositoryNotFound
from .types import GameId, UserId


class InMemoryGameStore:
    def __init__(self) -> None:
        self._games: Dict[GameId, Game] = {}
        self._lock = RLock()

    def get_game(self, game_id: GameId) -> Game:
        with self._lock:
            game = self._games.get(game_id)
            if game is None:
                raise RepositoryNotFound("Game")
            return deepcopy(game)

    def save_game(self, game: Game) -> None:
        with self._lock:
            self._games[game.id] = deepcopy(game)

    def clear_all_games(self) -> int:
        with self._lock:
            count = len(self._games)
            self._games.clear()
            return count


class InMemoryUserStore:
    def __init__(self) -> None:
        self._users: Dict[UserId, User] = {}
        self._lock = RLock()

    def get_user(self, user_id: UserId) -> User:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                raise RepositoryNotFound("User")
            return deepcopy(user)

    def save_user(self, user: User) -> None:
        with self._lock:
            self._users[user.id] = deepcopy(user)

    def update_user_current_game(self, user_id: UserId, game_id: GameId) -> bool:
        with self._lock:
            user = self._users.get(user_id)
            if user is None:
                return False
            user.current_game_id = game_id
            user.updated_at = utcnow()
            return True

    def reset_all_users_current_game(self) -> int:
        with self._lock:
            now = utcnow()
            count = 0
            for user in self._users.values():
                if user.current_game_id is None:
                    continue
                user.current_game_id = None
                user.updated_at = now
                count += 1
            return count
