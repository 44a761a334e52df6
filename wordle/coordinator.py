"""
Session coordination: one game per user per calendar day.

The coordinator owns the shared per-process state (last day we checked for a
rollover) and talks to storage only through the repository protocols. One
instance is created per app and shared by every request handler.

Day rollover
------------
On the first request of a new day the coordinator:
  1. moves its last-checked date forward (under a lock, before anything else),
  2. clears every user's current_game_id,
  3. deletes every stored game,
  4. warms the daily word cache for the new date.
Steps 2-4 run outside the lock. Another process sharing the same storage may
repeat them; both steps are idempotent so a repeat only costs time.

Every game also records the day it belongs to. A game from an earlier day is
treated as gone even if no rollover has cleared it yet, which covers a process
that starts after midnight against a database filled the day before.

Creating today's game is several repository calls with no transaction around
them. If the process dies between saving the game and pointing the user at it,
the game is orphaned until the next rollover clears it.
"""

import logging
from datetime import date
from threading import Lock
from typing import Callable, Optional

from .daily import DailyWordSelector
from .entities import DEFAULT_MAX_ATTEMPTS, Game, User
from .errors import GameNotFound, RepositoryNotFound
from .repository import GameRepository, UserRepository
from .types import GameId, UserId

logger = logging.getLogger(__name__)


class SessionCoordinator:
    def __init__(
        self,
        games: GameRepository,
        users: UserRepository,
        selector: DailyWordSelector,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.games = games
        self.users = users
        self.selector = selector
        self.max_attempts = max_attempts
        self._clock = clock or selector.today
        self._last_check: date = self._clock()
        self._day_lock = Lock()

    @property
    def last_check(self) -> date:
        return self._last_check

    # --- Day rollover ---

    def ensure_fresh_day(self) -> bool:
        """Run the rollover if the date moved on. Returns True if this call did it."""
        today = self._clock()
        if today <= self._last_check:
            return False

        with self._day_lock:
            previous = self._last_check
            if today <= previous:
                # someone else got here first
                return False
            self._last_check = today

        logger.info("Day change detected: %s -> %s. Resetting all game states.", previous, today)

        reset = self.users.reset_all_users_current_game()
        cleared = self.games.clear_all_games()
        logger.info("Day change completed: reset %d user states and cleared %d games", reset, cleared)

        try:
            self.selector.word_for_date(today)
        except Exception:
            # not fatal: the word is computed on demand anyway
            logger.exception("Could not pre-warm daily word for %s", today)
        else:
            logger.info("New daily word selected for %s", today)

        return True

    # --- Games ---

    def get_or_create_today_game(self, user_id: UserId, username: str) -> Game:
        self.ensure_fresh_day()
        today = self._clock()

        user = self._find_user(user_id)
        if user is not None and user.current_game_id:
            try:
                game = self.games.get_game(user.current_game_id)
            except RepositoryNotFound:
                logger.warning(
                    "User %s points at missing game %s; creating a new one",
                    user_id,
                    user.current_game_id,
                )
            else:
                if self._is_current(game):
                    logger.debug("Returning existing game %s for user %s", game.id, user_id)
                    return game
                logger.info(
                    "User %s points at game %s from %s; creating today's game",
                    user_id,
                    game.id,
                    game.day,
                )

        word = self.selector.word_for_date(today)
        game = Game.new(word, user_id, max_attempts=self.max_attempts, day=today)
        self.games.save_game(game)
        logger.info("New game %s created for user %s", game.id, user_id)

        if user is None:
            logger.info("Creating user record for %s (%s)", username, user_id)
            self.users.save_user(User.new(user_id, username))

        self.users.update_user_current_game(user_id, game.id)
        return game

    def fetch_game(self, user_id: UserId, game_id: GameId) -> Game:
        self.ensure_fresh_day()
        return self._owned_game(user_id, game_id)

    def submit_guess(self, user_id: UserId, game_id: GameId, word: str) -> Game:
        self.ensure_fresh_day()
        game = self._owned_game(user_id, game_id)
        game.submit_guess(word, self.selector.word_list)
        self.games.save_game(game)
        logger.debug(
            "Guess %d/%d recorded for game %s", len(game.guesses), game.max_attempts, game.id
        )
        return game

    # --- Helpers ---

    def _find_user(self, user_id: UserId) -> Optional[User]:
        try:
            return self.users.get_user(user_id)
        except RepositoryNotFound:
            return None

    def _owned_game(self, user_id: UserId, game_id: GameId) -> Game:
        try:
            game = self.games.get_game(game_id)
        except RepositoryNotFound:
            raise GameNotFound() from None
        if game.user_id != user_id or not self._is_current(game):
            raise GameNotFound()
        return game

    def _is_current(self, game: Game) -> bool:
        # a durable store can outlive the process that last rolled it over
        return game.day >= self._clock()
