"""
Game and User entities.

A Game moves one way only:
    in progress (completed=False) -> won (completed, won) or lost (completed, not won)

Entities never do I/O. Whoever changes one is responsible for saving it through
a repository.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional
from uuid import uuid4

from .engine import evaluate_guess, is_win, normalize_word
from .errors import GameAlreadyCompleted, InvalidWord
from .types import GameId, LetterResult, UserId
from .words import WordList

DEFAULT_MAX_ATTEMPTS = 6


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_dt(value: str) -> datetime:
    return datetime.fromisoformat(value)


@dataclass(frozen=True)
class Guess:
    word: str
    results: List[LetterResult]
    created_at: datetime = field(default_factory=utcnow)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "word": self.word,
            "results": [r.value for r in self.results],
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Guess":
        return cls(
            word=data["word"],
            results=[LetterResult(r) for r in data["results"]],
            created_at=_parse_dt(data["created_at"]),
        )


@dataclass
class Game:
    id: GameId
    user_id: UserId
    word: str
    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    # calendar date (UTC) whose daily word this game uses
    day: date = field(default_factory=lambda: utcnow().date())
    guesses: List[Guess] = field(default_factory=list)
    completed: bool = False
    won: bool = False
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def new(
        cls,
        word: str,
        user_id: UserId,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        day: Optional[date] = None,
    ) -> "Game":
        now = utcnow()
        return cls(
            id=str(uuid4()),
            user_id=user_id,
            word=word,
            max_attempts=max_attempts,
            day=day or now.date(),
            created_at=now,
            updated_at=now,
        )

    @property
    def is_completed(self) -> bool:
        return self.completed

    def attempts_remaining(self) -> int:
        return max(0, self.max_attempts - len(self.guesses))

    def submit_guess(self, word: str, word_list: WordList) -> Guess:
        """
        Validate, score and record one guess.

        Raises GameAlreadyCompleted on a finished game and InvalidWord when the
        word has the wrong length or is not in the list. Nothing changes on error.
        """
        if self.completed:
            raise GameAlreadyCompleted()

        candidate = normalize_word(word)
        if len(candidate) != word_list.length:
            raise InvalidWord(f"Word must be {word_list.length} letters")
        if candidate not in word_list:
            raise InvalidWord(f"Not in word list: {candidate}")

        guess = Guess(word=candidate, results=evaluate_guess(self.word, candidate))
        self.guesses.append(guess)
        self.updated_at = guess.created_at

        if is_win(self.word, candidate):
            self.won = True
            self.completed = True
        elif self.attempts_remaining() == 0:
            self.completed = True

        return guess

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "word": self.word,
            "max_attempts": self.max_attempts,
            "day": self.day.isoformat(),
            "guesses": [g.to_dict() for g in self.guesses],
            "completed": self.completed,
            "won": self.won,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Game":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            word=data["word"],
            max_attempts=int(data["max_attempts"]),
            day=date.fromisoformat(data["day"]),
            guesses=[Guess.from_dict(g) for g in data.get("guesses", [])],
            completed=bool(data["completed"]),
            won=bool(data["won"]),
            created_at=_parse_dt(data["created_at"]),
            updated_at=_parse_dt(data["updated_at"]),
        )


@dataclass
class User:
    id: UserId
    username: str
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
    current_game_id: Optional[GameId] = None  # today's game, cleared at rollover

    @classmethod
    def new(cls, user_id: UserId, username: str) -> "User":
        now = utcnow()
        return cls(id=user_id, username=username, created_at=now, updated_at=now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "current_game_id": self.current_game_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=data["id"],
            username=data["username"],
            created_at=_parse_dt(data["created_at"]),
            updated_at=_parse_dt(data["updated_at"]),
            current_game_id=data.get("current_game_id"),
        )
