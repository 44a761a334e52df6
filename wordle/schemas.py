"""
Pydantic models for the HTTP API.
- Validate request bodies
- Shape responses (the secret word only appears once a game is over)
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .entities import Game
from .types import LetterResult


# 1. Body of POST /api/game/{id}/guess
class GuessRequest(BaseModel):
    word: str = Field(..., description="The guessed word (case-insensitive)")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"word": "crane"},
            ]
        }
    }


# 2. One past guess and its per-letter feedback
class GuessOut(BaseModel):
    word: str = Field(..., description="The guessed word, lowercased")
    results: List[LetterResult] = Field(..., description="Correct / WrongPosition / Wrong per letter")


# 3. Game state as seen by its owner
class GameOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Unique ID for the game")
    attempts_remaining: int = Field(..., alias="attemptsRemaining", description="How many guesses remain")
    completed: bool = Field(..., description="True once the game is won or lost")
    won: bool = Field(..., description="True if the secret word was guessed")
    word: Optional[str] = Field(None, description="The secret word (only revealed when completed)")
    guesses: List[GuessOut] = Field(..., description="All guesses so far, oldest first")

    @classmethod
    def from_game(cls, game: Game) -> "GameOut":
        return cls(
            id=game.id,
            attempts_remaining=game.attempts_remaining(),
            completed=game.completed,
            won=game.won,
            # never leak the secret while the game is still running
            word=game.word if game.completed else None,
            guesses=[GuessOut(word=g.word, results=g.results) for g in game.guesses],
        )


# 4. Health probe
class HealthOut(BaseModel):
    status: str = "ok"
