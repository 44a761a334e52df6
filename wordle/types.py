"""
Labels for clarity.
"""

from enum import Enum
from typing import List


class LetterResult(str, Enum):
    """Per-letter outcome of a guess. Values are what goes over the wire."""

    CORRECT = "Correct"
    WRONG_POSITION = "WrongPosition"
    WRONG = "Wrong"


Results = List[LetterResult]  # one entry per guessed letter
GameId = str  # uuid4 string
UserId = str  # JWT subject
