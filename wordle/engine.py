"""
Pure game logic (no HTTP, no storage).
For each guessed letter we decide one of three outcomes:
- Correct: same letter at the same index of the target
- WrongPosition: letter is in the target somewhere else, and the target still
  has an unclaimed copy of it
- Wrong: everything else

Duplicate letters are handled like Wordle does: a target letter can only give
credit once, and exact matches claim their copy first.
"""

from collections import Counter
from typing import List

from .types import LetterResult


def normalize_word(word: str) -> str:
    return word.lower()


def evaluate_guess(target: str, guess: str) -> List[LetterResult]:
    """
    Example:
      target = "abcde"
      guess  = "aebdc"
      -> [Correct, WrongPosition, WrongPosition, Correct, WrongPosition]
      (the d sits at the same index in both words)

      target = "speed"
      guess  = "erase"
      -> [WrongPosition, Wrong, Wrong, WrongPosition, WrongPosition]
      (the two e's in the target are each credited once)
    """
    if len(target) != len(guess):
        raise ValueError("Target and guess must be the same length.")

    results = [LetterResult.WRONG] * len(guess)

    # 1. Exact position matches
    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            results[i] = LetterResult.CORRECT

    # 2. Letters of the target that are still up for grabs
    remaining = Counter(
        t for i, t in enumerate(target) if results[i] is not LetterResult.CORRECT
    )

    # 3. Left to right, hand out the remaining copies
    for i, g in enumerate(guess):
        if results[i] is LetterResult.CORRECT:
            continue
        if remaining[g] > 0:
            results[i] = LetterResult.WRONG_POSITION
            remaining[g] -= 1

    return results


def is_win(target: str, guess: str) -> bool:
    return len(target) > 0 and target == guess
