"""Daily Wordle game service."""
