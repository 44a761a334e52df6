"""
Daily word selection.

Everyone gets the same secret on the same calendar date. The word is picked with
a random.Random seeded from the date alone, so any process (or a restarted one)
computes the same word for the same day without sharing storage. Results are
cached per date; the cache only saves work, the seed is what makes it stable.
"""

import logging
import random
from datetime import date, datetime, timezone
from threading import Lock
from typing import Callable, Dict, Optional

from .words import DEFAULT_WORD, WordList

logger = logging.getLogger(__name__)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


def seed_for_date(day: date) -> int:
    # 2024-03-07 -> 20240307
    return day.year * 10000 + day.month * 100 + day.day


class DailyWordSelector:
    def __init__(self, word_list: WordList, clock: Optional[Callable[[], date]] = None) -> None:
        if not len(word_list):
            raise ValueError("Word list must not be empty.")
        self.word_list = word_list
        self._clock = clock or utc_today
        self._cache: Dict[date, str] = {}
        self._lock = Lock()

    def today(self) -> date:
        return self._clock()

    def select_daily_word(self) -> str:
        return self.word_for_date(self.today())

    def word_for_date(self, day: date) -> str:
        cached = self._cache.get(day)
        if cached is not None:
            return cached

        word = self._generate(day)
        with self._lock:
            # another thread may have beaten us here; both computed the same word anyway
            return self._cache.setdefault(day, word)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()

    def _generate(self, day: date) -> str:
        rng = random.Random(seed_for_date(day))
        try:
            return rng.choice(self.word_list.words)
        except IndexError:
            logger.warning("Word selection failed for %s, using default word", day)
            return DEFAULT_WORD
