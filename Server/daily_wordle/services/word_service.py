"""
Word Service

Supplies the word of the day and validates guesses against the allowed
word list.
"""

import random
import threading
from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, Dict, List, Optional

from ..config.game_settings import WORD_LENGTH, load_word_list
from .errors import WordProviderUnavailableError


class WordProvider(ABC):
    """Source of the daily secret word and of playable-word checks."""

    @abstractmethod
    def get_word_of_the_day(self) -> str:
        """
        Returns the secret word for today, identical for every caller that day.

        Raises:
            WordProviderUnavailableError: If no word can be produced
        """

    @abstractmethod
    def is_playable_word(self, token: str) -> bool:
        """Case-insensitive membership test against the allowed word list."""


class WordListProvider(WordProvider):
    """
    Word provider backed by an in-memory word list.

    The daily word is a seeded pseudo-random pick keyed by the calendar
    date, so every player gets the same word on the same day. The pick is
    cached per day.
    """

    def __init__(self, words: List[str], today: Callable[[], date] = date.today):
        self.words = [word.strip().lower() for word in words]
        self._lookup = frozenset(self.words)
        self._today = today
        self._daily_cache: Dict[date, str] = {}
        self._cache_lock = threading.Lock()

    @classmethod
    def from_file(cls, json_file_path: Optional[str] = None,
                  today: Callable[[], date] = date.today) -> 'WordListProvider':
        """Create a provider from a JSON word list (defaults to the bundled one)."""
        return cls(load_word_list(json_file_path), today=today)

    @staticmethod
    def seed_for(day: date) -> int:
        return day.year * 10000 + day.month * 100 + day.day

    def get_word_of_the_day(self) -> str:
        today = self._today()

        word = self._daily_cache.get(today)
        if word is not None:
            return word

        with self._cache_lock:
            word = self._daily_cache.get(today)
            if word is None:
                word = self._pick_word(today)
                # Only today's entry is ever read again
                self._daily_cache = {today: word}
        return word

    def _pick_word(self, day: date) -> str:
        if not self.words:
            raise WordProviderUnavailableError("Word list is empty")

        rng = random.Random(self.seed_for(day))
        word = self.words[rng.randrange(len(self.words))]

        if len(word) != WORD_LENGTH or not word.isalpha():
            raise WordProviderUnavailableError(f"Word list produced an unplayable word: {word!r}")
        return word

    def is_playable_word(self, token: str) -> bool:
        if not isinstance(token, str):
            return False
        return token.strip().lower() in self._lookup
