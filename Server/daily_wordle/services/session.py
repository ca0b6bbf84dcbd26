"""
Session Controller

Owns one player's game against the word of the day: turn counting,
accumulated letter sets and win/loss detection.
"""

import threading
import time
from enum import Enum
from typing import Callable, List, Optional, Set

from ..config.game_settings import ALPHABET, GUESS_LIMIT
from ..models.game import GuessResponse, SessionSummary
from .errors import GameOverError
from .evaluator import evaluate
from .word_service import WordProvider


class SessionState(Enum):
    """Lifecycle of a single-player session."""
    AWAITING_GUESS = "AWAITING_GUESS"
    WON = "WON"
    LOST = "LOST"
    ABANDONED = "ABANDONED"

    @property
    def is_terminal(self) -> bool:
        return self is not SessionState.AWAITING_GUESS


class SessionController:
    """
    State machine for one connection's game.

    Guesses are processed one at a time in arrival order. Once the session
    reaches a terminal state every further guess raises GameOverError.
    """

    def __init__(self,
                 session_id: str,
                 secret: str,
                 word_provider: WordProvider,
                 guess_limit: int = GUESS_LIMIT,
                 clock: Callable[[], float] = time.monotonic):
        self.session_id = session_id
        self._secret = secret.lower()
        self._word_provider = word_provider
        self.guess_limit = guess_limit
        self._clock = clock

        self.state = SessionState.AWAITING_GUESS
        self.turns_used = 0
        self.guesses: List[str] = []
        self.included: Set[str] = set()
        self.excluded: Set[str] = set()
        self.available: Set[str] = set(ALPHABET)

        self.started_at = clock()
        self.last_activity = self.started_at
        self._lock = threading.Lock()

    @property
    def won(self) -> bool:
        return self.state is SessionState.WON

    @property
    def over(self) -> bool:
        return self.state.is_terminal

    @property
    def secret(self) -> str:
        """The secret word; only meaningful to reveal once the game is over."""
        return self._secret

    def submit_guess(self, word: str) -> GuessResponse:
        """
        Processes one guess.

        Unplayable words are rejected with an empty result list and do not
        consume a turn or touch the letter sets.

        Raises:
            GameOverError: If the session already reached a terminal state
        """
        with self._lock:
            if self.state.is_terminal:
                raise GameOverError(f"Session is over ({self.state.value})")

            self.last_activity = self._clock()
            guess = word.strip().lower()

            if not self._word_provider.is_playable_word(guess):
                return self._response([])

            self.turns_used += 1
            self.guesses.append(guess)
            results = evaluate(self._secret, guess, self.included, self.excluded, self.available)

            if guess == self._secret:
                self.state = SessionState.WON
            elif self.turns_used >= self.guess_limit:
                self.state = SessionState.LOST

            return self._response(results)

    def abandon(self) -> bool:
        """
        Marks an unfinished session as abandoned.

        Returns:
            bool: True if the state changed, False if it was already terminal
        """
        with self._lock:
            if self.state.is_terminal:
                return False
            self.state = SessionState.ABANDONED
            return True

    def idle_for(self, now: Optional[float] = None) -> float:
        if now is None:
            now = self._clock()
        return now - self.last_activity

    def summary(self) -> SessionSummary:
        return SessionSummary(
            session_id=self.session_id,
            won=self.won,
            turns_used=self.turns_used,
            abandoned=self.state is SessionState.ABANDONED,
            guesses=list(self.guesses),
        )

    def _response(self, results) -> GuessResponse:
        return GuessResponse.build(
            results,
            self.included,
            self.excluded,
            self.available,
            is_correct=self.won,
            is_game_over=self.state.is_terminal,
        )
