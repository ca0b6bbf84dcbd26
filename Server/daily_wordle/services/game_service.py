"""
Game Service

Binds client connections to game sessions, consumes the word provider and
records every finished session in the statistics store.
"""

import threading
import time
from typing import Callable, Dict, List, Optional

from flask import current_app

from ..config.game_settings import WORD_LENGTH
from ..models.game import GuessResponse, SessionSummary
from ..models.stats import StatisticsResponse
from ..utils.game_logger import game_logger
from .errors import GuessFormatError, SessionNotFoundError, WordProviderUnavailableError
from .session import SessionController
from .stats_store import StatsStore
from .word_service import WordProvider


class GameService:
    """
    Core game service managing concurrent single-player sessions.

    This class handles:
    - Session creation against the word of the day
    - Guess format checks before a guess reaches the session
    - Exactly one statistics update per finished session
    - Abandonment of idle sessions
    """

    def __init__(self,
                 word_provider: WordProvider,
                 stats_store: StatsStore,
                 count_abandoned_sessions: bool = True,
                 idle_timeout_seconds: float = 0,
                 clock: Callable[[], float] = time.monotonic):
        self.word_provider = word_provider
        self.stats_store = stats_store
        self.count_abandoned_sessions = count_abandoned_sessions
        self.idle_timeout_seconds = idle_timeout_seconds
        self._clock = clock
        self.sessions: Dict[str, SessionController] = {}
        self._lock = threading.Lock()

    def start_session(self, session_id: str) -> SessionController:
        """
        Creates a new session for a connection.

        An unfinished session already bound to the same connection is
        abandoned first.

        Raises:
            WordProviderUnavailableError: If the word of the day is unavailable
        """
        try:
            secret = self.word_provider.get_word_of_the_day()
        except WordProviderUnavailableError:
            raise
        except Exception as e:
            raise WordProviderUnavailableError(f"Word provider failed: {e}") from e

        if not secret or len(secret) != WORD_LENGTH:
            raise WordProviderUnavailableError("Word provider returned no playable word")

        session = SessionController(session_id, secret, self.word_provider, clock=self._clock)

        with self._lock:
            previous = self.sessions.get(session_id)
            self.sessions[session_id] = session

        if previous is not None:
            previous.abandon()
            self._record(previous)

        game_logger.log_game_event(session_id, 'session_started')
        return session

    def get_session(self, session_id: str) -> Optional[SessionController]:
        with self._lock:
            return self.sessions.get(session_id)

    def submit_guess(self, session_id: str, word: str) -> GuessResponse:
        """
        Validates the guess format and forwards it to the session.

        Raises:
            GuessFormatError: If the guess is not exactly five letters
            SessionNotFoundError: If no session is active for the connection
        """
        guess = self.validate_guess_format(word)

        session = self.get_session(session_id)
        if session is None:
            raise SessionNotFoundError("No active game for this connection")

        response = session.submit_guess(guess)

        if response.is_game_over:
            self._finish(session_id, session)

        return response

    @staticmethod
    def validate_guess_format(word) -> str:
        """Normalizes a guess, rejecting anything that is not five letters."""
        if not isinstance(word, str):
            raise GuessFormatError("Guess must be a string")

        guess = word.strip().lower()
        if len(guess) != WORD_LENGTH:
            raise GuessFormatError(f"Guess must be exactly {WORD_LENGTH} letters")
        if not guess.isalpha() or not guess.isascii():
            raise GuessFormatError("Guess must contain only letters")
        return guess

    def end_session(self, session_id: str) -> Optional[SessionSummary]:
        """
        Ends a connection's session because the client stopped playing.

        Returns:
            The session summary, or None if no session was active
        """
        session = self.get_session(session_id)
        if session is None:
            return None

        session.abandon()
        return self._finish(session_id, session)

    def cleanup_idle_sessions(self, now: Optional[float] = None) -> List[str]:
        """
        Abandons every session idle for longer than the configured timeout.

        Returns:
            List of abandoned session ids
        """
        if self.idle_timeout_seconds <= 0:
            return []

        if now is None:
            now = self._clock()

        with self._lock:
            idle = [
                (session_id, session) for session_id, session in self.sessions.items()
                if session.idle_for(now) > self.idle_timeout_seconds
            ]

        abandoned = []
        for session_id, session in idle:
            if session.abandon():
                game_logger.log_game_event(
                    session_id, 'session_idle_timeout',
                    idle_seconds=round(session.idle_for(now), 1)
                )
            if self._finish(session_id, session) is not None:
                abandoned.append(session_id)
        return abandoned

    def get_statistics(self) -> StatisticsResponse:
        return self.stats_store.snapshot()

    def active_session_count(self) -> int:
        with self._lock:
            return len(self.sessions)

    def _finish(self, session_id: str, session: SessionController) -> Optional[SessionSummary]:
        """Unbinds a terminal session and records it, once."""
        with self._lock:
            if self.sessions.get(session_id) is not session:
                return None
            del self.sessions[session_id]

        return self._record(session)

    def _record(self, session: SessionController) -> SessionSummary:
        summary = session.summary()

        if summary.won:
            game_logger.log_game_event(
                summary.session_id, 'game_won',
                rounds_used=summary.turns_used, target_word=session.secret
            )
        elif summary.abandoned:
            game_logger.log_game_event(
                summary.session_id, 'game_abandoned',
                rounds_used=summary.turns_used, counted=self.count_abandoned_sessions
            )
            if not self.count_abandoned_sessions:
                return summary
        else:
            game_logger.log_game_event(
                summary.session_id, 'game_lost',
                rounds_used=summary.turns_used, target_word=session.secret
            )

        self.stats_store.record_result(summary.won, summary.turns_used)
        return summary


def get_game_service() -> Optional[GameService]:
    """Get the game service bound to the current Flask application."""
    return getattr(current_app, 'game_service', None)
