"""
Statistics Store

Durable, thread-safe aggregator of the day's play results shared by every
game session.
"""

import json
import os
import tempfile
import threading
from datetime import date
from typing import Callable, Optional

from ..config.game_settings import GUESS_LIMIT
from ..models.stats import GameStats, StatisticsResponse
from ..utils.game_logger import game_logger
from .errors import StatsPersistenceError


class StatsStore:
    """
    Read-modify-write access to the daily GameStats record.

    A single lock guards the whole load, day-boundary check, update and
    persist sequence, so concurrent sessions never lose an update. The
    record is loaded from disk on first access and kept in memory; the JSON
    file is rewritten wholesale after every mutation.

    Persistence failures are logged and never raised to callers. An
    unreadable file is never overwritten; updates made while it cannot be
    read are served but not saved.
    """

    def __init__(self, stats_file: str, today: Callable[[], date] = date.today):
        self.stats_file = stats_file
        self._today = today
        self._lock = threading.Lock()
        self._stats: Optional[GameStats] = None

    def record_result(self, won: bool, turns_used: int) -> GameStats:
        """
        Adds one finished session to today's statistics.

        Args:
            won: Whether the player guessed the word
            turns_used: Counted guesses the player used

        Returns:
            GameStats: A copy of the updated record

        Raises:
            ValueError: If a win reports a guess count outside 1..GUESS_LIMIT
        """
        if won and not 1 <= turns_used <= GUESS_LIMIT:
            raise ValueError(f"Winning guess count must be between 1 and {GUESS_LIMIT}, got {turns_used}")

        with self._lock:
            stats = self._current()

            stats.total_players += 1
            if won:
                stats.total_winners += 1
                stats.total_guesses_by_winners += turns_used
                stats.guess_distribution[turns_used] = stats.guess_distribution.get(turns_used, 0) + 1

            if stats is self._stats:
                self._persist(stats)
            return self._copy(stats)

    def snapshot(self) -> StatisticsResponse:
        """Computes today's statistics from the current record."""
        with self._lock:
            return StatisticsResponse.from_stats(self._current())

    def reset(self) -> GameStats:
        """Discards today's counters and persists the empty record."""
        with self._lock:
            self._stats = GameStats(date=self._today())
            self._persist(self._stats)
            return self._copy(self._stats)

    def _current(self) -> GameStats:
        """
        Returns the record to work on, applying the day reset. Caller holds the lock.

        While the stats file cannot be read, a throwaway empty record is
        returned instead of the cached one; it is never persisted, and the
        load is retried on the next access.
        """
        if self._stats is None:
            try:
                self._stats = self._read_file()
            except StatsPersistenceError as e:
                game_logger.log_error(None, e, 'load_stats')
                return GameStats(date=self._today())

        today = self._today()
        if self._stats.date != today:
            game_logger.log_game_event(
                None, 'stats_reset',
                previous_date=self._stats.date.isoformat(),
                new_date=today.isoformat(),
                previous_players=self._stats.total_players
            )
            self._stats = GameStats(date=today)
            self._persist(self._stats)

        return self._stats

    def _read_file(self) -> GameStats:
        """
        Loads the record from disk.

        A file that reads but does not hold a valid record is moved aside to
        `<stats_file>.corrupt` and replaced by an empty record for today.

        Raises:
            StatsPersistenceError: If the file exists but cannot be read
        """
        if not os.path.exists(self.stats_file):
            return GameStats(date=self._today())

        try:
            with open(self.stats_file, 'rb') as f:
                raw = f.read()
        except OSError as e:
            raise StatsPersistenceError(f"Could not read stats file {self.stats_file}: {e}") from e

        try:
            return GameStats.from_dict(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            self._quarantine(e)
            return GameStats(date=self._today())

    def _quarantine(self, reason: Exception) -> None:
        corrupt_path = f"{self.stats_file}.corrupt"
        try:
            os.replace(self.stats_file, corrupt_path)
        except OSError as e:
            raise StatsPersistenceError(f"Could not move malformed stats file aside: {e}") from e

        game_logger.log_error(
            None,
            StatsPersistenceError(f"Malformed stats file moved to {corrupt_path}: {reason}"),
            'load_stats'
        )

    def _persist(self, stats: GameStats) -> None:
        try:
            self._write_file(stats)
        except StatsPersistenceError as e:
            game_logger.log_error(None, e, 'persist_stats')

    def _write_file(self, stats: GameStats) -> None:
        directory = os.path.dirname(os.path.abspath(self.stats_file))
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(prefix='.gamestats-', suffix='.tmp', dir=directory)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(stats.to_dict(), f)
            # Readers only ever see a complete record
            os.replace(tmp_path, self.stats_file)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StatsPersistenceError(f"Could not write stats file {self.stats_file}: {e}") from e

    @staticmethod
    def _copy(stats: GameStats) -> GameStats:
        return GameStats(
            date=stats.date,
            total_players=stats.total_players,
            total_winners=stats.total_winners,
            total_guesses_by_winners=stats.total_guesses_by_winners,
            guess_distribution=dict(stats.guess_distribution),
        )
