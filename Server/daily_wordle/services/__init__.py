"""
Services Package

Contains all business logic and service classes.
"""

from .errors import (
    DailyWordleError, GameOverError, GuessFormatError, SessionNotFoundError,
    StatsPersistenceError, WordProviderUnavailableError
)
from .evaluator import evaluate
from .game_service import GameService, get_game_service
from .session import SessionController, SessionState
from .stats_store import StatsStore
from .word_service import WordListProvider, WordProvider

__all__ = [
    'DailyWordleError', 'GameOverError', 'GuessFormatError', 'SessionNotFoundError',
    'StatsPersistenceError', 'WordProviderUnavailableError',
    'evaluate',
    'GameService', 'get_game_service',
    'SessionController', 'SessionState',
    'StatsStore',
    'WordListProvider', 'WordProvider'
]
