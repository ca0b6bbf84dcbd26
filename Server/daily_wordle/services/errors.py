"""
Service Errors

Exceptions raised by the game services. Each carries a stable `code`
that the WebSocket handlers forward to clients.
"""


class DailyWordleError(Exception):
    """Base class for all game service errors."""
    code = 'internal_error'


class GuessFormatError(DailyWordleError):
    """Guess is not exactly five letters; rejected without consuming a turn."""
    code = 'invalid_guess_format'


class WordProviderUnavailableError(DailyWordleError):
    """The word of the day could not be produced; no session may start."""
    code = 'word_provider_unavailable'


class StatsPersistenceError(DailyWordleError):
    """The statistics file could not be read or written."""
    code = 'stats_persistence_failure'


class SessionNotFoundError(DailyWordleError):
    """No active session is bound to the connection."""
    code = 'no_active_game'


class GameOverError(DailyWordleError):
    """A guess arrived after the session reached a terminal state."""
    code = 'game_over'
