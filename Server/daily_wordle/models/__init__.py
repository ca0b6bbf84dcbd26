"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GuessRequest, GuessResponse, LetterResult, LetterStatus, SessionSummary
from .stats import GameStats, StatisticsResponse

__all__ = [
    'GuessRequest', 'GuessResponse', 'LetterResult', 'LetterStatus', 'SessionSummary',
    'GameStats', 'StatisticsResponse'
]
