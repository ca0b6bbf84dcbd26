"""
Configuration Package

Contains all configuration-related files and settings.

This package separates two types of configuration:
- app_config.py: Flask application configuration (environment-based)
- game_settings.py: Game rules, constants and word list loading
"""

from .app_config import Config, DevelopmentConfig, ProductionConfig, TestingConfig, config, get_config
from .game_settings import (
    ALPHABET, GUESS_LIMIT, WORD_LENGTH, load_word_list, validate_word_list_integrity
)

__all__ = [
    # App configuration
    'Config', 'DevelopmentConfig', 'ProductionConfig', 'TestingConfig', 'config', 'get_config',
    # Game rules
    'ALPHABET', 'GUESS_LIMIT', 'WORD_LENGTH', 'load_word_list', 'validate_word_list_integrity'
]
