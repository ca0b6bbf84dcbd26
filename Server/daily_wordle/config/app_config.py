"""
Configuration Management Module

Centralized configuration management following the 12-factor app methodology.
All configuration is loaded from environment variables with sensible defaults.
"""

import os
from dotenv import load_dotenv

# Load environment variables from config.env
load_dotenv('daily_wordle/config/config.env')


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == 'true'


class Config:
    """Base configuration class with all settings."""

    # Flask Settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
    DEBUG = _env_flag('DEBUG', 'False')
    TESTING = False

    # Server Settings
    HOST = os.getenv('HOST', '127.0.0.1')
    PORT = int(os.getenv('PORT', 5000))

    # Statistics Settings
    STATS_FILE = os.getenv('STATS_FILE', os.path.join(os.getcwd(), 'gamestats.json'))
    COUNT_ABANDONED_SESSIONS = _env_flag('COUNT_ABANDONED_SESSIONS', 'True')

    # Word Provider Settings (None means the bundled wordles.json)
    WORD_LIST_PATH = os.getenv('WORD_LIST_PATH')

    # Session Settings
    SESSION_IDLE_TIMEOUT_SECONDS = int(os.getenv('SESSION_IDLE_TIMEOUT_SECONDS', 0))
    IDLE_SWEEP_INTERVAL_SECONDS = int(os.getenv('IDLE_SWEEP_INTERVAL_SECONDS', 15))

    # Logging Settings
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('LOG_DIR', 'logs')


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    SESSION_IDLE_TIMEOUT_SECONDS = int(os.getenv('SESSION_IDLE_TIMEOUT_SECONDS', 900))


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    DEBUG = True


# Configuration mapping
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(name=None):
    """
    Resolve a configuration class by environment name.

    Args:
        name: One of the keys of `config`; defaults to the FLASK_ENV
            environment variable, then 'default'

    Raises:
        ValueError: If the name is not a known configuration
    """
    if name is None:
        name = os.getenv('FLASK_ENV', 'default')
    try:
        return config[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown configuration '{name}'. Expected one of: {', '.join(sorted(config))}")
