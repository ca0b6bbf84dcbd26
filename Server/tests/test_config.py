import os

import pytest

from daily_wordle.config import (
    Config, DevelopmentConfig, ProductionConfig, TestingConfig, get_config
)


@pytest.mark.parametrize('name, expected', [
    ('development', DevelopmentConfig),
    ('production', ProductionConfig),
    ('testing', TestingConfig),
    ('default', DevelopmentConfig),
    ('Production', ProductionConfig),
])
def test_get_config_by_name(name, expected):
    assert get_config(name) is expected


def test_get_config_reads_flask_env(monkeypatch):
    monkeypatch.setenv('FLASK_ENV', 'production')
    assert get_config() is ProductionConfig

    monkeypatch.delenv('FLASK_ENV')
    assert get_config() is DevelopmentConfig


def test_get_config_unknown_name(monkeypatch):
    monkeypatch.setenv('FLASK_ENV', 'staging')
    with pytest.raises(ValueError, match='staging'):
        get_config()


def test_production_enables_idle_timeout():
    expected = int(os.getenv('SESSION_IDLE_TIMEOUT_SECONDS', 900))
    assert ProductionConfig.SESSION_IDLE_TIMEOUT_SECONDS == expected
    assert ProductionConfig.DEBUG is False
    assert issubclass(ProductionConfig, Config)
