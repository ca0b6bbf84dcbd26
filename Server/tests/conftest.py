import os
import sys
import tempfile
from datetime import date

import pytest

# Ensure the server root (containing the `daily_wordle` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
SERVER_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if SERVER_ROOT not in sys.path:
    sys.path.insert(0, SERVER_ROOT)

# Keep test logs out of the working tree; must be set before the package is imported
os.environ.setdefault('LOG_DIR', os.path.join(tempfile.gettempdir(), 'daily_wordle_test_logs'))

from daily_wordle import create_app
from daily_wordle.config import TestingConfig
from daily_wordle.services.game_service import GameService
from daily_wordle.services.stats_store import StatsStore
from daily_wordle.services.word_service import WordProvider


TEST_WORDS = [
    'crane', 'level', 'eerie', 'speed', 'slate', 'about', 'light',
    'moral', 'shell', 'trust', 'pound', 'fight', 'green', 'abbey',
]


class FixedWordProvider(WordProvider):
    """Word provider with a fixed secret, for predictable games."""

    def __init__(self, secret='crane', words=None):
        self.secret = secret
        self.words = set(words or TEST_WORDS)
        self.words.add(secret)

    def get_word_of_the_day(self):
        return self.secret

    def is_playable_word(self, token):
        return token.strip().lower() in self.words


class BrokenWordProvider(FixedWordProvider):
    """Word provider whose backing service cannot be reached."""

    def get_word_of_the_day(self):
        raise ConnectionError('word server unreachable')


class FakeToday:
    """Callable standing in for date.today."""

    def __init__(self, value=date(2026, 10, 19)):
        self.value = value

    def __call__(self):
        return self.value


class FakeClock:
    """Callable standing in for time.monotonic."""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestConfig(TestingConfig):
    TESTING = True
    SECRET_KEY = 'test-secret'
    COUNT_ABANDONED_SESSIONS = True
    SESSION_IDLE_TIMEOUT_SECONDS = 0


@pytest.fixture()
def fake_today():
    return FakeToday()


@pytest.fixture()
def fake_clock():
    return FakeClock()


@pytest.fixture()
def stats_file(tmp_path):
    return str(tmp_path / 'gamestats.json')


@pytest.fixture()
def stats_store(stats_file, fake_today):
    return StatsStore(stats_file, today=fake_today)


@pytest.fixture()
def word_provider():
    return FixedWordProvider('crane')


@pytest.fixture()
def game_service(word_provider, stats_store, fake_clock):
    return GameService(word_provider, stats_store, clock=fake_clock)


@pytest.fixture()
def flask_app(word_provider, stats_store):
    application, _ = create_app(TestConfig, word_provider=word_provider, stats_store=stats_store)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = flask_app.socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
