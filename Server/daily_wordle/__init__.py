"""
Daily Wordle Server Application Package

Serves one shared word of the day over Socket.IO: each connection plays a
single session and every finished session feeds the day's statistics.
"""

from typing import Optional

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config
from .services.game_service import GameService
from .services.stats_store import StatsStore
from .services.word_service import WordListProvider, WordProvider


def create_app(config_class=Config,
               word_provider: Optional[WordProvider] = None,
               stats_store: Optional[StatsStore] = None):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use
        word_provider: Word provider to use instead of the configured word list
        stats_store: Statistics store to use instead of one on STATS_FILE

    Returns:
        Tuple of the Flask application and its SocketIO instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Game state is owned by the app instance, never by module globals
    if word_provider is None:
        word_provider = WordListProvider.from_file(app.config.get('WORD_LIST_PATH'))
    if stats_store is None:
        stats_store = StatsStore(app.config['STATS_FILE'])

    app.game_service = GameService(
        word_provider,
        stats_store,
        count_abandoned_sessions=app.config.get('COUNT_ABANDONED_SESSIONS', True),
        idle_timeout_seconds=app.config.get('SESSION_IDLE_TIMEOUT_SECONDS', 0),
    )

    # Register blueprints
    from .controllers.stats_controller import stats_bp

    app.register_blueprint(stats_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
