"""
Daily Wordle Server - Main Entry Point

This is the main entry point for the Daily Wordle server.
It creates the Flask-SocketIO application and starts the idle session sweeper.
"""

import threading
import time
from daily_wordle import create_app
from daily_wordle.config import get_config, load_word_list, validate_word_list_integrity
from daily_wordle.utils.game_logger import game_logger


def idle_session_cleanup_worker(app, interval_seconds):
    """
    Background worker that periodically abandons idle game sessions.
    Abandoned sessions still record their one statistics update.
    """
    print("Idle session cleanup worker started")
    while True:
        try:
            abandoned = app.game_service.cleanup_idle_sessions()
            if abandoned:
                print(f"Idle cleanup abandoned {len(abandoned)} session(s)")
                game_logger.logger.info(f"Idle cleanup: Abandoned {len(abandoned)} sessions: {abandoned}")
        except Exception as e:
            game_logger.logger.error(f"Error in idle session cleanup worker: {e}")

        time.sleep(interval_seconds)


def main():
    """Main function to validate configuration and start the server."""
    try:
        config_class = get_config()
        print(f"Using {config_class.__name__}")

        print("Validating word list...")
        validate_word_list_integrity(load_word_list(config_class.WORD_LIST_PATH))
        print("✓ Word list validation passed")

        print("Creating Flask application...")
        app, socketio = create_app(config_class)
        print("✓ Flask application created successfully")

        if config_class.SESSION_IDLE_TIMEOUT_SECONDS > 0:
            cleanup_thread = threading.Thread(
                target=idle_session_cleanup_worker,
                args=(app, config_class.IDLE_SWEEP_INTERVAL_SECONDS),
                daemon=True
            )
            cleanup_thread.start()
            print(f"✓ Idle session cleanup worker started - checking every {config_class.IDLE_SWEEP_INTERVAL_SECONDS} seconds")

        game_logger.logger.info("Daily Wordle Server starting")

        print(f"\nStarting Daily Wordle Server on {config_class.HOST}:{config_class.PORT}")
        print(f"Debug mode: {config_class.DEBUG}")
        print(f"Statistics file: {config_class.STATS_FILE}")
        print(f"Count abandoned sessions: {config_class.COUNT_ABANDONED_SESSIONS}")
        print("=" * 50)

        socketio.run(app, host=config_class.HOST, port=config_class.PORT, debug=config_class.DEBUG)

    except KeyboardInterrupt:
        print("\nServer shutting down...")
        game_logger.logger.info("Daily Wordle Server shutting down (KeyboardInterrupt)")
    except Exception as e:
        print(f"Error starting server: {e}")
        game_logger.logger.error(f"Error starting server: {e}")
        raise


if __name__ == '__main__':
    main()
