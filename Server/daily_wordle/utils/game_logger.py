"""
Game Logger Module for the Daily Wordle Server

This module provides structured logging for client actions, server
responses, game events and statistics persistence problems.
"""

import logging
import json
from datetime import datetime
from typing import Dict, Any, Optional
from pathlib import Path

from ..config.app_config import Config
from .helpers import get_client_identity


class GameLogger:
    """
    Centralized logging system for the Daily Wordle server.

    Features:
    - Client action tracking with IP/connection identification
    - Server response logging
    - Game event logging (session start, win, loss, abandonment, stats resets)
    - JSON structured logs for easy parsing
    """

    def __init__(self, log_dir: str = "logs", level: str = "INFO"):
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.level = logging.getLevelName(level.upper())
        if not isinstance(self.level, int):
            self.level = logging.INFO

        # Setup main game logger
        self.logger = self._setup_logger()

    def _log_file(self) -> Path:
        return self.log_dir / f"game_log_{datetime.now().strftime('%Y-%m-%d')}.log"

    def _setup_logger(self) -> logging.Logger:
        """Setup the main game logger with file handler."""
        logger = logging.getLogger('daily_wordle')
        logger.setLevel(self.level)

        # Prevent duplicate handlers
        if logger.handlers:
            logger.handlers.clear()

        # File handler for detailed logs
        file_handler = logging.FileHandler(self._log_file(), encoding='utf-8')
        file_handler.setLevel(self.level)

        # Console handler for only important messages (WARNING and above)
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)

        file_formatter = logging.Formatter(
            '%(asctime)s | %(levelname)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_formatter = logging.Formatter(
            '%(levelname)s: %(message)s'
        )

        file_handler.setFormatter(file_formatter)
        console_handler.setFormatter(console_formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

        return logger

    def _create_log_entry(self,
                          event_type: str,
                          action: str,
                          client_info: Dict[str, Any],
                          details: Dict[str, Any]) -> str:
        """Create a structured log entry."""
        log_entry = {
            'timestamp': datetime.now().isoformat(),
            'event_type': event_type,
            'action': action,
            'client': client_info,
            'details': details
        }
        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def log_client_action(self,
                          request,
                          action: str,
                          session_id: Optional[str] = None,
                          **kwargs):
        """
        Log client actions with full context.

        Args:
            request: Flask request object (HTTP or Socket.IO context)
            action: Type of action (e.g., 'start_game', 'guess', 'get_statistics')
            session_id: Game session identifier if applicable
            **kwargs: Additional details to log
        """
        client_info = get_client_identity(request)

        details = {
            'session_id': session_id,
            'endpoint': getattr(request, 'endpoint', None),
            'method': getattr(request, 'method', None),
            **kwargs
        }

        log_message = self._create_log_entry('CLIENT_ACTION', action, client_info, details)
        self.logger.info(log_message)

    def log_server_response(self,
                            request,
                            action: str,
                            success: bool,
                            response_data: Dict[str, Any],
                            session_id: Optional[str] = None,
                            **kwargs):
        """
        Log server responses with full context.

        Args:
            request: Flask request object
            action: Action that was performed
            success: Whether the action succeeded
            response_data: Data being returned to client
            session_id: Game session identifier if applicable
            **kwargs: Additional details to log
        """
        client_info = get_client_identity(request)

        details = {
            'session_id': session_id,
            'success': success,
            'response_size': len(str(response_data)),
            'response_data': self._sanitize_response_data(response_data),
            **kwargs
        }

        event_type = 'SERVER_RESPONSE_SUCCESS' if success else 'SERVER_RESPONSE_ERROR'
        log_message = self._create_log_entry(event_type, action, client_info, details)

        if success:
            self.logger.info(log_message)
        else:
            self.logger.error(log_message)

    def log_game_event(self,
                       session_id: Optional[str],
                       event: str,
                       client_ip: str = 'system',
                       **kwargs):
        """
        Log game-specific events (wins, losses, abandonment, stats resets).

        Args:
            session_id: Game session identifier (None for server-wide events)
            event: Type of game event (e.g., 'game_won', 'game_lost', 'stats_reset')
            client_ip: Client address, or 'system' for server-initiated events
            **kwargs: Additional game details
        """
        client_info = {'client_ip': client_ip, 'sid': session_id}

        details = {
            'session_id': session_id,
            **kwargs
        }

        log_message = self._create_log_entry('GAME_EVENT', event, client_info, details)
        self.logger.info(log_message)

    def log_error(self,
                  request,
                  error: Exception,
                  action: str,
                  session_id: Optional[str] = None):
        """
        Log errors with full context.

        Args:
            request: Flask request object, or None outside a request
            error: Exception that occurred
            action: Action that was being performed
            session_id: Game session identifier if applicable
        """
        client_info = get_client_identity(request)

        details = {
            'session_id': session_id,
            'error_type': type(error).__name__,
            'error_message': str(error),
            'action': action
        }

        log_message = self._create_log_entry('ERROR', action, client_info, details)
        self.logger.error(log_message)

    def _sanitize_response_data(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Limit the verbosity of logged responses."""
        if not isinstance(data, dict):
            return {'data_type': type(data).__name__}

        sanitized = data.copy()

        if isinstance(sanitized.get('results'), list):
            sanitized['results'] = ''.join(
                {'CORRECT_POSITION': '*', 'WRONG_POSITION': '?', 'NOT_IN_WORD': 'x'}.get(r.get('status'), ' ')
                for r in sanitized['results'] if isinstance(r, dict)
            )
        for key in ('included_letters', 'excluded_letters', 'unused_letters'):
            if isinstance(sanitized.get(key), list):
                sanitized[key] = ''.join(sanitized[key])

        return sanitized

    def get_log_stats(self) -> Dict[str, Any]:
        """Get statistics about logged events (useful for monitoring)."""
        try:
            log_file = self._log_file()
            if not log_file.exists():
                return {'error': 'No log file found for today'}

            stats = {
                'log_file': str(log_file),
                'file_size_mb': round(log_file.stat().st_size / (1024 * 1024), 2),
                'total_entries': 0,
                'client_actions': 0,
                'server_responses': 0,
                'game_events': 0,
                'errors': 0
            }

            with open(log_file, 'r', encoding='utf-8') as f:
                for line in f:
                    if line.strip():
                        stats['total_entries'] += 1
                        if 'CLIENT_ACTION' in line:
                            stats['client_actions'] += 1
                        elif 'SERVER_RESPONSE' in line:
                            stats['server_responses'] += 1
                        elif 'GAME_EVENT' in line:
                            stats['game_events'] += 1
                        elif 'ERROR' in line:
                            stats['errors'] += 1

            return stats

        except OSError as e:
            return {'error': f'Failed to get stats: {str(e)}'}


# Global logger instance
game_logger = GameLogger(Config.LOG_DIR, Config.LOG_LEVEL)
