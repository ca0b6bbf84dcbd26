"""
WebSocket Event Handlers

Handles the gameplay stream: one Socket.IO connection plays one session
against the word of the day.
"""

from flask import request
from flask_socketio import emit
from ..config.game_settings import GUESS_LIMIT, WORD_LENGTH
from ..models.game import GuessRequest
from ..services.errors import DailyWordleError
from ..utils.decorators import websocket_game_service_required
from ..utils.game_logger import game_logger


def _emit_error(error: Exception, action: str):
    """Report a failure to the client and log it."""
    if isinstance(error, DailyWordleError):
        code = error.code
        message = str(error)
    else:
        code = 'internal_error'
        message = 'Internal server error'
        game_logger.log_error(request, error, action, request.sid)

    error_response = {'success': False, 'error': message, 'code': code}
    game_logger.log_server_response(request, action, False, error_response, request.sid)
    emit('error', error_response)


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.log_client_action(request, 'connect', request.sid)

    @socketio.on('disconnect')
    @websocket_game_service_required
    def handle_disconnect(reason=None, game_service=None):
        """Abandon the connection's session if the game was still running."""
        try:
            summary = game_service.end_session(request.sid)
            game_logger.log_client_action(
                request, 'disconnect', request.sid,
                reason=str(reason) if reason is not None else None,
                abandoned_game=summary is not None
            )
        except Exception as e:
            game_logger.log_error(request, e, 'disconnect', request.sid)

    @socketio.on('start_game')
    @websocket_game_service_required
    def handle_start_game(data=None, game_service=None):
        """Start a session against today's word."""
        game_logger.log_client_action(request, 'start_game', request.sid)
        try:
            game_service.start_session(request.sid)
        except Exception as e:
            _emit_error(e, 'start_game')
            return

        response_data = {
            'success': True,
            'guess_limit': GUESS_LIMIT,
            'word_length': WORD_LENGTH
        }
        game_logger.log_server_response(request, 'start_game', True, response_data, request.sid)
        emit('game_started', response_data)

    @socketio.on('guess')
    @websocket_game_service_required
    def handle_guess(data=None, game_service=None):
        """Evaluate one guess and reply with a guess_response."""
        guess_request = GuessRequest.from_payload(data)
        game_logger.log_client_action(request, 'guess', request.sid, guess=guess_request.word)

        try:
            response = game_service.submit_guess(request.sid, guess_request.word)
        except Exception as e:
            _emit_error(e, 'guess')
            return

        response_data = response.to_dict()
        game_logger.log_server_response(
            request, 'guess', True, response_data, request.sid,
            rejected=response.is_rejected, game_over=response.is_game_over
        )
        emit('guess_response', response_data)

    @socketio.on('end_game')
    @websocket_game_service_required
    def handle_end_game(data=None, game_service=None):
        """Client stopped sending guesses; the session is abandoned."""
        game_logger.log_client_action(request, 'end_game', request.sid)
        try:
            summary = game_service.end_session(request.sid)
        except Exception as e:
            _emit_error(e, 'end_game')
            return

        response_data = {'success': True, 'abandoned': summary is not None}
        game_logger.log_server_response(request, 'end_game', True, response_data, request.sid)
        emit('game_ended', response_data)

    @socketio.on('get_statistics')
    @websocket_game_service_required
    def handle_get_statistics(data=None, game_service=None):
        """Reply with today's statistics."""
        game_logger.log_client_action(request, 'get_statistics', request.sid)
        try:
            statistics = game_service.get_statistics()
        except Exception as e:
            _emit_error(e, 'get_statistics')
            return

        response_data = statistics.to_dict()
        game_logger.log_server_response(request, 'get_statistics', True, response_data, request.sid)
        emit('statistics', response_data)
