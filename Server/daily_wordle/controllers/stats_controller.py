"""
Statistics Controller

Handles the HTTP endpoints for statistics queries and health checks.
"""

from flask import Blueprint, request, jsonify
from ..utils.decorators import require_game_service
from ..utils.game_logger import game_logger

stats_bp = Blueprint('stats', __name__)


@stats_bp.route('/stats', methods=['GET'])
@require_game_service
def get_stats(game_service=None):
    """Get today's statistics."""
    try:
        game_logger.log_client_action(request, 'get_statistics')

        statistics = game_service.get_statistics()
        response_data = {
            'success': True,
            'statistics': statistics.to_dict()
        }

        game_logger.log_server_response(
            request, 'get_statistics', True, response_data,
            num_players=statistics.num_players
        )
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_statistics')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_statistics', False, error_response)
        return jsonify(error_response), 500


@stats_bp.route('/health', methods=['GET'])
@require_game_service
def health_check(game_service=None):
    """Health check endpoint."""
    try:
        game_logger.log_client_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_sessions': game_service.active_session_count(),
            'idle_timeout_seconds': game_service.idle_timeout_seconds,
            'log_stats': game_logger.get_log_stats()
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
