"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from flask import Blueprint, current_app, jsonify, request

from ..utils.game_logger import game_logger

game_bp = Blueprint('game', __name__)


@game_bp.route('/games', methods=['GET'])
def list_games():
    """List every running game."""
    try:
        game_logger.log_user_action(request, 'list_games')

        response_data = current_app.lobby_service.get_lobby_state()

        game_logger.log_server_response(request, 'list_games', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(e, 'list_games', request=request)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'list_games', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get the current state of a running game."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        game = current_app.lobby_service.get_game(game_id)
        if game is None:
            error_response = {
                'success': False,
                'error': 'Game not found'
            }
            game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'state': game.snapshot()
        }

        game_logger.log_server_response(request, 'get_state', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(e, 'get_state', game_id, request=request)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        lobby_service = current_app.lobby_service

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(lobby_service.active_games()),
            'dictionary_size': len(lobby_service.word_list),
            'log_stats': game_logger.get_log_stats(),
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(e, 'health_check', request=request)
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
