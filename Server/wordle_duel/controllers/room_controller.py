"""
Room Controller

Read-only HTTP endpoints: server health and a public view of a room.
"""

from flask import Blueprint, request, jsonify
from ..services.game_service import get_game_service
from ..services.room_service import get_room_registry
from ..utils.game_logger import game_logger

room_bp = Blueprint('rooms', __name__)


@room_bp.route('/health', methods=['GET'])
def health():
    """Report that the server is up and how many rooms are live."""
    registry = get_room_registry()
    return jsonify({
        'success': True,
        'status': 'ok' if registry else 'degraded',
        'rooms': registry.room_count() if registry else 0
    })


@room_bp.route('/rooms/<code>', methods=['GET'])
def get_room_state(code):
    """Get the public state of a room (the secret word is never included)."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'get_room_state', code)

        state = game_service.get_room_state(code)
        if state is None:
            error_response = {
                'success': False,
                'error': 'Room not found'
            }
            game_logger.log_server_response(request, 'get_room_state', False, error_response, code)
            return jsonify(error_response), 404

        response_data = {
            'success': True,
            'state': state
        }
        game_logger.log_server_response(request, 'get_room_state', True, {'room': state['room']}, code)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_room_state', code)
        error_response = {
            'success': False,
            'error': str(e)
        }
        return jsonify(error_response), 500
