"""
Socket Event Decorators

Validates inbound payloads into typed requests and keeps a failing handler
from affecting any other connection.
"""

from functools import wraps
from flask import request
from flask_socketio import emit

from ..models.messages import InvalidPayload
from .game_logger import game_logger


def socket_event(action, request_cls):
    """
    Decorator for Socket.IO message handlers.

    The raw payload is logged and parsed with ``request_cls.from_payload``;
    the wrapped handler receives the parsed request. A payload rejected with a
    visible error is answered with an ``error`` message to the sender only,
    otherwise it is dropped silently.
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(data=None, *args):
            room = data.get('room') if isinstance(data, dict) else None
            game_logger.log_user_action(request, action, room, data)

            try:
                parsed = request_cls.from_payload(data)
            except InvalidPayload as e:
                if e.error:
                    emit('error', e.error)
                game_logger.log_server_response(
                    request, action, False, {'error': e.error, 'dropped': e.error is None}, room
                )
                return None

            try:
                return f(parsed)
            except Exception as e:
                game_logger.log_error(request, e, action, room)
                return None

        return decorated_function
    return decorator
