"""
Helper Functions

Contains utility functions used throughout the application.
"""

import random
from typing import Dict

from ..config.game_settings import ROOM_CODE_ALPHABET, ROOM_CODE_LENGTH


def get_connection_identity(request_obj=None) -> Dict[str, str]:
    """Extract connection identity information from a Socket.IO or HTTP request."""
    if request_obj is None:
        from flask import request
        request_obj = request

    return {
        'user_ip': getattr(request_obj, 'remote_addr', None) or 'unknown',
        'session_id': getattr(request_obj, 'sid', None)
    }


def generate_room_code(length: int = ROOM_CODE_LENGTH) -> str:
    """Random room code; uniqueness is checked by the registry."""
    return ''.join(random.choices(ROOM_CODE_ALPHABET, k=length))
