"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import socket_event
from .helpers import get_connection_identity, generate_room_code
from .game_logger import game_logger

__all__ = ['socket_event', 'get_connection_identity', 'generate_room_code', 'game_logger']
