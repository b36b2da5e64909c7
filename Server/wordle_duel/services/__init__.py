"""
Services Package

Contains all business logic and service classes.
"""

from .game_service import GameService, evaluate_guess, get_game_service, initialize_game_service
from .room_service import RoomRegistry, get_room_registry, initialize_room_registry

__all__ = [
    'GameService', 'evaluate_guess', 'get_game_service', 'initialize_game_service',
    'RoomRegistry', 'get_room_registry', 'initialize_room_registry'
]
