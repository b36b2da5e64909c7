"""
Controllers Package

HTTP blueprints of the duel server.
"""

from .room_controller import room_bp

__all__ = ['room_bp']
