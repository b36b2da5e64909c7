"""
WebSocket Package

Socket.IO event handlers for the real-time duel protocol.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
