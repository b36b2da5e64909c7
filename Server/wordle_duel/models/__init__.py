"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameSession, LetterFeedback, PendingNotification, Role
from .messages import (
    ActionResult, CreateRequest, GuessRequest, InvalidPayload, JoinRequest,
    OutboundMessage, RoleSwapRequest, SetWordRequest
)

__all__ = [
    'GameSession', 'LetterFeedback', 'PendingNotification', 'Role',
    'ActionResult', 'CreateRequest', 'GuessRequest', 'InvalidPayload', 'JoinRequest',
    'OutboundMessage', 'RoleSwapRequest', 'SetWordRequest'
]
