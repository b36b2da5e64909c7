"""
Socket Message Models

Typed inbound requests, validated at the socket boundary before they reach the
game service, and the outbound message envelope the service hands back.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from ..config.game_settings import normalize_room_code
from .game import PendingNotification

# Error strings shown to the client
ROOM_NOT_FOUND = "Room not found"
ROOM_FULL = "Room full"
GAME_IN_PROGRESS = "Game already in progress"
ALREADY_IN_ROOM = "Already in this room"
INVALID_WORD = "Invalid word"


class InvalidPayload(ValueError):
    """
    Raised when an inbound payload does not have the expected shape.

    ``error`` is the message reported back to the sender; None means the
    request is dropped without a reply.
    """

    def __init__(self, error: Optional[str] = None):
        super().__init__(error or "malformed payload")
        self.error = error


def _field(data, name):
    if not isinstance(data, dict):
        return None
    return data.get(name)


@dataclass(frozen=True)
class CreateRequest:
    @classmethod
    def from_payload(cls, data):
        return cls()


@dataclass(frozen=True)
class JoinRequest:
    room: str

    @classmethod
    def from_payload(cls, data):
        room = normalize_room_code(_field(data, 'room'))
        if not room:
            raise InvalidPayload(ROOM_NOT_FOUND)
        return cls(room=room)


@dataclass(frozen=True)
class SetWordRequest:
    room: str
    word: str

    @classmethod
    def from_payload(cls, data):
        room = normalize_room_code(_field(data, 'room'))
        if not room:
            raise InvalidPayload()
        word = _field(data, 'word')
        if not isinstance(word, str):
            raise InvalidPayload(INVALID_WORD)
        return cls(room=room, word=word)


@dataclass(frozen=True)
class GuessRequest:
    room: str
    guess: str

    @classmethod
    def from_payload(cls, data):
        room = normalize_room_code(_field(data, 'room'))
        guess = _field(data, 'guess')
        if not room or not isinstance(guess, str):
            raise InvalidPayload()
        return cls(room=room, guess=guess)


@dataclass(frozen=True)
class RoleSwapRequest:
    room: str

    @classmethod
    def from_payload(cls, data):
        room = normalize_room_code(_field(data, 'room'))
        if not room:
            raise InvalidPayload()
        return cls(room=room)


@dataclass(frozen=True)
class OutboundMessage:
    """One emit: ``to`` is either a connection id or a room code."""
    event: str
    to: str
    payload: Any = None


@dataclass
class ActionResult:
    """
    Outcome of a game service operation.

    An empty result (no error, no messages) means the request was ignored.
    """
    error: Optional[str] = None
    messages: List[OutboundMessage] = field(default_factory=list)
    join_room: Optional[str] = None
    deferred: Optional[PendingNotification] = None

    @property
    def ignored(self) -> bool:
        return self.error is None and not self.messages and self.deferred is None
