"""
Game Data Models

Contains the per-room session state and the enums used on the wire.
"""

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..config.game_settings import MAX_ATTEMPTS


class LetterFeedback(Enum):
    """Per-letter evaluation of a guess against the secret."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class Role(Enum):
    """Seat a connection holds for the current round."""
    SETTER = "setter"
    GUESSER = "guesser"


@dataclass
class PendingNotification:
    """A scheduled one-shot message; cancelled tokens are never delivered."""
    room: str
    recipient: str
    event: str
    delay: float
    cancelled: bool = False

    def cancel(self):
        self.cancelled = True


@dataclass(eq=False)
class GameSession:
    """
    Server-side state of one room.

    ``locked`` and ``started`` together encode the round phase:
    (False, False) awaiting a word, (True, False) word locked and waiting for
    a guesser, (True, True) round in progress or over.
    """
    room: str
    setter_sid: Optional[str] = None
    secret: str = ""
    guesses: List[str] = field(default_factory=list)
    feedback_history: List[List[str]] = field(default_factory=list)
    players: List[Role] = field(default_factory=lambda: [Role.SETTER])
    locked: bool = False
    started: bool = False
    members: List[str] = field(default_factory=list)
    round_number: int = 1
    pending_notification: Optional[PendingNotification] = None
    closed: bool = False
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def has_guesser(self) -> bool:
        return Role.GUESSER in self.players

    @property
    def won(self) -> bool:
        return bool(self.feedback_history) and all(
            status == LetterFeedback.CORRECT.value for status in self.feedback_history[-1]
        )

    @property
    def over(self) -> bool:
        return self.won or len(self.guesses) >= MAX_ATTEMPTS

    @property
    def in_progress(self) -> bool:
        return bool(self.secret) and self.started and not self.over

    def cancel_pending(self):
        if self.pending_notification:
            self.pending_notification.cancel()
            self.pending_notification = None

    def reset_round(self):
        """Clear every round-scoped field; seats and membership are kept."""
        self.secret = ""
        self.guesses = []
        self.feedback_history = []
        self.locked = False
        self.started = False

    def to_public_dict(self) -> Dict:
        """Snapshot safe to show either player; never contains the secret."""
        return {
            'room': self.room,
            'players': [role.value for role in self.players],
            'locked': self.locked,
            'started': self.started,
            'guesses': list(self.guesses),
            'feedback': [list(row) for row in self.feedback_history],
            'attempts': len(self.guesses),
            'max_attempts': MAX_ATTEMPTS,
            'won': self.won,
            'over': self.started and self.over,
            'round': self.round_number,
            'connected': len(self.members)
        }
