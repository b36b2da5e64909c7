"""
Room Service

Owns the room code -> game session mapping and the index of which rooms each
connection belongs to.
"""

import threading
from collections import OrderedDict
from typing import Dict, List, Optional, Set

from ..config.game_settings import normalize_room_code
from ..models.game import GameSession
from ..utils.helpers import generate_room_code
from ..utils.game_logger import game_logger

# How many disconnected connection ids are remembered
DEPARTED_HISTORY = 4096


class RoomRegistry:
    """
    In-memory registry of live rooms.

    The registry lock only guards its own bookkeeping. Callers that hold a
    session lock may take the registry lock, never the other way round.
    """

    def __init__(self, code_factory=generate_room_code):
        self._rooms: Dict[str, GameSession] = {}
        self._connection_rooms: Dict[str, Set[str]] = {}  # sid -> room codes
        # Connections already cleaned up; late events from them are refused
        self._departed: "OrderedDict[str, None]" = OrderedDict()
        self._lock = threading.Lock()
        self._code_factory = code_factory

    def create(self, sid: str) -> Optional[GameSession]:
        """
        Create a room with ``sid`` seated as setter and return its session.

        Returns None if ``sid`` has already disconnected.
        """
        with self._lock:
            if sid in self._departed:
                return None

            code = self._code_factory()
            while code in self._rooms:
                code = self._code_factory()

            session = GameSession(room=code, setter_sid=sid, members=[sid])
            self._rooms[code] = session
            self._connection_rooms.setdefault(sid, set()).add(code)

        game_logger.log_game_event(code, 'room_created', sid)
        return session

    def lookup(self, code) -> Optional[GameSession]:
        code = normalize_room_code(code)
        if not code:
            return None
        with self._lock:
            return self._rooms.get(code)

    def add_member(self, session: GameSession, sid: str) -> bool:
        """
        Record ``sid`` as a member of the room; caller holds the session lock.

        Returns:
            bool: False if ``sid`` has already disconnected, in which case
            nothing is recorded
        """
        with self._lock:
            if sid in self._departed:
                return False
            if sid not in session.members:
                session.members.append(sid)
            self._connection_rooms.setdefault(sid, set()).add(session.room)
        return True

    def discard_connection(self, sid: str) -> List[str]:
        """Forget ``sid`` in the index and return the rooms it was in."""
        with self._lock:
            self._departed[sid] = None
            while len(self._departed) > DEPARTED_HISTORY:
                self._departed.popitem(last=False)
            return sorted(self._connection_rooms.pop(sid, ()))

    def garbage_collect(self, code: str) -> bool:
        """
        Remove the room if nobody is left in it.

        Membership is re-read under the session lock, so a join racing with
        the last disconnect keeps the room alive.

        Returns:
            bool: True if the room was removed
        """
        session = self.lookup(code)
        if session is None:
            return False

        with session.lock:
            if session.members or session.closed:
                return False
            session.closed = True
            session.cancel_pending()
            with self._lock:
                if self._rooms.get(session.room) is session:
                    del self._rooms[session.room]

        game_logger.log_game_event(session.room, 'room_closed', 'system', rounds_played=session.round_number)
        return True

    def is_live(self, session: GameSession) -> bool:
        with self._lock:
            return not session.closed and self._rooms.get(session.room) is session

    def room_count(self) -> int:
        with self._lock:
            return len(self._rooms)


# Global service instance
_room_registry = None


def get_room_registry() -> Optional[RoomRegistry]:
    """Get the global room registry instance."""
    return _room_registry


def initialize_room_registry() -> RoomRegistry:
    """Initialize the global room registry instance."""
    global _room_registry
    _room_registry = RoomRegistry()
    return _room_registry
