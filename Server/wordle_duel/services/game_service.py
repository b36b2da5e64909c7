"""
Game Service

Contains the duel state machine: seating, word locking, guess evaluation,
round completion, role swap and disconnect handling.

Every operation runs under the room's own lock and returns an ActionResult
describing what should be sent to whom; delivery is left to the socket layer.
"""

from collections import Counter
from typing import Dict, List, Optional

from ..config.game_settings import is_well_formed_word, normalize_word
from ..models.game import LetterFeedback, PendingNotification, Role
from ..models.messages import (
    ActionResult, OutboundMessage,
    ALREADY_IN_ROOM, GAME_IN_PROGRESS, INVALID_WORD, ROOM_FULL, ROOM_NOT_FOUND
)
from ..utils.game_logger import game_logger
from .room_service import RoomRegistry


def evaluate_guess(guess: str, secret: str) -> List[LetterFeedback]:
    """
    Implements the Wordle letter evaluation algorithm.

    Exact matches are marked first and consume their letter; the remaining
    positions are then scanned left to right against what is left of the
    secret, so a repeated letter is never marked more often than it occurs.
    """
    remaining = Counter(secret)
    result: List[Optional[LetterFeedback]] = [None] * len(guess)

    # First pass: exact position matches
    for i, (letter, target) in enumerate(zip(guess, secret)):
        if letter == target:
            result[i] = LetterFeedback.CORRECT
            remaining[letter] -= 1

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if remaining[letter] > 0:
            result[i] = LetterFeedback.PRESENT
            remaining[letter] -= 1
        else:
            result[i] = LetterFeedback.ABSENT

    return result


class GameService:
    """
    Core game service managing the rooms held by a RoomRegistry.

    This class handles:
    - Room creation and seating of setter and guesser
    - Word locking by the setter
    - Guess evaluation and round completion detection
    - Role swap between rounds and disconnect cleanup
    """

    def __init__(self, registry: RoomRegistry, notify_delay: float = 0.8):
        self.registry = registry
        self.notify_delay = notify_delay

    def create_room(self, sid: str) -> ActionResult:
        """Creates a room and seats ``sid`` as its setter."""
        session = self.registry.create(sid)
        if session is None:
            return ActionResult()
        return ActionResult(
            messages=[OutboundMessage('room-created', sid, {'room': session.room, 'role': Role.SETTER.value})],
            join_room=session.room
        )

    def join(self, room: str, sid: str) -> ActionResult:
        """
        Seats ``sid`` as the guesser of ``room``.

        A room whose word is already locked starts its round on this join;
        a room whose round is under way refuses it.
        """
        session = self.registry.lookup(room)
        if session is None:
            return ActionResult(error=ROOM_NOT_FOUND)

        with session.lock:
            if session.closed:
                return ActionResult(error=ROOM_NOT_FOUND)
            if sid in session.members:
                return ActionResult(error=ALREADY_IN_ROOM)
            if session.has_guesser:
                return ActionResult(error=ROOM_FULL)
            if session.locked and session.started:
                return ActionResult(error=GAME_IN_PROGRESS)

            if not self.registry.add_member(session, sid):
                return ActionResult()
            session.players.append(Role.GUESSER)

            messages = [OutboundMessage('room-joined', sid, {'room': session.room, 'role': Role.GUESSER.value})]

            setter = session.setter_sid
            if setter and setter != sid and setter in session.members:
                messages.append(OutboundMessage('opponent-joined', setter))

            if session.locked and not session.started:
                session.started = True
                messages.append(OutboundMessage('game-started', session.room))
                game_logger.log_game_event(session.room, 'round_started', sid, round=session.round_number)

            game_logger.log_game_event(session.room, 'guesser_joined', sid)
            return ActionResult(messages=messages, join_room=session.room)

    def set_word(self, room: str, sid: str, word: str) -> ActionResult:
        """
        Locks the secret word for the current round.

        Ignored unless ``sid`` holds the setter seat and no word is set yet.
        """
        session = self.registry.lookup(room)
        if session is None:
            return ActionResult()

        with session.lock:
            if session.closed or session.secret or session.setter_sid != sid:
                return ActionResult()

            normalized = normalize_word(word)
            if not is_well_formed_word(normalized):
                return ActionResult(error=INVALID_WORD)

            session.secret = normalized
            session.locked = True
            game_logger.log_game_event(session.room, 'word_locked', sid, round=session.round_number)

            messages = []
            if session.has_guesser:
                session.started = True
                messages.append(OutboundMessage('game-started', session.room))
                game_logger.log_game_event(session.room, 'round_started', sid, round=session.round_number)

            return ActionResult(messages=messages)

    def guess(self, room: str, sid: str, guess: str) -> ActionResult:
        """
        Evaluates a guess and broadcasts the result to the whole room.

        Guesses arriving outside a running round, from the setter, or not
        made of five letters are dropped without a reply.
        """
        session = self.registry.lookup(room)
        if session is None:
            return ActionResult()

        with session.lock:
            if session.closed or not session.in_progress:
                return ActionResult()
            if sid not in session.members or sid == session.setter_sid:
                return ActionResult()

            normalized = normalize_word(guess)
            if not is_well_formed_word(normalized):
                return ActionResult()

            feedback = [status.value for status in evaluate_guess(normalized, session.secret)]
            session.guesses.append(normalized)
            session.feedback_history.append(feedback)

            won = session.won
            over = session.over
            attempts = len(session.guesses)

            if over:
                game_logger.log_game_event(
                    session.room, 'round_won' if won else 'round_lost', sid,
                    round=session.round_number, attempts=attempts
                )

            return ActionResult(messages=[OutboundMessage('guess-result', session.room, {
                'guess': normalized,
                'feedback': feedback,
                'won': won,
                'over': over,
                'attempts': attempts
            })])

    def request_role_swap(self, room: str, sid: str) -> ActionResult:
        """
        Swaps setter and guesser and resets the round.

        Only a started round with both seats filled can be swapped, which
        makes the duplicate request the second client sends a no-op.
        """
        session = self.registry.lookup(room)
        if session is None:
            return ActionResult()

        with session.lock:
            if session.closed or not session.started or len(session.players) < 2:
                return ActionResult()
            if sid not in session.members:
                return ActionResult()

            session.players = list(reversed(session.players))
            session.reset_round()
            session.round_number += 1
            session.cancel_pending()

            previous_setter = session.setter_sid
            members = list(session.members)
            new_setter = next((member for member in members if member != previous_setter), members[0])
            session.setter_sid = new_setter

            messages = [
                OutboundMessage('roles-swapped', member, {
                    'newRole': (Role.SETTER if member == new_setter else Role.GUESSER).value
                })
                for member in members
            ]

            game_logger.log_game_event(
                session.room, 'roles_swapped', sid,
                round=session.round_number, new_setter=new_setter
            )

            if self.notify_delay <= 0:
                messages.append(OutboundMessage('opponent-joined', new_setter))
                return ActionResult(messages=messages)

            notification = PendingNotification(
                room=session.room, recipient=new_setter, event='opponent-joined', delay=self.notify_delay
            )
            session.pending_notification = notification
            return ActionResult(messages=messages, deferred=notification)

    def claim_deferred(self, notification: PendingNotification) -> Optional[OutboundMessage]:
        """
        Called when a deferred notification's timer fires.

        Returns the message to deliver, or None if it was cancelled, the room
        is gone, the recipient left, or the word has already been set.
        """
        session = self.registry.lookup(notification.room)
        if session is None:
            return None

        with session.lock:
            if notification.cancelled or session.pending_notification is not notification:
                return None
            session.pending_notification = None
            if not self.registry.is_live(session):
                return None
            if notification.recipient not in session.members or session.locked:
                return None
            return OutboundMessage(notification.event, notification.recipient)

    def handle_player_disconnect(self, sid: str) -> ActionResult:
        """
        Removes ``sid`` from every room it was in.

        The remaining player, if any, takes the setter seat of a fresh round
        so that a new opponent can join. Rooms left empty are removed.
        Calling this twice for the same connection is harmless.
        """
        messages = []
        for code in self.registry.discard_connection(sid):
            session = self.registry.lookup(code)
            if session is None:
                continue

            with session.lock:
                if sid not in session.members:
                    continue
                session.members.remove(sid)

                if session.members:
                    remaining = session.members[0]
                    session.setter_sid = remaining
                    session.players = [Role.SETTER]
                    session.reset_round()
                    session.cancel_pending()
                    messages.append(OutboundMessage('opponent-left', remaining, {
                        'room': session.room, 'role': Role.SETTER.value
                    }))
                    game_logger.log_game_event(session.room, 'opponent_left', sid, new_setter=remaining)
                elif session.setter_sid == sid:
                    session.setter_sid = None

            self.registry.garbage_collect(code)

        return ActionResult(messages=messages)

    def get_room_state(self, room: str) -> Optional[Dict]:
        """Public snapshot of a room, or None if it does not exist."""
        session = self.registry.lookup(room)
        if session is None:
            return None
        with session.lock:
            if session.closed:
                return None
            return session.to_public_dict()


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(registry: RoomRegistry, notify_delay: float = 0.8) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(registry, notify_delay)
    return _game_service
