"""
WebSocket Event Handlers

Handles all Socket.IO events of the duel: room creation and joining, word
locking, guesses, role swaps and disconnects.
"""

from flask import request
from flask_socketio import emit, join_room

from ..models.messages import (
    CreateRequest, GuessRequest, JoinRequest, RoleSwapRequest, SetWordRequest
)
from ..services.game_service import get_game_service
from ..utils.decorators import socket_event
from ..utils.game_logger import game_logger


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def respond(action, room, result):
        """Apply an ActionResult for the connection that sent ``action``."""
        if result.join_room:
            join_room(result.join_room)

        if result.error:
            emit('error', result.error)
            game_logger.log_server_response(request, action, False, {'error': result.error}, room)
            return

        deliver_messages(socketio, result.messages)
        if result.deferred:
            schedule_deferred(socketio, result.deferred)

        if not result.ignored:
            game_logger.log_server_response(
                request, action, True,
                {'events': [message.event for message in result.messages]},
                result.join_room or room
            )

    def service_or_error():
        game_service = get_game_service()
        if not game_service:
            emit('error', 'Game service unavailable')
        return game_service

    @socketio.on('connect')
    def handle_connect(auth=None):
        """Handle WebSocket connection."""
        game_logger.log_connection(request, 'connect')

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle WebSocket disconnection."""
        game_logger.log_connection(request, 'disconnect', reason=str(reason) if reason else None)

        game_service = get_game_service()
        if not game_service:
            return

        try:
            result = game_service.handle_player_disconnect(request.sid)
            deliver_messages(socketio, result.messages)
        except Exception as e:
            game_logger.log_error(request, e, 'disconnect')

    @socketio.on('create')
    @socket_event('create', CreateRequest)
    def handle_create(req):
        """Create a room and seat the sender as setter."""
        game_service = service_or_error()
        if game_service:
            respond('create', None, game_service.create_room(request.sid))

    @socketio.on('join')
    @socket_event('join', JoinRequest)
    def handle_join(req):
        """Seat the sender as guesser of an existing room."""
        game_service = service_or_error()
        if game_service:
            respond('join', req.room, game_service.join(req.room, request.sid))

    @socketio.on('set-word')
    @socket_event('set-word', SetWordRequest)
    def handle_set_word(req):
        """Lock the setter's secret word."""
        game_service = service_or_error()
        if game_service:
            respond('set-word', req.room, game_service.set_word(req.room, request.sid, req.word))

    @socketio.on('guess')
    @socket_event('guess', GuessRequest)
    def handle_guess(req):
        """Evaluate a guess and broadcast the result to the room."""
        game_service = service_or_error()
        if game_service:
            respond('guess', req.room, game_service.guess(req.room, request.sid, req.guess))

    @socketio.on('request-role-swap')
    @socket_event('request-role-swap', RoleSwapRequest)
    def handle_request_role_swap(req):
        """Swap setter and guesser for the next round."""
        game_service = service_or_error()
        if game_service:
            respond('request-role-swap', req.room, game_service.request_role_swap(req.room, request.sid))


def deliver_messages(socketio, messages):
    """Emit each outbound message to its connection or room."""
    for message in messages:
        if message.payload is None:
            socketio.emit(message.event, to=message.to)
        else:
            socketio.emit(message.event, message.payload, to=message.to)


def schedule_deferred(socketio, notification):
    """
    Deliver ``notification`` after its delay unless it was cancelled meanwhile.

    The room's state is re-checked by the game service when the timer fires.
    """
    def deliver_later():
        socketio.sleep(notification.delay)
        game_service = get_game_service()
        if not game_service:
            return
        try:
            message = game_service.claim_deferred(notification)
            if message:
                deliver_messages(socketio, [message])
        except Exception as e:
            game_logger.logger.error(f"Error delivering deferred {notification.event} in room {notification.room}: {e}")

    return socketio.start_background_task(deliver_later)
