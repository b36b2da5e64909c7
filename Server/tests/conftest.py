import os
import sys
import tempfile
import pytest

# Ensure the server root (containing the `wordle_duel` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
SERVER_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if SERVER_ROOT not in sys.path:
    sys.path.insert(0, SERVER_ROOT)

# The game logger opens its log file on import
os.environ.setdefault('LOG_DIR', os.path.join(tempfile.gettempdir(), 'wordle_duel_test_logs'))

from wordle_duel import create_app
from wordle_duel.config import TestingConfig
from wordle_duel.services.game_service import GameService, initialize_game_service
from wordle_duel.services.room_service import RoomRegistry, initialize_room_registry


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def game_service(registry):
    return GameService(registry, notify_delay=0)


@pytest.fixture()
def flask_app():
    room_registry = initialize_room_registry()
    initialize_game_service(room_registry, TestingConfig.ROLE_SWAP_NOTIFY_DELAY)
    application, _ = create_app(TestingConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def make_player(flask_app):
    """Factory for connected Socket.IO test clients, disconnected on teardown."""
    players = []

    def _make():
        player = flask_app.socketio.test_client(flask_app)
        player.get_received()  # flush
        players.append(player)
        return player

    yield _make

    for player in players:
        try:
            if player.is_connected():
                player.disconnect()
        except Exception:
            pass


def events(player):
    """Drain a test client and return (name, args) pairs."""
    return [(packet['name'], packet['args']) for packet in player.get_received()]


def names(player):
    return [name for name, _ in events(player)]
