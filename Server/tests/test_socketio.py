import time

from wordle_duel import create_app
from wordle_duel.config import TestingConfig
from wordle_duel.services.game_service import initialize_game_service
from wordle_duel.services.room_service import initialize_room_registry

from conftest import events, names


def _create_room(setter):
    setter.emit('create')
    received = events(setter)
    assert received[0][0] == 'room-created'
    payload = received[0][1][0]
    assert payload['role'] == 'setter'
    return payload['room']


def _duel(make_player):
    setter = make_player()
    guesser = make_player()
    room = _create_room(setter)
    guesser.emit('join', {'room': room.lower()})
    return setter, guesser, room


def test_create_room(make_player):
    setter = make_player()
    room = _create_room(setter)

    assert len(room) == 6
    assert room == room.upper()


def test_join_unknown_room(make_player):
    player = make_player()
    player.emit('join', {'room': 'NOPE00'})

    assert events(player) == [('error', ['Room not found'])]


def test_join_without_room_code(make_player):
    player = make_player()
    player.emit('join', {})

    assert events(player) == [('error', ['Room not found'])]


def test_full_round(make_player):
    setter, guesser, room = _duel(make_player)

    assert events(guesser) == [('room-joined', [{'room': room, 'role': 'guesser'}])]
    assert names(setter) == ['opponent-joined']

    setter.emit('set-word', {'room': room, 'word': 'crane'})
    assert names(setter) == ['game-started']
    assert names(guesser) == ['game-started']

    guesser.emit('guess', {'room': room, 'guess': 'crane'})
    expected = [('guess-result', [{
        'guess': 'CRANE',
        'feedback': ['correct'] * 5,
        'won': True,
        'over': True,
        'attempts': 1
    }])]
    assert events(guesser) == expected
    assert events(setter) == expected


def test_word_locked_before_guesser_joins(make_player):
    setter = make_player()
    guesser = make_player()
    room = _create_room(setter)

    setter.emit('set-word', {'room': room, 'word': 'ALLOY'})
    assert events(setter) == []

    guesser.emit('join', {'room': room})
    assert names(guesser) == ['room-joined', 'game-started']
    assert names(setter) == ['opponent-joined', 'game-started']

    guesser.emit('guess', {'room': room, 'guess': 'llama'})
    payload = events(setter)[0][1][0]
    assert payload['feedback'] == ['present', 'correct', 'present', 'absent', 'absent']


def test_third_player_is_refused(make_player):
    setter, guesser, room = _duel(make_player)
    intruder = make_player()

    intruder.emit('join', {'room': room})

    assert events(intruder) == [('error', ['Room full'])]


def test_invalid_word_reported_to_setter_only(make_player):
    setter, guesser, room = _duel(make_player)
    events(setter)
    events(guesser)

    setter.emit('set-word', {'room': room, 'word': 'toolong'})

    assert events(setter) == [('error', ['Invalid word'])]
    assert events(guesser) == []


def test_early_guess_is_silently_dropped(make_player):
    setter, guesser, room = _duel(make_player)
    events(setter)
    events(guesser)

    guesser.emit('guess', {'room': room, 'guess': 'crane'})
    guesser.emit('guess', {'room': room})

    assert events(guesser) == []
    assert events(setter) == []


def test_role_swap(make_player):
    setter, guesser, room = _duel(make_player)
    setter.emit('set-word', {'room': room, 'word': 'crane'})
    guesser.emit('guess', {'room': room, 'guess': 'crane'})
    events(setter)
    events(guesser)

    # Both clients ask for the swap once the round is over
    setter.emit('request-role-swap', {'room': room})
    guesser.emit('request-role-swap', {'room': room})

    assert events(setter) == [('roles-swapped', [{'newRole': 'guesser'}])]
    assert events(guesser) == [('roles-swapped', [{'newRole': 'setter'}]), ('opponent-joined', [])]

    guesser.emit('set-word', {'room': room, 'word': 'slate'})
    assert names(setter) == ['game-started']
    setter.emit('guess', {'room': room, 'guess': 'slate'})
    assert events(guesser)[-1][1][0]['won'] is True


def test_last_disconnect_removes_room(make_player):
    setter = make_player()
    room = _create_room(setter)
    setter.disconnect()

    latecomer = make_player()
    latecomer.emit('join', {'room': room})

    assert events(latecomer) == [('error', ['Room not found'])]


def test_guesser_disconnect_frees_seat(make_player):
    setter, guesser, room = _duel(make_player)
    setter.emit('set-word', {'room': room, 'word': 'crane'})
    events(setter)

    guesser.disconnect()
    assert events(setter) == [('opponent-left', [{'room': room, 'role': 'setter'}])]

    replacement = make_player()
    replacement.emit('join', {'room': room})
    assert names(replacement) == ['room-joined']
    assert names(setter) == ['opponent-joined']


def test_deferred_opponent_joined_after_swap():
    class DelayedConfig(TestingConfig):
        ROLE_SWAP_NOTIFY_DELAY = 0.2

    registry = initialize_room_registry()
    initialize_game_service(registry, DelayedConfig.ROLE_SWAP_NOTIFY_DELAY)
    app, socketio = create_app(DelayedConfig)
    setter = socketio.test_client(app)
    guesser = socketio.test_client(app)
    try:
        setter.emit('create')
        room = events(setter)[-1][1][0]['room']
        guesser.emit('join', {'room': room})
        setter.emit('set-word', {'room': room, 'word': 'crane'})
        guesser.emit('request-role-swap', {'room': room})
        assert names(guesser)[-1] == 'roles-swapped'

        deadline = time.time() + 3.0
        got = False
        while time.time() < deadline and not got:
            got = 'opponent-joined' in names(guesser)
            if not got:
                time.sleep(0.05)
        assert got
    finally:
        setter.disconnect()
        guesser.disconnect()
