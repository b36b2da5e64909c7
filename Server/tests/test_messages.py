import pytest

from wordle_duel.config.game_settings import is_well_formed_word, normalize_word
from wordle_duel.models.messages import (
    ActionResult, GuessRequest, InvalidPayload, JoinRequest, OutboundMessage,
    RoleSwapRequest, SetWordRequest
)


def test_join_request_normalizes_room():
    assert JoinRequest.from_payload({'room': ' abc123 '}).room == 'ABC123'


@pytest.mark.parametrize('payload', [None, {}, {'room': ''}, {'room': 42}, 'ABC123'])
def test_join_request_without_room_reports_not_found(payload):
    with pytest.raises(InvalidPayload) as excinfo:
        JoinRequest.from_payload(payload)
    assert excinfo.value.error == 'Room not found'


def test_set_word_request_requires_a_string_word():
    with pytest.raises(InvalidPayload) as excinfo:
        SetWordRequest.from_payload({'room': 'ABC123', 'word': 12345})
    assert excinfo.value.error == 'Invalid word'


def test_set_word_request_without_room_is_silent():
    with pytest.raises(InvalidPayload) as excinfo:
        SetWordRequest.from_payload({'word': 'crane'})
    assert excinfo.value.error is None


@pytest.mark.parametrize('payload', [None, {'room': 'ABC123'}, {'guess': 'crane'}, {'room': 'ABC123', 'guess': None}])
def test_malformed_guess_request_is_silent(payload):
    with pytest.raises(InvalidPayload) as excinfo:
        GuessRequest.from_payload(payload)
    assert excinfo.value.error is None


def test_role_swap_request():
    assert RoleSwapRequest.from_payload({'room': 'abc123'}).room == 'ABC123'
    with pytest.raises(InvalidPayload):
        RoleSwapRequest.from_payload(None)


def test_word_rules():
    assert normalize_word('crane') == 'CRANE'
    assert normalize_word(None) is None
    assert is_well_formed_word('CRANE')
    assert not is_well_formed_word('CRAN')
    assert not is_well_formed_word('CRANÉ')
    assert not is_well_formed_word(None)


def test_action_result_ignored():
    assert ActionResult().ignored
    assert not ActionResult(error='Room full').ignored
    assert not ActionResult(messages=[OutboundMessage('game-started', 'ABC123')]).ignored
