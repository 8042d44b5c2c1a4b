import pytest


@pytest.fixture
def socket_client(app_and_socketio):
    app, socketio = app_and_socketio
    return socketio.test_client(app)


def last_event(socket_client):
    received = socket_client.get_received()
    assert received
    return received[-1]


def test_get_state(socket_client, token):
    socket_client.emit('get_state', {'token': token})

    event = last_event(socket_client)

    assert event['name'] == 'session_state'
    assert event['args'][0]['state']['date'] == '2026-10-18'


def test_missing_token_is_an_error(socket_client):
    socket_client.emit('get_state', {})

    event = last_event(socket_client)

    assert event['name'] == 'error'
    assert event['args'][0]['error'] == 'Player token required'


def test_submit_ingredient(socket_client, token):
    socket_client.emit('submit_ingredient', {'token': token, 'ingredient': 'SOUP'})

    state = last_event(socket_client)['args'][0]['state']

    assert state['session']['remaining_noun'] == 'SP'


def test_invalid_ingredient_is_an_error(socket_client, token):
    socket_client.emit('submit_ingredient', {'token': token, 'ingredient': 'X'})

    event = last_event(socket_client)

    assert event['name'] == 'error'
    assert event['args'][0]['error_type'] == 'InvalidIngredient'


def test_navigate(socket_client, token):
    socket_client.emit('navigate', {'token': token, 'direction': 'next'})
    assert last_event(socket_client)['args'][0]['state']['date'] == '2026-10-19'

    socket_client.emit('navigate', {'token': token, 'direction': 'today'})
    assert last_event(socket_client)['args'][0]['state']['date'] == '2026-10-18'

    socket_client.emit('navigate', {'token': token, 'direction': 'previous'})
    assert last_event(socket_client)['args'][0]['error_type'] == 'PuzzleNotAvailable'

    socket_client.emit('navigate', {'token': token, 'direction': 'sideways'})
    assert last_event(socket_client)['name'] == 'error'


def test_retry(socket_client, token):
    socket_client.emit('submit_ingredient', {'token': token, 'ingredient': 'ZZZ'})
    socket_client.emit('retry', {'token': token})

    assert last_event(socket_client)['args'][0]['state']['session']['quality'] == 10
