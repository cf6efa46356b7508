"""HTTP endpoint tests using the Flask test client."""


def create_session(client, **body):
    response = client.post('/api/session', json=body)
    assert response.status_code == 201
    return response.get_json()


def test_new_session_defaults(client):
    data = create_session(client, player_name='', rounds='seven', difficulty='??')

    assert data['success']
    config = data['state']['config']
    assert config == {
        'player_name': 'Player',
        'rounds_target': 3,
        'difficulty': 'EASY',
        'count_timeout_moves': False
    }
    assert data['state']['phase'] == 'AWAITING_MOVE'
    assert data['state']['round_id'] == 1


def test_play_match_against_hard_computer(client):
    session_id = create_session(client, player_name='Alice', rounds=3, difficulty='hard')['session_id']

    # Hard counts the move being played before predicting it
    first = client.post(f'/api/session/{session_id}/move', json={'move': 'rock'}).get_json()
    assert first['result']['computer_move'] == 'PAPER'
    assert first['result']['outcome'] == 'LOSE'
    assert first['state']['computer_score'] == 1

    second = client.post(f'/api/session/{session_id}/move', json={'move': 'scissors'}).get_json()
    assert second['result']['computer_move'] == 'PAPER'
    assert second['result']['outcome'] == 'WIN'
    assert second['result']['match_over'] is False

    third = client.post(f'/api/session/{session_id}/move', json={'move': 'scissors'}).get_json()
    assert third['result']['computer_move'] == 'ROCK'
    assert third['result']['match_over'] is True
    assert third['result']['match_result'] == 'COMPUTER_WON'
    assert third['state']['computer_score'] == 0
    assert third['state']['lifetime']['total_losses'] == 1

    board = client.get('/api/leaderboard').get_json()['leaderboard']
    assert board[0]['name'] == 'Alice'
    assert board[0]['rank'] == 1
    assert board[0]['losses'] == 1
    assert board[0]['win_rate'] == 0.0


def test_invalid_move_is_rejected(client):
    session_id = create_session(client, player_name='Alice')['session_id']

    response = client.post(f'/api/session/{session_id}/move', json={'move': 'lizard'})
    assert response.status_code == 400
    assert response.get_json()['success'] is False

    response = client.post(f'/api/session/{session_id}/move', json={})
    assert response.status_code == 400

    state = client.get(f'/api/session/{session_id}/state').get_json()['state']
    assert state['rounds_played'] == 0


def test_non_object_json_bodies(client):
    session_id = create_session(client, player_name='Alice')['session_id']

    for body in (['rock'], 'move', 5):
        response = client.post(f'/api/session/{session_id}/move', json=body)
        assert response.status_code == 400

    assert client.post(f'/api/session/{session_id}/timeout', json=['x']).status_code == 200

    response = client.post('/api/session', json=['Alice'])
    assert response.status_code == 201
    assert response.get_json()['state']['config']['player_name'] == 'Player'


def test_stale_round_is_rejected_with_conflict(client):
    session_id = create_session(client, player_name='Alice', rounds=10)['session_id']

    timeout = client.post(f'/api/session/{session_id}/timeout', json={'round_id': 1}).get_json()
    assert timeout['result']['timed_out'] is True

    response = client.post(f'/api/session/{session_id}/move', json={'move': 'rock', 'round_id': 1})
    assert response.status_code == 409
    assert response.get_json()['state']['rounds_played'] == 1


def test_history_endpoint(client):
    session_id = create_session(client, player_name='Alice', rounds=10)['session_id']
    for move in ['rock', 'paper', 'scissors']:
        client.post(f'/api/session/{session_id}/move', json={'move': move})

    history = client.get(f'/api/session/{session_id}/history?limit=2').get_json()['history']
    assert [h['player_move'] for h in history] == ['PAPER', 'SCISSORS']

    history = client.get(f'/api/session/{session_id}/history').get_json()['history']
    assert len(history) == 3


def test_unknown_session_is_404(client):
    assert client.get('/api/session/nope/state').status_code == 404
    assert client.post('/api/session/nope/move', json={'move': 'rock'}).status_code == 404
    assert client.delete('/api/session/nope').status_code == 404


def test_delete_session(client):
    session_id = create_session(client)['session_id']
    assert client.delete(f'/api/session/{session_id}').get_json()['success'] is True
    assert client.get(f'/api/session/{session_id}/state').status_code == 404


def test_leaderboard_limit(client, store):
    for i in range(7):
        store.update(f'P{i}', 10, i, 10 - i, 0)

    assert len(client.get('/api/leaderboard').get_json()['leaderboard']) == 5
    assert len(client.get('/api/leaderboard?limit=50').get_json()['leaderboard']) == 7
    assert client.get('/api/leaderboard?limit=1').get_json()['leaderboard'][0]['name'] == 'P6'


def test_health(client):
    data = client.get('/api/health').get_json()
    assert data['status'] == 'healthy'
    assert data['active_sessions'] == 0
