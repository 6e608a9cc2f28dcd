def setup_table(client, names, questions):
    assert client.post('/api/games/players', json={'names': names}).status_code == 200
    res = client.post('/api/games/questions', json={'questions': questions})
    assert res.status_code == 201
    return res.get_json()


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_initial_state_is_idle(client):
    state = client.get('/api/games/state').get_json()
    assert state['status'] == 'idle'
    assert state['players'] == []
    assert state['question_count'] == 0


def test_players_are_trimmed_and_blank_entries_dropped(client):
    res = client.post('/api/games/players', json={'names': [' Alice ', '', '   ', 'Bob']})
    assert res.status_code == 200
    assert [p['name'] for p in res.get_json()['players']] == ['Alice', 'Bob']


def test_players_must_be_a_list_of_unique_names(client):
    assert client.post('/api/games/players', json={'names': 'Alice'}).status_code == 400
    res = client.post('/api/games/players', json={'names': ['Alice', 'Bob', 'Alice']})
    assert res.status_code == 400
    assert 'Alice' in res.get_json()['error']


def test_question_validation(client):
    client.post('/api/games/players', json={'names': ['Alice', 'Bob']})
    bad = [
        {'questions': []},
        {'questions': [{'text': '  ', 'created_by': 'Alice'}]},
        {'questions': [{'text': 'Q', 'created_by': 'Zed'}]},
        {'questions': [{'text': 'Q', 'created_by': 'Alice', 'assigned_to': 'Zed'}]},
        {'questions': ['not an object']},
    ]
    for body in bad:
        assert client.post('/api/games/questions', json=body).status_code == 400
    assert client.get('/api/games/state').get_json()['question_count'] == 0


def test_questions_default_to_random_and_can_be_cleared(client):
    state = setup_table(client, ['Alice', 'Bob'], [
        {'text': 'Favourite food?', 'created_by': 'Alice'},
        {'text': 'First pet?', 'created_by': 'Bob'},
    ])
    assert state['question_count'] == 2
    assert state['submitted'] == {'Alice': 1, 'Bob': 1}
    res = client.delete('/api/games/questions')
    assert res.status_code == 200
    assert res.get_json()['question_count'] == 0


def test_new_roster_clears_questions(client):
    setup_table(client, ['Alice', 'Bob'], [{'text': 'Q', 'created_by': 'Alice'}])
    state = client.post('/api/games/players', json={'names': ['Cara', 'Dan']}).get_json()
    assert state['question_count'] == 0


def test_start_without_setup_reports_failures(client):
    res = client.post('/api/games/start')
    assert res.status_code == 400
    assert res.get_json()['failures'] == ['no_players', 'no_questions']


def test_start_refuses_uneven_question_count(client):
    setup_table(client, ['Alice', 'Bob', 'Cara'], [
        {'text': 'Q1', 'created_by': 'Alice'},
        {'text': 'Q2', 'created_by': 'Bob'},
    ])
    res = client.post('/api/games/start')
    assert res.status_code == 400
    assert 'unfair_distribution' in res.get_json()['failures']
    assert client.get('/api/games/state').get_json()['status'] == 'idle'


def test_full_session_flow(client):
    setup_table(client, ['Alice', 'Bob'], [
        {'text': 'Alice asks Bob', 'created_by': 'Alice', 'assigned_to': 'Bob'},
        {'text': 'Bob asks Alice', 'created_by': 'Bob', 'assigned_to': 'Alice'},
    ])
    started = client.post('/api/games/start').get_json()
    assert started['status'] == 'in_turn'
    assert started['turn_number'] == 1
    assert started['total_turns'] == 2
    assert started['current_question'] is None
    assert sorted(started['turn_order']) == ['Alice', 'Bob']

    # Start is idempotent while the session runs
    again = client.post('/api/games/start').get_json()
    assert again['turn_number'] == 1

    revealed = client.post('/api/games/reveal').get_json()
    assert revealed['status'] == 'awaiting_outcome'
    first = revealed['current_player']['name']
    expected = 'Bob asks Alice' if first == 'Alice' else 'Alice asks Bob'
    assert revealed['current_question'] == expected

    scored = client.post('/api/games/outcome', json={'correct': True}).get_json()
    assert {p['name']: p['score'] for p in scored['players']}[first] == 1
    assert client.post('/api/games/outcome', json={'correct': True}).status_code == 409

    second = client.post('/api/games/advance').get_json()
    assert second['turn_number'] == 2
    assert second['current_player']['name'] != first
    client.post('/api/games/outcome', json={'correct': False})

    over = client.post('/api/games/advance').get_json()
    assert over['status'] == 'game_over'
    assert over['remaining_questions'] == 0
    assert over['winner']['name'] == first
    assert [p['score'] for p in over['standings']] == [1, -1]
    assert [h['correct'] for h in over['history']] == [True, False]


def test_outcome_needs_boolean(client):
    assert client.post('/api/games/outcome', json={'correct': 'yes'}).status_code == 400
    assert client.post('/api/games/outcome', json={}).status_code == 400


def test_turn_actions_before_start_conflict(client):
    assert client.post('/api/games/advance').status_code == 409
    assert client.post('/api/games/reveal').status_code == 409
    assert client.post('/api/games/outcome', json={'correct': True}).status_code == 409


def test_questions_locked_during_session(client):
    setup_table(client, ['Alice'], [{'text': 'Q', 'created_by': 'Alice'}])
    client.post('/api/games/start')
    res = client.post('/api/games/questions', json={'questions': [{'text': 'Late', 'created_by': 'Alice'}]})
    assert res.status_code == 409
    assert client.delete('/api/games/questions').status_code == 409


def test_reset_returns_to_idle(client):
    setup_table(client, ['Alice'], [{'text': 'Q', 'created_by': 'Alice'}])
    client.post('/api/games/start')
    state = client.post('/api/games/reset').get_json()
    assert state['status'] == 'idle'
    assert state['players'] == []
    assert state['question_count'] == 0
