"""
Test suite for Detective Quest backend API.
"""
import pytest
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app import app, reset_game


@pytest.fixture
def client():
    """Create test client."""
    app.config['TESTING'] = True
    with app.test_client() as client:
        reset_game()  # Reset before each test
        yield client


def walk(client, *commands):
    """Helper to send a sequence of exploration commands."""
    responses = []
    for command in commands:
        responses.append(client.post('/api/game/move', json={'command': command}))
    return responses


def test_health_endpoint(client):
    """Test health check endpoint."""
    response = client.get('/health')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'ok'
    assert data['service'] == 'detective-quest-backend'


def test_new_game(client):
    """Test starting a new game."""
    response = client.post('/api/game/new')
    assert response.status_code == 200
    data = response.get_json()
    assert data['status'] == 'success'
    assert data['room']['name'] == 'Hall'
    assert data['room']['clue'] == 'Muddy footprints'
    assert data['room']['suspect'] == 'Gardener'


def test_get_state_initial(client):
    """Test getting initial game state."""
    response = client.get('/api/game/state')
    assert response.status_code == 200
    data = response.get_json()
    assert data['state'] == 'exploring'
    assert data['moves'] == ['left', 'right', 'exit']
    assert data['visits_count'] == 1
    assert data['clues_collected_count'] == 1
    assert data['judgment'] is None


def test_move_left(client):
    """Test moving into the parlor."""
    response = client.post('/api/game/move', json={'command': 'e'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['signal'] == 'moved'
    assert data['room']['name'] == 'Parlor'
    assert data['room']['suspect'] == 'Librarian'


def test_move_accepts_words(client):
    """Test that full command words work too."""
    response = client.post('/api/game/move', json={'command': '  RIGHT'})
    assert response.status_code == 200
    assert response.get_json()['room']['name'] == 'Corridor'


def test_invalid_move(client):
    """Test moving where there is no room."""
    walk(client, 'd', 'e')
    response = client.post('/api/game/move', json={'command': 'e'})
    assert response.status_code == 400
    data = response.get_json()
    assert data['status'] == 'error'
    assert data['signal'] == 'invalid_move'
    assert data['room']['name'] == 'Bedroom'

    visits = client.get('/api/game/visits').get_json()['visits']
    assert [v['name'] for v in visits] == ['Hall', 'Corridor', 'Bedroom']


def test_invalid_command(client):
    """Test an unknown command."""
    response = client.post('/api/game/move', json={'command': 'jump'})
    assert response.status_code == 400
    assert response.get_json()['signal'] == 'invalid_command'


def test_move_missing_command(client):
    """Test move with missing command."""
    response = client.post('/api/game/move', json={})
    assert response.status_code == 400


def test_move_invalid_json_body(client):
    """Test move with invalid JSON body."""
    response = client.post(
        '/api/game/move',
        data='not-json',
        content_type='application/json',
    )
    assert response.status_code == 400
    assert response.get_json()['status'] == 'error'


def test_exit_returns_visit_history(client):
    """Test that leaving reports the numbered visit log."""
    responses = walk(client, 'right', 'left', 'exit')
    data = responses[-1].get_json()
    assert data['signal'] == 'exited'
    assert data['state'] == 'exited'
    assert data['visits'] == [
        {'number': 1, 'name': 'Hall'},
        {'number': 2, 'name': 'Corridor'},
        {'number': 3, 'name': 'Bedroom'},
    ]


def test_move_after_exit_fails(client):
    """Test that exploration cannot continue after leaving."""
    walk(client, 's')
    response = client.post('/api/game/move', json={'command': 'e'})
    assert response.status_code == 400


def test_clues_are_ordered(client):
    """Test collected clues come back in order without duplicates."""
    walk(client, 'e', 'e')
    data = client.get('/api/game/clues').get_json()
    assert data['clues'] == ['Book missing a page', 'Lost key', 'Muddy footprints']
    assert data['collected_count'] == 3


def test_get_suspects(client):
    """Test getting list of suspects."""
    data = client.get('/api/game/suspects').get_json()
    assert data['suspects'] == ['Butler', 'Gardener', 'Librarian']
    assert data['none_on_file'] is False


def test_events(client):
    """Test that the journal is exposed."""
    walk(client, 'x', 'e')
    data = client.get('/api/game/events').get_json()
    types = [event['type'] for event in data['events']]
    assert 'command.invalid' in types
    assert types[-1] == 'clue.found'

    later = client.get(f"/api/game/events?since={data['next']}").get_json()
    assert later['events'] == []


def test_events_filtered_by_type(client):
    """Test reading the latest journal events of one type."""
    walk(client, 'd', 'e', 'e', 'd')
    data = client.get('/api/game/events?type=move.invalid').get_json()
    assert [e['payload']['direction'] for e in data['events']] == ['left', 'right']

    data = client.get('/api/game/events?type=location.entered&limit=1').get_json()
    assert [e['payload']['name'] for e in data['events']] == ['Bedroom']


def test_accuse_before_exit_fails(client):
    """Test that accusation is blocked while exploring."""
    response = client.post('/api/game/accuse', json={'suspect': 'Butler'})
    assert response.status_code == 400
    assert 'exploring' in response.get_json()['message'].lower()


def test_accuse_insufficient_evidence(client):
    """Test accusing with a single matching clue."""
    walk(client, 'right', 'left', 'exit')
    response = client.post('/api/game/accuse', json={'suspect': 'Butler'})
    assert response.status_code == 200
    data = response.get_json()
    assert data['verdict'] == 'insufficient_evidence'
    assert data['matching_clues'] == 1
    assert data['supporting_clues'] == ['Stained sheet']


def test_accuse_guilty_case_insensitive(client):
    """Test a winning accusation typed in lower case."""
    walk(client, 'd', 'd', 's')
    response = client.post('/api/game/accuse', json={'suspect': 'gardener'})
    data = response.get_json()
    assert data['verdict'] == 'guilty'
    assert data['suspect'] == 'Gardener'
    assert data['tally'] == {'Gardener': 2}

    state = client.get('/api/game/state').get_json()
    assert state['judgment']['verdict'] == 'guilty'
    assert state['moves'] == []


def test_accuse_unsupported(client):
    """Test accusing someone no collected clue points to."""
    walk(client, 's')
    response = client.post('/api/game/accuse', json={'suspect': 'Librarian'})
    assert response.get_json()['verdict'] == 'unsupported'


def test_blank_accusation_can_be_retried(client):
    """Test that a blank name cancels without ending the game."""
    walk(client, 's')
    response = client.post('/api/game/accuse', json={'suspect': '   '})
    assert response.status_code == 400
    assert 'cancelled' in response.get_json()['message'].lower()

    response = client.post('/api/game/accuse', json={'suspect': 'Gardener'})
    assert response.status_code == 200


def test_accuse_twice_fails(client):
    """Test that can't accuse after game is complete."""
    walk(client, 's')
    client.post('/api/game/accuse', json={'suspect': 'Gardener'})
    response = client.post('/api/game/accuse', json={'suspect': 'Butler'})
    assert response.status_code == 400


def test_full_game_flow(client):
    """Test complete game workflow."""
    response = client.post('/api/game/new')
    assert response.status_code == 200

    walk(client, 'e', 'e', 's')

    response = client.post('/api/game/accuse', json={'suspect': 'Butler'})
    data = response.get_json()
    assert data['verdict'] == 'insufficient_evidence'

    response = client.get('/api/game/state')
    data = response.get_json()
    assert data['state'] == 'exited'
    assert data['visits_count'] == 3
    assert data['clues_collected_count'] == 3
