import os
import sys
import pytest

# Ensure the backend root (containing the `loko` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from loko import create_app, socketio
from loko.services.games import Presenter


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    RANDOM_SEED = 1234
    CORS_ORIGINS = []
    LOG_LEVEL = 'DEBUG'


class RecordingPresenter(Presenter):
    """Keeps every scheduler callback for assertions."""

    def __init__(self):
        self.turns = []
        self.revealed = []
        self.outcomes = []
        self.game_overs = []

    def on_turn_start(self, player, question_text):
        self.turns.append((player.name, question_text))

    def on_question_revealed(self, player, question_text):
        self.revealed.append((player.name, question_text))

    def on_outcome_applied(self, player, is_correct):
        self.outcomes.append((player.name, is_correct))

    def on_game_over(self, standings):
        self.game_overs.append([(p.name, p.score) for p in standings])


@pytest.fixture()
def presenter():
    return RecordingPresenter()


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
