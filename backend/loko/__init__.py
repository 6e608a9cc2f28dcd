import random

from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

from loko.services.games import GameSession

socketio = SocketIO(async_mode=None)


def get_session(app=None) -> GameSession:
    """The in-memory game session owned by the given (or current) app."""
    return (app or current_app).extensions['loko']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One party per server process; the display is the only presentation client
    from loko.socketio_events import SocketIOPresenter
    seed = flask_app.config.get('RANDOM_SEED')
    flask_app.extensions['loko'] = GameSession(
        presenter=SocketIOPresenter(socketio),
        rng=random.Random(seed) if seed is not None else random.Random(),
    )

    from loko.main import main
    flask_app.register_blueprint(main)

    from loko.api.games import games
    # Mount game routes under /api to match frontend API client
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from loko.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    from loko.cli import simulate_command
    flask_app.cli.add_command(simulate_command)

    flask_app.logger.debug(f"[init] seed={seed} origins={allowed_origins}")
    return flask_app
