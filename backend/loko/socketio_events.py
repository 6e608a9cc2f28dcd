from typing import Sequence

from flask import current_app
from flask_socketio import emit

from loko import socketio, get_session
from loko.models import Player
from loko.services.games import Presenter, SessionStateError
from loko.services.games.scoring import winner

NAMESPACE = '/ws'


class SocketIOPresenter(Presenter):
    """Pushes scheduler callbacks to the display over Socket.IO."""

    def __init__(self, sio, namespace: str = NAMESPACE):
        self.sio = sio
        self.namespace = namespace

    def on_turn_start(self, player: Player, question_text: str) -> None:
        # Text is withheld until the display reports its unlock animation is done
        self.sio.emit('turn_started', {'player': player.to_dict()}, namespace=self.namespace)

    def on_question_revealed(self, player: Player, question_text: str) -> None:
        self.sio.emit('question_revealed', {'player': player.name, 'text': question_text}, namespace=self.namespace)

    def on_outcome_applied(self, player: Player, is_correct: bool) -> None:
        self.sio.emit('outcome_applied', {'player': player.to_dict(), 'correct': is_correct}, namespace=self.namespace)

    def on_game_over(self, standings: Sequence[Player]) -> None:
        top = winner(standings)
        self.sio.emit('game_over', {
            'standings': [p.to_dict() for p in standings],
            'winner': top.to_dict() if top else None,
        }, namespace=self.namespace)


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_unlock_complete(data=None):
    session = get_session()
    try:
        session.scheduler.reveal_question()
    except SessionStateError as exc:
        current_app.logger.info(f"[unlock-ignored] {exc}")
        emit('error', {'message': str(exc)})
        return
    socketio.emit('state_update', {}, namespace=NAMESPACE)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('unlock_complete', handle_unlock_complete, namespace=NAMESPACE)
    socketio.on_event('ping', handle_ping, namespace=NAMESPACE)

    if testing:
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('unlock_complete', handle_unlock_complete, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
