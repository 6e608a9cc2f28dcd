from flask import Blueprint, jsonify, request, current_app

from loko import socketio, get_session
from loko.models import RANDOM_TARGET, RawQuestion
from loko.services.games import InvariantViolation, SessionStateError, SessionValidationError

games = Blueprint('games', __name__)


def _state_changed():
    socketio.emit('state_update', {}, namespace='/ws')


def _parse_question(item, roster):
    if not isinstance(item, dict):
        return None, 'Each question must be an object'
    text = str(item.get('text') or '').strip()
    created_by = str(item.get('created_by') or '').strip()
    assigned_to = str(item.get('assigned_to') or RANDOM_TARGET).strip()
    if not text:
        return None, 'Question text is required'
    if created_by not in roster:
        return None, f'Unknown author: {created_by or "(missing)"}'
    if assigned_to != RANDOM_TARGET and assigned_to not in roster:
        return None, f'Unknown target player: {assigned_to}'
    return RawQuestion(text=text, created_by=created_by, assigned_to=assigned_to), None


@games.route('/state', methods=['GET'])
def get_state():
    return jsonify(get_session().to_dict())


@games.route('/players', methods=['POST'])
def set_players():
    data = request.get_json(silent=True) or {}
    names = data.get('names')
    if not isinstance(names, list):
        return jsonify({'error': 'names must be a list of player names'}), 400
    # Blank entries are dropped, like empty name fields in the lobby form
    cleaned = [str(n).strip() for n in names if n is not None and str(n).strip()]
    duplicates = sorted({n for n in cleaned if cleaned.count(n) > 1})
    if duplicates:
        return jsonify({'error': f'Player names must be unique: {", ".join(duplicates)}'}), 400

    session = get_session()
    if session.scheduler.in_progress:
        current_app.logger.info("[players] roster replaced mid-session, abandoning it")
    session.set_players(cleaned)
    _state_changed()
    return jsonify(session.to_dict())


@games.route('/questions', methods=['POST'])
def add_questions():
    data = request.get_json(silent=True) or {}
    items = data.get('questions')
    if not isinstance(items, list) or not items:
        return jsonify({'error': 'questions must be a non-empty list'}), 400

    session = get_session()
    if session.scheduler.in_progress:
        return jsonify({'error': 'Questions are locked while a session is in progress'}), 409
    roster = set(session.store.player_names())
    batch = []
    for idx, item in enumerate(items):
        question, error = _parse_question(item, roster)
        if error:
            return jsonify({'error': error, 'index': idx}), 400
        batch.append(question)
    session.store.add_questions(batch)
    _state_changed()
    return jsonify(session.to_dict()), 201


@games.route('/questions', methods=['DELETE'])
def clear_questions():
    session = get_session()
    if session.scheduler.in_progress:
        return jsonify({'error': 'Questions are locked while a session is in progress'}), 409
    session.store.clear_questions()
    _state_changed()
    return jsonify(session.to_dict())


@games.route('/start', methods=['POST'])
def start_session():
    session = get_session()
    if session.scheduler.in_progress:
        # Idempotent start: already started
        return jsonify(session.to_dict())
    try:
        session.scheduler.start_session()
    except SessionValidationError as exc:
        return jsonify(exc.to_dict()), 400
    except InvariantViolation:
        current_app.logger.exception("[start] turn search failed on first deal")
        raise
    _state_changed()
    return jsonify(session.to_dict())


@games.route('/reveal', methods=['POST'])
def reveal_question():
    session = get_session()
    try:
        session.scheduler.reveal_question()
    except SessionStateError as exc:
        return jsonify({'error': str(exc)}), 409
    _state_changed()
    return jsonify(session.to_dict())


@games.route('/outcome', methods=['POST'])
def record_outcome():
    data = request.get_json(silent=True) or {}
    correct = data.get('correct')
    if not isinstance(correct, bool):
        return jsonify({'error': 'correct must be true or false'}), 400
    session = get_session()
    try:
        session.scheduler.record_outcome(correct)
    except SessionStateError as exc:
        return jsonify({'error': str(exc)}), 409
    _state_changed()
    return jsonify(session.to_dict())


@games.route('/advance', methods=['POST'])
def advance_turn():
    session = get_session()
    try:
        session.scheduler.advance_turn()
    except SessionStateError as exc:
        return jsonify({'error': str(exc)}), 409
    except InvariantViolation:
        current_app.logger.exception("[advance] turn search failed")
        raise
    _state_changed()
    return jsonify(session.to_dict())


@games.route('/reset', methods=['POST'])
def reset_session():
    session = get_session()
    session.reset()
    _state_changed()
    return jsonify(session.to_dict())
