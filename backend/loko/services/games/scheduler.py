import logging
from collections import Counter
from typing import Any, Dict, List, Optional

from loko.models import Player, ResolvedQuestion
from .distribution import QuestionDistributor
from .errors import (
    NO_PLAYERS,
    NO_QUESTIONS,
    UNCOVERED_PLAYER,
    UNFAIR_DISTRIBUTION,
    UNKNOWN_PLAYER,
    InvariantViolation,
    SessionStateError,
    SessionValidationError,
)
from .presenter import Presenter
from .scoring import ScoreTracker, final_standings, leaders, winner
from .store import SessionStore

log = logging.getLogger(__name__)

IDLE = 'idle'
AWAITING_START = 'awaiting_start'
IN_TURN = 'in_turn'
AWAITING_OUTCOME = 'awaiting_outcome'
GAME_OVER = 'game_over'

ACTIVE_STATES = (AWAITING_START, IN_TURN, AWAITING_OUTCOME)


class TurnScheduler:
    """Drives a session turn by turn until the question pool is empty.

    idle -> awaiting_start -> in_turn -> awaiting_outcome -> in_turn ... -> game_over

    Turns are dealt eagerly by ``advance_turn``; ``reveal_question`` is the
    presentation layer's signal that the question is now visible.
    Advancing is never automatic after an outcome.
    """

    def __init__(self, store: SessionStore, presenter: Presenter = None, distributor: QuestionDistributor = None):
        self.store = store
        self.presenter = presenter or Presenter()
        self.distributor = distributor or QuestionDistributor()
        self._clear()

    def _clear(self) -> None:
        self.state = IDLE
        self._pool: List[ResolvedQuestion] = []
        self._turn_order: List[int] = []
        self._cursor = -1
        self._current_index: Optional[int] = None
        self._active: Optional[ResolvedQuestion] = None
        self._outcome_recorded = False
        self._revealed = False
        self._scores: Optional[ScoreTracker] = None
        self.turn_number = 0
        self.total_turns = 0
        self.history: List[Dict[str, Any]] = []
        self.standings: List[Player] = []

    def reset(self) -> None:
        if self.state in ACTIVE_STATES:
            log.info(f"[abandon] turn={self.turn_number}/{self.total_turns}")
        self._clear()

    @property
    def in_progress(self) -> bool:
        return self.state in ACTIVE_STATES

    @property
    def current_player(self) -> Optional[Player]:
        if self._current_index is None:
            return None
        return self.store.players()[self._current_index]

    @property
    def active_question(self) -> Optional[ResolvedQuestion]:
        return self._active

    @property
    def remaining(self) -> int:
        return len(self._pool)

    @property
    def turn_order(self) -> List[Player]:
        players = self.store.players()
        return [players[i] for i in self._turn_order]

    # ===== Session lifecycle =====

    def start_session(self) -> Optional[ResolvedQuestion]:
        """Validate, distribute and deal the first turn.

        Raises SessionValidationError listing every failed precondition;
        the scheduler is untouched in that case.
        """
        if self.in_progress:
            raise SessionStateError("A session is already in progress")
        players = self.store.players()
        questions = self.store.questions()

        failures = []
        if not players:
            failures.append(NO_PLAYERS)
        if not questions:
            failures.append(NO_QUESTIONS)

        # A refused start must leave the random source as it found it
        rng_state = self.distributor.rng.getstate()
        distribution = self.distributor.distribute(questions, players)
        uncovered: List[str] = []
        unknown: List[str] = []
        if players:
            if len(distribution.questions) % len(players) != 0:
                failures.append(UNFAIR_DISTRIBUTION)
            per_player = Counter(q.assigned_to for q in distribution.questions)
            uncovered = [p.name for p in players if per_player[p.name] == 0]
            if uncovered:
                failures.append(UNCOVERED_PLAYER)
            names = set(p.name for p in players)
            unknown = sorted(set(q.assigned_to for q in distribution.questions) - names)
            if unknown:
                failures.append(UNKNOWN_PLAYER)

        if failures:
            self.distributor.rng.setstate(rng_state)
            log.warning(f"[start-refused] failures={','.join(failures)}")
            raise SessionValidationError(failures, uncovered=uncovered, unknown=unknown)

        self._clear()
        if any(p.score for p in players):
            # Replay on the same roster
            self.store.reset_scores()
        self._pool = distribution.questions
        self._turn_order = distribution.turn_order
        self._scores = ScoreTracker(players)
        self.total_turns = len(self._pool)
        self.state = AWAITING_START
        log.info(
            f"[start] players={len(players)} questions={self.total_turns} "
            f"order={','.join(p.name for p in self.turn_order)}"
        )
        return self.advance_turn()

    def advance_turn(self) -> Optional[ResolvedQuestion]:
        """Deal the next question, or end the game when the pool is empty.

        Players with nothing left are skipped; at most one full cycle of the
        turn order is searched. Returns the dealt question, None at game over.
        """
        if self.state == IDLE:
            raise SessionStateError("No session has been started")
        if self.state == GAME_OVER:
            log.info("[advance-skip] game already over")
            return None

        if not self._pool:
            self._finish()
            return None

        order_len = len(self._turn_order)
        for _ in range(order_len):
            self._cursor = (self._cursor + 1) % order_len
            player_index = self._turn_order[self._cursor]
            player = self.store.players()[player_index]
            pos = next((i for i, q in enumerate(self._pool) if q.assigned_to == player.name), None)
            if pos is None:
                log.info(f"[turn-skip] player={player.name} no questions left")
                continue
            question = self._pool.pop(pos)
            self._bind(player_index, question)
            return question

        raise InvariantViolation(
            f"No player in the turn order has a remaining question ({len(self._pool)} left undealt)"
        )

    def _bind(self, player_index: int, question: ResolvedQuestion) -> None:
        player = self.store.players()[player_index]
        self._current_index = player_index
        self._active = question
        self._outcome_recorded = False
        self._revealed = False
        self.turn_number += 1
        self.state = IN_TURN
        self.history.append({
            'turn': self.turn_number,
            'player': player.name,
            'question': question.text,
            'created_by': question.created_by,
            'correct': None,
        })
        log.info(f"[turn] n={self.turn_number} player={player.name} remaining={len(self._pool)}")
        self.presenter.on_turn_start(player, question.text)

    def reveal_question(self) -> str:
        """Completion callback for the presentation layer's unlock step."""
        if self._active is None or self.state not in (IN_TURN, AWAITING_OUTCOME):
            raise SessionStateError(f"No question waiting to be revealed (state={self.state})")
        if self._revealed:
            raise SessionStateError("Question already revealed for this turn")
        # An outcome may already be in; the answer buttons show before the box opens
        self._revealed = True
        self.state = AWAITING_OUTCOME
        self.presenter.on_question_revealed(self.current_player, self._active.text)
        return self._active.text

    def record_outcome(self, is_correct: bool) -> Player:
        if self._active is None or self.state not in (IN_TURN, AWAITING_OUTCOME):
            raise SessionStateError("No active question to score")
        if self._outcome_recorded:
            raise SessionStateError("Outcome already recorded for this turn")
        player = self._scores.apply_outcome(self._current_index, is_correct)
        self._outcome_recorded = True
        self.history[-1]['correct'] = bool(is_correct)
        self.state = AWAITING_OUTCOME
        self.presenter.on_outcome_applied(player, is_correct)
        return player

    def _finish(self) -> None:
        self.state = GAME_OVER
        self._active = None
        self._current_index = None
        self.standings = final_standings(self.store.players())
        top = winner(self.standings)
        log.info(f"[game-over] turns={self.turn_number} winner={top.name if top else None}")
        self.presenter.on_game_over(self.standings)

    # ===== Serialization =====

    def to_dict(self) -> Dict[str, Any]:
        current = self.current_player
        revealed = self._revealed and self._active is not None
        payload = {
            'status': self.state,
            'players': [p.to_dict() for p in self.store.players()],
            'turn_order': [p.name for p in self.turn_order],
            'current_player': current.to_dict() if current else None,
            'current_question': self._active.text if revealed else None,
            'outcome_recorded': self._outcome_recorded,
            'revealed': self._revealed,
            'remaining_questions': self.remaining,
            'turn_number': self.turn_number,
            'total_turns': self.total_turns,
            'history': list(self.history),
        }
        if self.state == GAME_OVER:
            top = winner(self.standings)
            payload['standings'] = [p.to_dict() for p in self.standings]
            payload['winner'] = top.to_dict() if top else None
            payload['leaders'] = [p.name for p in leaders(self.standings)]
        return payload
