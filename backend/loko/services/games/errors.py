"""Failure kinds raised by the session orchestration core."""

from typing import Iterable, List

NO_PLAYERS = 'no_players'
NO_QUESTIONS = 'no_questions'
UNFAIR_DISTRIBUTION = 'unfair_distribution'
UNCOVERED_PLAYER = 'uncovered_player'
UNKNOWN_PLAYER = 'unknown_player'


class SessionError(Exception):
    """Base class for session orchestration errors."""


class SessionValidationError(SessionError):
    """``start_session`` preconditions failed; nothing was changed.

    ``failures`` lists every failed condition, in check order.
    """

    def __init__(self, failures: Iterable[str], uncovered: Iterable[str] = (), unknown: Iterable[str] = ()):
        self.failures: List[str] = list(failures)
        self.uncovered: List[str] = list(uncovered)
        self.unknown: List[str] = list(unknown)
        super().__init__(f"Cannot start session: {', '.join(self.failures)}")

    def to_dict(self):
        return {
            'error': str(self),
            'failures': self.failures,
            'uncovered': self.uncovered,
            'unknown': self.unknown,
        }


class SessionStateError(SessionError):
    """Operation is not allowed in the scheduler's current state."""


class InvariantViolation(SessionError):
    """A full turn-order cycle found no question to deal.

    Means the coverage check in ``start_session`` was bypassed; not recoverable.
    """
