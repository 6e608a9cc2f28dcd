"""Game domain services: the session orchestration core.

Roster and question storage, question distribution, the turn scheduler
and scoring. Nothing here imports Flask; HTTP routes and socket handlers
drive it through GameSession and receive callbacks through a Presenter.
"""

from .errors import InvariantViolation, SessionError, SessionStateError, SessionValidationError
from .presenter import Presenter
from .session import GameSession

__all__ = [
    'GameSession',
    'InvariantViolation',
    'Presenter',
    'SessionError',
    'SessionStateError',
    'SessionValidationError',
]
