import random
from typing import Optional

from .distribution import QuestionDistributor
from .presenter import Presenter
from .scheduler import TurnScheduler
from .store import SessionStore


class GameSession:
    """One table's store and scheduler, sharing a single roster."""

    def __init__(self, presenter: Presenter = None, rng: Optional[random.Random] = None):
        self.store = SessionStore()
        self.scheduler = TurnScheduler(
            self.store,
            presenter=presenter,
            distributor=QuestionDistributor(rng),
        )

    def set_players(self, names) -> None:
        # Scheduler state indexes into the roster, so a new roster ends the session
        self.scheduler.reset()
        self.store.set_players(names)
        # Questions name their creator and target, so they belong to the old roster
        self.store.clear_questions()

    def reset(self) -> None:
        self.scheduler.reset()
        self.store.reset()

    def to_dict(self):
        payload = self.scheduler.to_dict()
        payload['question_count'] = self.store.question_count()
        payload['submitted'] = self.store.submitted_counts()
        return payload
