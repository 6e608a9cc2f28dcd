import logging
from typing import Iterable, List, Optional

from loko.models import Player, RawQuestion

log = logging.getLogger(__name__)


class SessionStore:
    """Roster and as-submitted question pool for the current session.

    Player objects are handed out as-is: the score tracker mutates them in
    place and final standings read them back.
    """

    def __init__(self):
        self._players: List[Player] = []
        self._questions: List[RawQuestion] = []

    def set_players(self, names: Iterable[str]) -> None:
        self._players = [Player(name=name) for name in names]
        if not self._players:
            # Refused later by TurnScheduler.start_session
            log.warning("[players] empty roster set")
            return
        log.info(f"[players] roster={','.join(p.name for p in self._players)}")

    def add_questions(self, batch: Iterable[RawQuestion]) -> None:
        batch = list(batch)
        self._questions.extend(batch)
        log.info(f"[questions] added={len(batch)} total={len(self._questions)}")

    def clear_questions(self) -> None:
        self._questions = []

    def reset(self) -> None:
        self._players = []
        self._questions = []

    def reset_scores(self) -> None:
        for p in self._players:
            p.score = 0

    def players(self) -> List[Player]:
        return self._players

    def questions(self) -> List[RawQuestion]:
        return self._questions

    def player_names(self) -> List[str]:
        return [p.name for p in self._players]

    def find_player(self, name: str) -> Optional[Player]:
        return next((p for p in self._players if p.name == name), None)

    def question_count(self) -> int:
        return len(self._questions)

    def submitted_counts(self):
        """Questions written per roster player, in roster order."""
        counts = {p.name: 0 for p in self._players}
        for q in self._questions:
            if q.created_by in counts:
                counts[q.created_by] += 1
        return counts
