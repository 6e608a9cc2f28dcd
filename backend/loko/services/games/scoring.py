import logging
from typing import List, Optional, Sequence

from loko.models import Player

log = logging.getLogger(__name__)


class ScoreTracker:
    """Applies answer outcomes to roster entries.

    +1 for a correct answer, -1 for a wrong one. The roster list is the
    store's own, so the change is visible to everyone holding it.
    """

    def __init__(self, players: Sequence[Player]):
        self.players = players

    def apply_outcome(self, player_index: int, is_correct: bool) -> Player:
        player = self.players[player_index]
        player.score += 1 if is_correct else -1
        log.info(f"[score] player={player.name} correct={is_correct} score={player.score}")
        return player


def final_standings(players: Sequence[Player]) -> List[Player]:
    """Players by score, highest first; equal scores keep roster order."""
    return sorted(players, key=lambda p: -p.score)


def winner(standings: Sequence[Player]) -> Optional[Player]:
    return standings[0] if standings else None


def leaders(standings: Sequence[Player]) -> List[Player]:
    if not standings:
        return []
    top = standings[0].score
    return [p for p in standings if p.score == top]
