"""Question distribution: resolves random targets and shuffles.

Nothing here validates fairness or raises; the scheduler checks the
result before a session starts.
"""

import random
from typing import List, MutableSequence, NamedTuple, Sequence, TypeVar

from loko.models import Player, RawQuestion, ResolvedQuestion

T = TypeVar('T')


def shuffle(items: MutableSequence[T], rng: random.Random) -> MutableSequence[T]:
    """Fisher-Yates shuffle in place; returns ``items`` for chaining."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]
    return items


def resolve_target(question: RawQuestion, player_names: Sequence[str], rng: random.Random) -> ResolvedQuestion:
    if not question.is_random:
        return ResolvedQuestion.from_raw(question, question.assigned_to)
    candidates = [name for name in player_names if name != question.created_by]
    if not candidates:
        # Single-player roster: the creator answers their own question
        return ResolvedQuestion.from_raw(question, question.created_by)
    return ResolvedQuestion.from_raw(question, candidates[rng.randrange(len(candidates))])


class Distribution(NamedTuple):
    questions: List[ResolvedQuestion]
    # Indexes into the roster the distribution was computed from
    turn_order: List[int]


class QuestionDistributor:

    def __init__(self, rng: random.Random = None):
        self.rng = rng if rng is not None else random.Random()

    def resolve(self, questions: Sequence[RawQuestion], players: Sequence[Player]) -> List[ResolvedQuestion]:
        names = [p.name for p in players]
        return [resolve_target(q, names, self.rng) for q in questions]

    def distribute(self, questions: Sequence[RawQuestion], players: Sequence[Player]) -> Distribution:
        resolved = shuffle(self.resolve(questions, players), self.rng)
        turn_order = shuffle(list(range(len(players))), self.rng)
        return Distribution(questions=resolved, turn_order=turn_order)
