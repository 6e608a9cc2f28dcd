from dataclasses import dataclass
from typing import Any, Dict

# Placeholder recipient for a question the distributor should target.
RANDOM_TARGET = 'random'


@dataclass
class Player:
    name: str
    score: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'score': self.score,
        }


@dataclass(frozen=True)
class RawQuestion:
    """A question as submitted by a player, before its recipient is resolved."""
    text: str
    created_by: str
    assigned_to: str = RANDOM_TARGET

    @property
    def is_random(self) -> bool:
        return self.assigned_to == RANDOM_TARGET

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'created_by': self.created_by,
            'assigned_to': self.assigned_to,
        }


# eq=False: two questions with the same text are still distinct cards.
@dataclass(frozen=True, eq=False)
class ResolvedQuestion:
    text: str
    created_by: str
    assigned_to: str

    @classmethod
    def from_raw(cls, raw: RawQuestion, target: str) -> 'ResolvedQuestion':
        return cls(text=raw.text, created_by=raw.created_by, assigned_to=target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'created_by': self.created_by,
            'assigned_to': self.assigned_to,
        }
