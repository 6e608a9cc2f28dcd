from typing import Sequence

from loko.models import Player


class Presenter:
    """Hooks the turn scheduler calls into the presentation layer.

    Every hook is a no-op here; implementations override what they show.
    """

    def on_turn_start(self, player: Player, question_text: str) -> None:
        pass

    def on_question_revealed(self, player: Player, question_text: str) -> None:
        pass

    def on_outcome_applied(self, player: Player, is_correct: bool) -> None:
        pass

    def on_game_over(self, standings: Sequence[Player]) -> None:
        pass
