import random

import click

from loko.models import RANDOM_TARGET, RawQuestion
from loko.services.games import GameSession, Presenter, SessionValidationError
from loko.services.games.errors import UNCOVERED_PLAYER

# Random targets with few questions per player often leave someone uncovered
MAX_DEAL_ATTEMPTS = 50


class EchoPresenter(Presenter):

    def on_turn_start(self, player, question_text):
        click.echo(f"-> {player.name}: {question_text}")

    def on_outcome_applied(self, player, is_correct):
        click.echo(f"   {'correct' if is_correct else 'wrong'} (score {player.score})")

    def on_game_over(self, standings):
        click.echo('Final standings:')
        for rank, p in enumerate(standings, start=1):
            click.echo(f"  {rank}. {p.name} {p.score}")


@click.command('simulate')
@click.option('--players', required=True, help='Comma separated player names.')
@click.option('--per-player', default=1, show_default=True, type=click.IntRange(min=1),
              help='Questions written by each player.')
@click.option('--random-targets', is_flag=True,
              help='Leave every question for random assignment; the deal is retried until every player is covered.')
@click.option('--seed', type=int, default=None, help='Seed for shuffles and answer outcomes.')
def simulate_command(players, per_player, random_targets, seed):
    """Plays a whole session with coin-flip answers and prints the standings."""
    names = [n.strip() for n in players.split(',') if n.strip()]
    rng = random.Random(seed)
    session = GameSession(presenter=EchoPresenter(), rng=rng)
    session.set_players(names)

    batch = []
    for k, name in enumerate(names):
        # Each player asks the next one round the table unless targets are random
        target = names[(k + 1) % len(names)] if len(names) > 1 and not random_targets else RANDOM_TARGET
        for i in range(per_player):
            batch.append(RawQuestion(text=f"Question {i + 1} from {name}", created_by=name, assigned_to=target))
    session.store.add_questions(batch)

    scheduler = session.scheduler
    for attempt in range(1, MAX_DEAL_ATTEMPTS + 1):
        try:
            scheduler.start_session()
            break
        except SessionValidationError as exc:
            # Only an unlucky random deal is worth another try
            if exc.failures != [UNCOVERED_PLAYER] or attempt == MAX_DEAL_ATTEMPTS:
                raise click.ClickException(str(exc))
            # A refused start restores the random source, so move it on
            rng.random()
    while scheduler.in_progress:
        scheduler.reveal_question()
        scheduler.record_outcome(rng.random() < 0.5)
        scheduler.advance_turn()
