import random
from collections import Counter
from itertools import permutations

from loko.models import RANDOM_TARGET, Player, RawQuestion
from loko.services.games.distribution import QuestionDistributor, resolve_target, shuffle


def test_shuffle_is_in_place_permutation():
    items = list(range(10))
    result = shuffle(items, random.Random(3))
    assert result is items
    assert sorted(items) == list(range(10))


def test_shuffle_handles_short_sequences():
    rng = random.Random(0)
    assert shuffle([], rng) == []
    assert shuffle(['only'], rng) == ['only']


def test_shuffle_is_uniform_over_permutations():
    rng = random.Random(2024)
    trials = 6000
    counts = Counter(tuple(shuffle(['a', 'b', 'c'], rng)) for _ in range(trials))
    assert set(counts) == set(permutations(['a', 'b', 'c']))
    expected = trials / 6
    # ~29 standard deviation per bucket; 150 is a wide margin
    for perm, seen in counts.items():
        assert abs(seen - expected) < 150, (perm, seen)


def test_random_target_is_never_the_creator():
    rng = random.Random(5)
    names = ['A', 'B', 'C', 'D']
    question = RawQuestion('q', created_by='C', assigned_to=RANDOM_TARGET)
    targets = Counter(resolve_target(question, names, rng).assigned_to for _ in range(400))
    assert 'C' not in targets
    assert set(targets) == {'A', 'B', 'D'}


def test_random_target_with_one_player_is_the_creator():
    question = RawQuestion('q', created_by='A')
    assert resolve_target(question, ['A'], random.Random(1)).assigned_to == 'A'


def test_explicit_target_passes_through():
    question = RawQuestion('q', created_by='A', assigned_to='B')
    resolved = resolve_target(question, ['A', 'B', 'C'], random.Random(1))
    assert resolved.assigned_to == 'B'
    assert resolved.text == 'q'
    assert resolved.created_by == 'A'


def test_distribute_keeps_every_question_and_orders_every_player():
    players = [Player('A'), Player('B'), Player('C')]
    questions = [RawQuestion(f'q{i}', created_by=players[i % 3].name) for i in range(9)]
    distribution = QuestionDistributor(random.Random(11)).distribute(questions, players)

    assert sorted(q.text for q in distribution.questions) == sorted(q.text for q in questions)
    assert sorted(distribution.turn_order) == [0, 1, 2]
    for q in distribution.questions:
        assert q.assigned_to != q.created_by


def test_distribute_tolerates_empty_input():
    distribution = QuestionDistributor(random.Random(0)).distribute([], [])
    assert distribution.questions == []
    assert distribution.turn_order == []
