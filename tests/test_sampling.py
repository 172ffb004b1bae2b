import random

import pytest

from fakeword.utils.sampling import weighted_random_choice


def test_heavier_choice_dominates():
    rng = random.Random(1234)
    picks = [weighted_random_choice([(1, "A"), (99, "B")], rng) for _ in range(1000)]
    assert picks.count("B") >= 950


def test_zero_weight_items_are_never_chosen():
    rng = random.Random(7)
    picks = {weighted_random_choice([(0, "A"), (5, "B"), (0, "C")], rng) for _ in range(200)}
    assert picks == {"B"}


def test_empty_or_weightless_choices_return_none():
    assert weighted_random_choice([]) is None
    assert weighted_random_choice([(0, "A"), (0, "B")]) is None


def test_negative_weights_are_rejected():
    with pytest.raises(ValueError):
        weighted_random_choice([(3, "A"), (-1, "B")])


def test_same_seed_gives_same_sequence():
    choices = [(2, "A"), (3, "B"), (5, "C")]
    first = random.Random(42)
    second = random.Random(42)
    assert [weighted_random_choice(choices, first) for _ in range(50)] == [
        weighted_random_choice(choices, second) for _ in range(50)
    ]
