import random

import pytest

from fakeword.core import (
    START,
    ConnectionMode,
    FakeWordGenerator,
    SonorityGraph,
    SyllableConnections,
    WordGenConfig,
)


@pytest.fixture
def models(sample_corpus):
    return (
        SonorityGraph.from_corpus(sample_corpus),
        SyllableConnections.from_corpus(sample_corpus, ConnectionMode.WEIGHTED),
    )


def test_config_defaults_and_coercion():
    config = WordGenConfig(connection_mode="first")
    assert config.connection_mode is ConnectionMode.FIRST
    assert WordGenConfig().as_dict() == {
        "word_length_decay": 1.5,
        "word_length_bias": 1.5,
        "word_length_max": 10,
        "connection_mode": "weighted",
        "seed": None,
    }


def test_continuation_chance_decays_geometrically():
    config = WordGenConfig(word_length_decay=2.0, word_length_bias=1.5)
    assert config.continuation_chance(0) == pytest.approx(1.5)
    assert config.continuation_chance(2) == pytest.approx(0.375)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"word_length_decay": 0},
        {"word_length_decay": -1.0},
        {"word_length_bias": -0.5},
        {"word_length_max": -1},
    ],
)
def test_invalid_config_is_rejected(kwargs):
    with pytest.raises(ValueError):
        WordGenConfig(**kwargs).validate()


def test_zero_maximum_yields_empty_words(models):
    graph, connections = models
    generator = FakeWordGenerator(
        graph, connections, WordGenConfig(word_length_max=0), rng=random.Random(1)
    )
    assert all(len(word) == 0 for word in generator.generate_words(25))


@pytest.mark.parametrize("maximum", [1, 2, 3])
def test_syllable_count_never_exceeds_the_maximum(models, maximum):
    graph, connections = models
    config = WordGenConfig(word_length_bias=100.0, word_length_max=maximum)
    generator = FakeWordGenerator(graph, connections, config, rng=random.Random(maximum))
    for word in generator.generate_words(100):
        assert len(word) <= maximum


def test_generated_syllables_are_well_formed(models):
    graph, connections = models
    generator = FakeWordGenerator(graph, connections, WordGenConfig(seed=8))
    first_phonemes = {target.phoneme for target, _ in connections.successors(START)}

    words = [word for word in generator.generate_words(100) if len(word)]
    assert words
    for word in words:
        assert word.syllables[0].first_phoneme() in first_phonemes
        assert all(syllable.is_valid() for syllable in word)


def test_seeded_generators_agree(models):
    graph, connections = models
    first = FakeWordGenerator(graph, connections, WordGenConfig(seed=99))
    second = FakeWordGenerator(graph, connections, WordGenConfig(seed=99))
    assert [str(word) for word in first.generate_words(20)] == [
        str(word) for word in second.generate_words(20)
    ]


def test_empty_connection_table_produces_empty_words(models):
    graph, _ = models
    generator = FakeWordGenerator(graph, SyllableConnections(), rng=random.Random(0))
    word = generator.generate_word()
    assert len(word) == 0
    assert word.to_english() == ""


def test_first_mode_generation(sample_corpus):
    graph = SonorityGraph.from_corpus(sample_corpus)
    connections = SyllableConnections.from_corpus(sample_corpus, ConnectionMode.FIRST)
    generator = FakeWordGenerator(
        graph,
        connections,
        WordGenConfig(connection_mode=ConnectionMode.FIRST, word_length_max=4, seed=3),
    )
    for word in generator.generate_words(30):
        assert len(word) <= 4


def test_config_mode_must_match_the_connection_table(sample_corpus):
    graph = SonorityGraph.from_corpus(sample_corpus)
    first_table = SyllableConnections.from_corpus(sample_corpus, ConnectionMode.FIRST)

    with pytest.raises(ValueError, match="first"):
        FakeWordGenerator(graph, first_table, WordGenConfig())
