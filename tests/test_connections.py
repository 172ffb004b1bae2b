import random

import pytest

from fakeword.core import (
    START,
    STOP,
    ConnectionMode,
    NodeData,
    Phoneme,
    SnapshotError,
    Syllable,
    SyllableConnections,
)


def _corpus():
    entries = [
        ("paper", ["P EY1", "P ER0"]),
        ("table", ["T EY1", "B AH0 L"]),
        ("house", ["HH AW1 S"]),
    ]
    return [(word, [Syllable.from_arpabet(chunk) for chunk in chunks]) for word, chunks in entries]


def _data(token: str) -> NodeData:
    return NodeData.of(Phoneme.from_arpabet(token))


def test_weighted_table_keeps_every_successor():
    table = SyllableConnections.from_corpus(_corpus(), ConnectionMode.WEIGHTED)

    assert dict(table.successors(START)) == {_data("P"): 1, _data("T"): 1}
    assert dict(table.successors(_data("EY"))) == {_data("P"): 1, _data("B"): 1}
    assert dict(table.successors(_data("ER"))) == {STOP: 1}
    assert dict(table.successors(_data("L"))) == {STOP: 1}


def test_single_syllable_words_are_ignored():
    table = SyllableConnections.from_corpus(_corpus())
    assert table.successors(_data("S")) == []
    assert _data("HH") not in {target for target, _ in table.successors(START)}


def test_first_mode_counts_against_the_first_successor():
    table = SyllableConnections.from_corpus(_corpus(), ConnectionMode.FIRST)

    assert table.successors(START) == [(_data("P"), 2)]
    assert table.successors(_data("EY")) == [(_data("P"), 2)]
    assert table.evaluate(START, random.Random(0)) == _data("P")


def test_unknown_boundary_evaluates_to_stop():
    for mode in ConnectionMode:
        table = SyllableConnections.from_corpus(_corpus(), mode)
        assert table.evaluate(_data("ZH"), random.Random(0)) == STOP


def test_weighted_evaluation_samples_every_successor():
    table = SyllableConnections.from_corpus(_corpus(), ConnectionMode.WEIGHTED)
    rng = random.Random(21)
    seen = {table.evaluate(START, rng) for _ in range(200)}
    assert seen == {_data("P"), _data("T")}


@pytest.mark.parametrize("mode", list(ConnectionMode))
def test_snapshot_round_trip(mode):
    table = SyllableConnections.from_corpus(_corpus(), mode)
    restored = SyllableConnections.from_snapshot(table.to_snapshot())
    assert restored == table
    assert restored.mode is mode


@pytest.mark.parametrize(
    "payload",
    [
        {"schema": 1, "kind": "sonority-graph", "mode": "weighted", "connections": {}},
        {"schema": 3, "kind": "syllable-connections", "mode": "weighted", "connections": {}},
        {"schema": 1, "kind": "syllable-connections", "mode": "sideways", "connections": {}},
        {
            "schema": 1,
            "kind": "syllable-connections",
            "mode": "first",
            "connections": {"start": [["P", 1], ["T", 1]]},
        },
        {
            "schema": 1,
            "kind": "syllable-connections",
            "mode": "weighted",
            "connections": {"start": [["P", -2]]},
        },
    ],
)
def test_snapshot_rejects_bad_payloads(payload):
    with pytest.raises(SnapshotError):
        SyllableConnections.from_snapshot(payload)
