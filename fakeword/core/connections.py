"""Cross-syllable transition table.

Each entry maps a boundary (the start marker, or the last phoneme of a
syllable) to the first phoneme of the following syllable, or to the stop
marker when the word ends there.
"""

from __future__ import annotations

import random
from collections import Counter
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fakeword.utils.observability import get_logger, start_span
from fakeword.utils.sampling import weighted_random_choice

from .errors import SnapshotError
from .sonority_graph import START, STOP, NodeData

SNAPSHOT_SCHEMA = 1


class ConnectionMode(str, Enum):
    """How repeated observations of a boundary are stored.

    ``FIRST`` keeps a single successor per boundary (the first one seen) and
    counts every later observation of that boundary against it. ``WEIGHTED``
    keeps one count per distinct successor and samples among them.
    """

    FIRST = "first"
    WEIGHTED = "weighted"


class SyllableConnections:
    """Boundary-to-boundary transitions between adjacent syllables."""

    def __init__(self, mode: ConnectionMode | str = ConnectionMode.WEIGHTED) -> None:
        self.mode = ConnectionMode(mode)
        self.connections: Dict[NodeData, Counter[NodeData]] = {}
        self._logger = get_logger(__name__).bind(component="syllable_connections")

    def add_edge(self, source: NodeData, target: NodeData, count: int = 1) -> None:
        successors = self.connections.get(source)
        if successors is None:
            self.connections[source] = Counter({target: count})
            return

        if self.mode is ConnectionMode.FIRST:
            (existing,) = successors
            successors[existing] += count
        else:
            successors[target] += count

    def add_word(self, syllables: Sequence[Any]) -> bool:
        """Record the boundaries of one word; single-syllable words are ignored."""

        if len(syllables) <= 1:
            return False

        self.add_edge(START, NodeData.of(syllables[0].first_phoneme()))
        for current, following in zip(syllables, syllables[1:]):
            self.add_edge(
                NodeData.of(current.last_phoneme()),
                NodeData.of(following.first_phoneme()),
            )
        self.add_edge(NodeData.of(syllables[-1].last_phoneme()), STOP)
        return True

    def build(self, corpus: Any) -> "SyllableConnections":
        words = getattr(corpus, "words", corpus)
        recorded = 0
        with start_span("syllable_connections.build", {"mode": self.mode.value}):
            for _word, syllables in words:
                if self.add_word(syllables):
                    recorded += 1

        self._logger.info(
            "Syllable connections built",
            context={
                "words": recorded,
                "boundaries": len(self.connections),
                "mode": self.mode.value,
            },
        )
        return self

    @classmethod
    def from_corpus(
        cls,
        corpus: Any,
        mode: ConnectionMode | str = ConnectionMode.WEIGHTED,
    ) -> "SyllableConnections":
        return cls(mode).build(corpus)

    def successors(self, node: NodeData) -> List[Tuple[NodeData, int]]:
        stored = self.connections.get(node)
        if not stored:
            return []
        return list(stored.items())

    def evaluate(self, node: NodeData, rng: Optional[random.Random] = None) -> NodeData:
        """Return the boundary that follows ``node``; :data:`STOP` when unknown."""

        options = self.successors(node)
        if not options:
            return STOP
        if self.mode is ConnectionMode.FIRST:
            return options[0][0]
        choice = weighted_random_choice([(count, target) for target, count in options], rng)
        return STOP if choice is None else choice

    def __len__(self) -> int:
        return len(self.connections)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SyllableConnections):
            return NotImplemented
        return self.mode == other.mode and self.connections == other.connections

    __hash__ = None  # type: ignore[assignment]

    # Snapshots ---------------------------------------------------------------
    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "schema": SNAPSHOT_SCHEMA,
            "kind": "syllable-connections",
            "mode": self.mode.value,
            "connections": {
                source.key(): [[target.key(), count] for target, count in successors.items()]
                for source, successors in self.connections.items()
            },
        }

    @classmethod
    def from_snapshot(cls, payload: Mapping[str, Any]) -> "SyllableConnections":
        try:
            if payload.get("kind") != "syllable-connections":
                raise SnapshotError(f"Unexpected snapshot kind: {payload.get('kind')!r}")
            if payload.get("schema") != SNAPSHOT_SCHEMA:
                raise SnapshotError(f"Unsupported snapshot schema: {payload.get('schema')!r}")

            table = cls(payload["mode"])
            for source_key, successors in payload["connections"].items():
                source = NodeData.from_key(source_key)
                if table.mode is ConnectionMode.FIRST and len(successors) != 1:
                    raise SnapshotError("First-successor tables hold exactly one successor")
                counts: Counter[NodeData] = Counter()
                for target_key, count in successors:
                    if int(count) < 1:
                        raise SnapshotError(f"Connection count must be positive, got {count!r}")
                    counts[NodeData.from_key(target_key)] += int(count)
                table.connections[source] = counts
        except SnapshotError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed syllable connections snapshot: {exc}") from exc
        return table


__all__ = ["ConnectionMode", "SyllableConnections"]
