"""Weighted graph modelling phoneme order inside a syllable.

Vertices are ``(NodeData, SyllablePart)`` pairs so the same phoneme in a
different structural slot is a different vertex. Edge counts accumulate
how often the corpus moved from one vertex to the next, and traversal
samples successors in proportion to those counts.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from fakeword.utils.observability import get_logger, start_span
from fakeword.utils.sampling import weighted_random_choice

from .errors import SnapshotError, UnknownNodeError
from .phoneme import Phoneme, SyllablePart
from .syllable import Syllable

SNAPSHOT_SCHEMA = 1
DEFAULT_MAX_STEPS = 64

_START = "start"
_STOP = "stop"


@dataclass(frozen=True)
class NodeData:
    """Payload of a graph vertex: the start marker, the stop marker or a phoneme."""

    kind: str
    phoneme: Optional[Phoneme] = None

    def __post_init__(self) -> None:
        if self.kind not in (_START, _STOP, "phoneme"):
            raise ValueError(f"Unknown node kind: {self.kind!r}")
        if (self.kind == "phoneme") != (self.phoneme is not None):
            raise ValueError("Only phoneme nodes carry a phoneme")

    @classmethod
    def of(cls, phoneme: Phoneme) -> "NodeData":
        return cls("phoneme", phoneme)

    @property
    def is_start(self) -> bool:
        return self.kind == _START

    @property
    def is_stop(self) -> bool:
        return self.kind == _STOP

    @property
    def is_phoneme(self) -> bool:
        return self.phoneme is not None

    def key(self) -> str:
        return self.phoneme.value if self.phoneme is not None else self.kind

    @classmethod
    def from_key(cls, key: str) -> "NodeData":
        if key == _START:
            return START
        if key == _STOP:
            return STOP
        return cls.of(Phoneme.from_arpabet(key))

    def __str__(self) -> str:
        return self.key()


START = NodeData(_START)
STOP = NodeData(_STOP)


@dataclass(frozen=True)
class NodeId:
    data: NodeData
    part: SyllablePart

    def key(self) -> str:
        return f"{self.data.key()}@{self.part.key()}"

    @classmethod
    def from_key(cls, key: str) -> "NodeId":
        data, sep, part = key.partition("@")
        if not sep:
            raise ValueError(f"Malformed node key: {key!r}")
        return cls(NodeData.from_key(data), SyllablePart.from_key(part))

    def __str__(self) -> str:
        return self.key()


ROOT = NodeId(START, SyllablePart.onset())


@dataclass
class SonorityGraphEdge:
    source: NodeId
    target: NodeId
    count: int = 1


@dataclass
class SonorityGraphNode:
    outs: List[SonorityGraphEdge] = field(default_factory=list)

    def edge_to(self, target: NodeId) -> Optional[SonorityGraphEdge]:
        for edge in self.outs:
            if edge.target == target:
                return edge
        return None


class SonorityGraph:
    """Directed graph of position-tagged phonemes built from a corpus."""

    def __init__(self, *, max_steps: int = DEFAULT_MAX_STEPS) -> None:
        self.nodes: Dict[NodeId, SonorityGraphNode] = {}
        self.max_steps = max(1, int(max_steps))
        self._logger = get_logger(__name__).bind(component="sonority_graph")

    # Construction ------------------------------------------------------------
    def add_node(self, node_id: NodeId) -> None:
        if node_id not in self.nodes:
            self.nodes[node_id] = SonorityGraphNode()

    def add_edge(self, source: NodeId, target: NodeId, count: int = 1) -> None:
        """Record ``count`` observations of ``source -> target``.

        Edges whose endpoints were never registered are dropped.
        """

        if target not in self.nodes:
            return
        node = self.nodes.get(source)
        if node is None:
            return

        edge = node.edge_to(target)
        if edge is None:
            node.outs.append(SonorityGraphEdge(source, target, count))
        else:
            edge.count += count

    def _link(self, source: NodeId, target: NodeId) -> None:
        self.add_node(source)
        self.add_node(target)
        self.add_edge(source, target)

    def add_syllable(self, syllable: Syllable) -> bool:
        """Trace one syllable through the graph; ``False`` if it does not split."""

        segments = syllable.split()
        if segments is None:
            return False
        onset, nucleus, coda = segments

        path: List[NodeId] = [ROOT]
        path.extend(NodeId(NodeData.of(p), SyllablePart.onset()) for p in onset)
        path.extend(NodeId(NodeData.of(p), SyllablePart.nucleus()) for p in nucleus)
        part = SyllablePart.coda(1)
        for phoneme in coda:
            path.append(NodeId(NodeData.of(phoneme), part))
            part = part.deeper()
        path.append(NodeId(STOP, part))

        for source, target in zip(path, path[1:]):
            self._link(source, target)
        return True

    def build(self, corpus: Any) -> "SonorityGraph":
        """Populate the graph from every syllable of ``corpus``.

        ``corpus`` is a :class:`~fakeword.core.cmudict_loader.SyllabifiedCorpus`
        or any iterable of ``(word, syllables)`` pairs.
        """

        words = getattr(corpus, "words", corpus)
        skipped = 0
        observed = 0
        with start_span("sonority_graph.build") as span:
            for _word, syllables in words:
                for syllable in syllables:
                    if self.add_syllable(syllable):
                        observed += 1
                    else:
                        skipped += 1
            if span is not None:
                span.set_attribute("syllables", observed)

        self._logger.info(
            "Sonority graph built",
            context={
                "syllables": observed,
                "skipped": skipped,
                "nodes": len(self.nodes),
                "edges": sum(len(node.outs) for node in self.nodes.values()),
            },
        )
        return self

    @classmethod
    def from_corpus(cls, corpus: Any, **kwargs: Any) -> "SonorityGraph":
        return cls(**kwargs).build(corpus)

    # Lookup ------------------------------------------------------------------
    def get_node(self, node_id: NodeId) -> Optional[SonorityGraphNode]:
        return self.nodes.get(node_id)

    def get_node_checked(self, node_id: NodeId) -> SonorityGraphNode:
        node = self.nodes.get(node_id)
        if node is None:
            raise UnknownNodeError(f"Node {node_id} is not registered")
        return node

    def node_ids(self) -> Set[NodeId]:
        return set(self.nodes)

    def edge_counts(self) -> Dict[Tuple[NodeId, NodeId], int]:
        return {
            (edge.source, edge.target): edge.count
            for node in self.nodes.values()
            for edge in node.outs
        }

    def __len__(self) -> int:
        return len(self.nodes)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SonorityGraph):
            return NotImplemented
        return self.node_ids() == other.node_ids() and self.edge_counts() == other.edge_counts()

    __hash__ = None  # type: ignore[assignment]

    # Traversal ---------------------------------------------------------------
    def _walk(self, start: NodeId, phonemes: List[Phoneme], rng: random.Random) -> None:
        current = start
        for _ in range(self.max_steps):
            node = self.get_node_checked(current)
            edge = weighted_random_choice([(e.count, e) for e in node.outs], rng)
            if edge is None:
                return

            target = edge.target
            next_node = self.nodes.get(target)
            if next_node is None or target.data.is_stop:
                return
            if target.data.phoneme is not None:
                phonemes.append(target.data.phoneme)
            if not next_node.outs:
                return
            current = target

        self._logger.warning(
            "Syllable walk hit the step ceiling",
            context={"start": start.key(), "max_steps": self.max_steps},
        )

    def evaluate(self, rng: Optional[random.Random] = None) -> Syllable:
        """Synthesize one syllable by walking from the start marker."""

        phonemes: List[Phoneme] = []
        if ROOT in self.nodes:
            self._walk(ROOT, phonemes, rng or random.Random())
        return Syllable.from_phonemes(phonemes)

    def evaluate_from(self, phoneme: Phoneme, rng: Optional[random.Random] = None) -> Syllable:
        """Synthesize one syllable that begins with ``phoneme``."""

        part = SyllablePart.nucleus() if phoneme.is_vowel else SyllablePart.onset()
        root = NodeId(NodeData.of(phoneme), part)
        self.get_node_checked(root)
        phonemes: List[Phoneme] = [phoneme]
        self._walk(root, phonemes, rng or random.Random())
        return Syllable.from_phonemes(phonemes)

    # Snapshots ---------------------------------------------------------------
    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "schema": SNAPSHOT_SCHEMA,
            "kind": "sonority-graph",
            "max_steps": self.max_steps,
            "nodes": {
                node_id.key(): [[edge.target.key(), edge.count] for edge in node.outs]
                for node_id, node in self.nodes.items()
            },
        }

    @classmethod
    def from_snapshot(cls, payload: Mapping[str, Any]) -> "SonorityGraph":
        """Rehydrate a graph written by :meth:`to_snapshot`.

        Raises :class:`SnapshotError` for any malformed or mismatched payload.
        """

        try:
            if payload.get("kind") != "sonority-graph":
                raise SnapshotError(f"Unexpected snapshot kind: {payload.get('kind')!r}")
            if payload.get("schema") != SNAPSHOT_SCHEMA:
                raise SnapshotError(f"Unsupported snapshot schema: {payload.get('schema')!r}")

            graph = cls(max_steps=int(payload.get("max_steps", DEFAULT_MAX_STEPS)))
            raw_nodes: Mapping[str, Sequence[Sequence[Any]]] = payload["nodes"]
            for key in raw_nodes:
                graph.add_node(NodeId.from_key(key))
            for key, outs in raw_nodes.items():
                source = NodeId.from_key(key)
                for target_key, count in outs:
                    target = NodeId.from_key(target_key)
                    if int(count) < 1:
                        raise SnapshotError(f"Edge count must be positive, got {count!r}")
                    if target not in graph.nodes:
                        raise SnapshotError(f"Edge points at unknown node {target_key!r}")
                    graph.add_edge(source, target, int(count))
        except SnapshotError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed sonority graph snapshot: {exc}") from exc
        return graph


__all__ = [
    "NodeData",
    "NodeId",
    "ROOT",
    "START",
    "STOP",
    "SonorityGraph",
    "SonorityGraphEdge",
    "SonorityGraphNode",
]
