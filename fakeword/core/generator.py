"""Word synthesis on top of the sonority graph and connection table."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fakeword.utils.observability import create_counter, create_histogram, get_logger

from .connections import ConnectionMode, SyllableConnections
from .sonority_graph import START, NodeData, SonorityGraph
from .word import Word

WORDS_GENERATED = create_counter(
    "fakeword_words_generated",
    "Number of words produced by the generator.",
)
WORD_SYLLABLES = create_histogram(
    "fakeword_word_syllables",
    "Syllable count of generated words.",
    buckets=(0, 1, 2, 3, 4, 5, 6, 8, 10, 15),
)


@dataclass
class WordGenConfig:
    """Knobs shaping how many syllables a generated word receives."""

    # Larger values make syllable counts more consistent.
    word_length_decay: float = 1.5
    # Larger values make words longer on average.
    word_length_bias: float = 1.5
    # Hard cap applied on top of the probabilistic stopping rule.
    word_length_max: int = 10
    connection_mode: ConnectionMode = ConnectionMode.WEIGHTED
    seed: Optional[int] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        self.connection_mode = ConnectionMode(self.connection_mode)

    def validate(self) -> "WordGenConfig":
        if self.word_length_decay <= 0:
            raise ValueError("word_length_decay must be positive")
        if self.word_length_bias < 0:
            raise ValueError("word_length_bias must be non-negative")
        if self.word_length_max < 0:
            raise ValueError("word_length_max must be non-negative")
        return self

    def continuation_chance(self, index: int) -> float:
        """Probability of adding another syllable after syllable ``index``."""

        return self.word_length_decay ** (-index) * self.word_length_bias

    def as_dict(self) -> Dict[str, Any]:
        return {
            "word_length_decay": self.word_length_decay,
            "word_length_bias": self.word_length_bias,
            "word_length_max": self.word_length_max,
            "connection_mode": self.connection_mode.value,
            "seed": self.seed,
        }


class FakeWordGenerator:
    """Chains synthesized syllables into words.

    The generator owns its random source. The graph and the connection table
    are only read, so several generators may share them as long as each has
    its own ``rng``. ``config.connection_mode`` must match the mode the
    connection table was built in.
    """

    def __init__(
        self,
        sonority_graph: SonorityGraph,
        syllable_connections: SyllableConnections,
        config: Optional[WordGenConfig] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.sonority_graph = sonority_graph
        self.syllable_connections = syllable_connections
        self.config = (config or WordGenConfig()).validate()
        if self.config.connection_mode is not syllable_connections.mode:
            raise ValueError(
                f"config asks for {self.config.connection_mode.value!r} connections but the "
                f"table was built in {syllable_connections.mode.value!r} mode"
            )
        self.rng = rng or random.Random(self.config.seed)
        self._logger = get_logger(__name__).bind(component="word_generator")

    def generate_word(self) -> Word:
        config = self.config
        word = Word.empty()
        boundary: NodeData = self.syllable_connections.evaluate(START, self.rng)

        chance = 1.0
        index = 0
        while chance > self.rng.random():
            if len(word) >= config.word_length_max:
                break
            if boundary.is_stop:
                break
            if boundary.phoneme is not None:
                syllable = self.sonority_graph.evaluate_from(boundary.phoneme, self.rng)
                word.add_syllable(syllable)
                boundary = self.syllable_connections.evaluate(
                    NodeData.of(syllable.last_phoneme()), self.rng
                )
            chance = config.continuation_chance(index)
            index += 1
            if index > config.word_length_max:
                break

        WORDS_GENERATED.inc()
        WORD_SYLLABLES.observe(len(word))
        self._logger.debug(
            "Word generated",
            context={"ipa": word.to_ipa(), "syllables": len(word)},
        )
        return word

    def generate_words(self, count: int) -> List[Word]:
        return [self.generate_word() for _ in range(max(0, int(count)))]


__all__ = ["FakeWordGenerator", "WordGenConfig"]
