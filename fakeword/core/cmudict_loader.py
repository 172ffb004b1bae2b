"""Utilities for reading the syllabified CMU pronouncing dictionary."""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from fakeword.utils.observability import create_counter, get_logger, record_exception, start_span

from .errors import SnapshotError, UnknownPhonemeError
from .syllable import Syllable

DEFAULT_FREQUENCY_LIMIT = 60000
SNAPSHOT_SCHEMA = 1

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")
_ENTRY_SEPARATOR = re.compile(r"\t+| {2,}")
_CHUNK_SIZE = 4096

WordEntry = Tuple[str, List[Syllable]]

MALFORMED_ENTRIES = create_counter(
    "fakeword_corpus_malformed_entries",
    "Dictionary entries skipped because a syllable did not split.",
)


@dataclass
class SyllabifiedCorpus:
    """Dictionary words as syllable sequences, most frequent first."""

    words: List[WordEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self):
        return iter(self.words)

    def get(self, word: str) -> Optional[List[Syllable]]:
        normalized = word.lower().strip()
        for entry, syllables in self.words:
            if entry == normalized:
                return syllables
        return None

    def to_snapshot(self) -> Dict[str, Any]:
        return {
            "schema": SNAPSHOT_SCHEMA,
            "kind": "syllabified-phonemes",
            "words": [
                [word, [syllable.to_arpabet() for syllable in syllables]]
                for word, syllables in self.words
            ],
        }

    @classmethod
    def from_snapshot(cls, payload: Mapping[str, Any]) -> "SyllabifiedCorpus":
        try:
            if payload.get("kind") != "syllabified-phonemes":
                raise SnapshotError(f"Unexpected snapshot kind: {payload.get('kind')!r}")
            if payload.get("schema") != SNAPSHOT_SCHEMA:
                raise SnapshotError(f"Unsupported snapshot schema: {payload.get('schema')!r}")
            words = [
                (str(word), [Syllable.from_arpabet(chunk) for chunk in chunks])
                for word, chunks in payload["words"]
            ]
        except SnapshotError:
            raise
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed corpus snapshot: {exc}") from exc
        return cls(words)


def parse_dictionary_line(line: str) -> Optional[Tuple[str, List[Syllable]]]:
    """Parse one ``WORD  PH ON . EMES`` line.

    Returns ``None`` for comments, blank lines and alternate pronunciations
    such as ``WORD(2)``. Unknown phonemes raise
    :class:`~fakeword.core.errors.UnknownPhonemeError`.
    """

    entry = line.strip()
    if not entry or entry.startswith("#") or entry.startswith(";;;"):
        return None

    parts = _ENTRY_SEPARATOR.split(entry, maxsplit=1)
    if len(parts) < 2:
        return None

    raw_word, sounds = parts[0].strip(), parts[1]
    if not raw_word or _WORD_VARIANT_PATTERN.search(raw_word):
        return None

    if "/" in sounds:
        sounds = sounds.split("/", 1)[1]

    syllables = [
        Syllable.from_arpabet(chunk)
        for chunk in sounds.split(".")
        if chunk.strip()
    ]
    if not syllables:
        return None
    return raw_word.lower(), syllables


def _parse_chunk(lines: Sequence[str]) -> Tuple[Dict[str, List[Syllable]], int]:
    parsed: Dict[str, List[Syllable]] = {}
    malformed = 0
    for line in lines:
        result = parse_dictionary_line(line)
        if result is None:
            continue
        word, syllables = result
        if not all(syllable.is_valid() for syllable in syllables):
            malformed += 1
            continue
        parsed[word] = syllables
    return parsed, malformed


class CMUDictLoader:
    """Build a :class:`SyllabifiedCorpus` from a dictionary and a frequency list."""

    def __init__(
        self,
        dict_path: Path | str,
        frequency_path: Path | str,
        *,
        frequency_limit: int = DEFAULT_FREQUENCY_LIMIT,
        max_workers: Optional[int] = None,
    ) -> None:
        self.dict_path = Path(dict_path)
        self.frequency_path = Path(frequency_path)
        self.frequency_limit = max(0, int(frequency_limit))
        self.max_workers = max_workers
        self.malformed_entries = 0
        self._logger = get_logger(__name__).bind(component="cmudict_loader")

    def load_word_frequencies(self) -> List[str]:
        """Return the most frequent words, capped at ``frequency_limit``."""

        words: List[str] = []
        with self.frequency_path.open("r", encoding="utf-8") as handle:
            for line in handle:
                if len(words) >= self.frequency_limit:
                    break
                word = line.split("\t", 1)[0].strip().lower()
                if word:
                    words.append(word)
        return words

    def parse_dictionary(self, lines: Sequence[str]) -> Dict[str, List[Syllable]]:
        """Parse dictionary lines concurrently and merge the results in order."""

        chunks = [lines[i:i + _CHUNK_SIZE] for i in range(0, len(lines), _CHUNK_SIZE)]
        merged: Dict[str, List[Syllable]] = {}
        malformed = 0
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            for parsed, skipped in executor.map(_parse_chunk, chunks):
                merged.update(parsed)
                malformed += skipped

        self.malformed_entries = malformed
        if malformed:
            MALFORMED_ENTRIES.inc(malformed)
            self._logger.debug(
                "Skipped malformed dictionary entries",
                context={"count": malformed},
            )
        return merged

    @staticmethod
    def order_by_frequency(
        word_syllables: Mapping[str, List[Syllable]],
        frequencies: Iterable[str],
    ) -> List[WordEntry]:
        remaining = dict(word_syllables)
        ordered: List[WordEntry] = []
        for word in frequencies:
            syllables = remaining.pop(word, None)
            if syllables is not None:
                ordered.append((word, syllables))
        ordered.extend(sorted(remaining.items()))
        return ordered

    def load(self) -> SyllabifiedCorpus:
        with start_span("corpus.load", {"dict_path": str(self.dict_path)}) as span:
            frequencies = self.load_word_frequencies()
            with self.dict_path.open("r", encoding="utf-8") as handle:
                lines = handle.read().splitlines()
            try:
                word_syllables = self.parse_dictionary(lines)
            except UnknownPhonemeError as exc:
                record_exception(span, exc)
                self._logger.error(
                    "Dictionary contains an unknown phoneme",
                    context={"token": exc.token, "dict_path": str(self.dict_path)},
                )
                raise
            corpus = SyllabifiedCorpus(self.order_by_frequency(word_syllables, frequencies))

        self._logger.info(
            "Corpus loaded",
            context={
                "words": len(corpus),
                "frequency_words": len(frequencies),
                "malformed": self.malformed_entries,
            },
        )
        return corpus


__all__ = [
    "CMUDictLoader",
    "DEFAULT_FREQUENCY_LIMIT",
    "SyllabifiedCorpus",
    "parse_dictionary_line",
]
