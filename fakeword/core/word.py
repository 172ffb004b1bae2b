"""Generated word container."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List

from .syllable import Syllable


@dataclass
class Word:
    """Ordered syllables making up one generated word."""

    syllables: List[Syllable] = field(default_factory=list)

    @classmethod
    def empty(cls) -> "Word":
        return cls()

    def add_syllable(self, syllable: Syllable) -> None:
        self.syllables.append(syllable)

    def to_english(self) -> str:
        return "-".join(syllable.to_english() for syllable in self.syllables)

    def to_ipa(self) -> str:
        return " ".join(syllable.to_ipa() for syllable in self.syllables)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "english": self.to_english(),
            "ipa": self.to_ipa(),
            "syllables": [syllable.to_arpabet() for syllable in self.syllables],
        }

    def __len__(self) -> int:
        return len(self.syllables)

    def __iter__(self) -> Iterator[Syllable]:
        return iter(self.syllables)

    def __str__(self) -> str:
        return f"{self.to_english()} ({self.to_ipa()})"


__all__ = ["Word"]
