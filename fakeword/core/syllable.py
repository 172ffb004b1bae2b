"""Syllable value objects and English respelling."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .phoneme import Phoneme

Segments = Tuple[List[Phoneme], List[Phoneme], List[Phoneme]]

# (respelling, ipa) pairs, in priority order for equal-length matches.
RESPELL_KEY: Tuple[Tuple[str, str], ...] = (
    ("ire", "aɪər"),
    ("oir", "ɔɪər"),
    ("our", "aʊər"),
    ("eer", "ɪər"),
    ("air", "ɛər"),
    ("ure", "jʊər"),
    ("ur", "ɜːr"),
    ("ew", "juː"),
    ("eye", "aɪ"),
    ("err", "ɛr"),
    ("irr", "ɪr"),
    ("urr", "ʌr"),
    ("uurr", "ʊr"),
    ("uhr", "ər"),
    ("oor", "ʊər"),
    ("or", "ɔːr"),
    ("orr", "ɒr"),
    ("oh", "oʊ"),
    ("oo", "uː"),
    ("ar", "ɑːr"),
    ("arr", "ær"),
    ("y", "aɪ"),
    ("ay", "eɪ"),
    ("ee", "iː"),
    ("aw", "ɔː"),
    ("ow", "aʊ"),
    ("oy", "ɔɪ"),
    ("ah", "ɑː"),
    ("ah", "ɑ"),
    ("ee", "i"),
    ("oo", "u"),
    ("aw", "ɔ"),
    ("uh", "ə"),
    ("a", "æ"),
    ("o", "ɒ"),
    ("uu", "ʊ"),
    ("i", "ɪ"),
    ("u", "ʌ"),
    ("e", "ɛ"),
    ("j", "dʒ"),
    ("nk", "ŋk"),
    ("wh", "hw"),
    ("b", "b"),
    ("ch", "tʃ"),
    ("d", "d"),
    ("dh", "ð"),
    ("f", "f"),
    ("g", "ɡ"),
    ("h", "h"),
    ("k", "k"),
    ("kh", "x"),
    ("l", "l"),
    ("l", "ɫ"),
    ("m", "m"),
    ("n", "n"),
    ("ng", "ŋ"),
    ("p", "p"),
    ("r", "ɹ"),
    ("r", "r"),
    ("s", "s"),
    ("sh", "ʃ"),
    ("t", "t"),
    ("th", "θ"),
    ("v", "v"),
    ("w", "w"),
    ("y", "j"),
    ("z", "z"),
    ("zh", "ʒ"),
)

# A lone ɪ, ʌ or ɛ closing the syllable is respelled with a trailing "h".
SPECIAL_ENDERS: Tuple[Tuple[str, str], ...] = (
    ("ih", "ɪ"),
    ("uh", "ʌ"),
    ("eh", "ɛ"),
)

# Stable sort keeps table order as the tie-breaker between equal lengths.
_RULES_BY_LENGTH: Tuple[Tuple[str, str], ...] = tuple(
    sorted(RESPELL_KEY, key=lambda rule: len(rule[1]), reverse=True)
)
_ENDERS = dict((ipa, english) for english, ipa in SPECIAL_ENDERS)


def respell_ipa(ipa: str) -> str:
    """Respell an IPA transcription with English letters."""

    result: List[str] = []
    remaining = ipa
    while remaining:
        ender = _ENDERS.get(remaining)
        if ender is not None:
            result.append(ender)
            break

        for english, symbol in _RULES_BY_LENGTH:
            if remaining.startswith(symbol):
                result.append(english)
                remaining = remaining[len(symbol):]
                break
        else:
            result.append(remaining[0])
            remaining = remaining[1:]

    return "".join(result)


@dataclass(frozen=True)
class Syllable:
    """Ordered phoneme sequence forming one syllable."""

    phonemes: Tuple[Phoneme, ...] = ()

    @classmethod
    def from_phonemes(cls, phonemes: Iterable[Phoneme]) -> "Syllable":
        return cls(tuple(phonemes))

    @classmethod
    def from_arpabet(cls, arpabet: str) -> "Syllable":
        return cls(tuple(Phoneme.from_arpabet(token) for token in arpabet.split()))

    @classmethod
    def empty(cls) -> "Syllable":
        return cls()

    def add_phoneme(self, phoneme: Phoneme) -> "Syllable":
        return Syllable(self.phonemes + (phoneme,))

    def first_phoneme(self) -> Phoneme:
        if not self.phonemes:
            raise IndexError("empty syllable has no first phoneme")
        return self.phonemes[0]

    def last_phoneme(self) -> Phoneme:
        if not self.phonemes:
            raise IndexError("empty syllable has no last phoneme")
        return self.phonemes[-1]

    def split(self) -> Optional[Segments]:
        """Partition into ``(onset, nucleus, coda)``.

        Returns ``None`` when the nucleus is empty or a vowel follows the
        first coda consonant.
        """

        onset: List[Phoneme] = []
        nucleus: List[Phoneme] = []
        coda: List[Phoneme] = []

        for phoneme in self.phonemes:
            if coda:
                if phoneme.is_vowel:
                    return None
                coda.append(phoneme)
            elif nucleus:
                (nucleus if phoneme.is_vowel else coda).append(phoneme)
            elif phoneme.is_vowel:
                nucleus.append(phoneme)
            else:
                onset.append(phoneme)

        if not nucleus:
            return None
        return onset, nucleus, coda

    def is_valid(self) -> bool:
        return self.split() is not None

    def to_ipa(self) -> str:
        return "".join(phoneme.to_ipa() for phoneme in self.phonemes)

    def to_english(self) -> str:
        return respell_ipa(self.to_ipa())

    def to_arpabet(self) -> str:
        return " ".join(phoneme.to_arpabet() for phoneme in self.phonemes)

    def __len__(self) -> int:
        return len(self.phonemes)

    def __iter__(self):
        return iter(self.phonemes)

    def __getitem__(self, index: int) -> Phoneme:
        return self.phonemes[index]

    def __str__(self) -> str:
        return self.to_ipa()


__all__ = [
    "RESPELL_KEY",
    "SPECIAL_ENDERS",
    "Syllable",
    "respell_ipa",
]
