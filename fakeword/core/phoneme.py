"""Phoneme inventory and syllable position tags."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Optional

from .errors import UnknownPhonemeError


class Phoneme(Enum):
    """Closed set of ARPAbet phonemes understood by the corpus loader."""

    AA = "AA"
    AE = "AE"
    AH = "AH"
    AO = "AO"
    AW = "AW"
    AX = "AX"
    AXR = "AXR"
    AY = "AY"
    EH = "EH"
    ER = "ER"
    EY = "EY"
    IH = "IH"
    IX = "IX"
    IY = "IY"
    OW = "OW"
    OY = "OY"
    UH = "UH"
    UW = "UW"
    UX = "UX"

    B = "B"
    CH = "CH"
    D = "D"
    DH = "DH"
    DX = "DX"
    EL = "EL"
    EM = "EM"
    EN = "EN"
    F = "F"
    G = "G"
    H = "H"
    JH = "JH"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    NG = "NG"
    NX = "NX"
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    SH = "SH"
    T = "T"
    TH = "TH"
    V = "V"
    W = "W"
    WH = "WH"
    Y = "Y"
    Z = "Z"
    ZH = "ZH"

    @classmethod
    def from_arpabet(cls, token: str) -> "Phoneme":
        """Parse an ARPAbet token, ignoring case and any stress digit."""

        normalized = _STRESS_SUFFIX.sub("", token.strip()).upper()
        try:
            return _FROM_ARPABET[normalized]
        except KeyError:
            raise UnknownPhonemeError(token) from None

    @classmethod
    def from_ipa(cls, symbol: str) -> "Phoneme":
        try:
            return _FROM_IPA[symbol]
        except KeyError:
            raise UnknownPhonemeError(symbol, alphabet="ipa") from None

    def to_arpabet(self) -> str:
        return _TO_ARPABET[self]

    def to_ipa(self) -> str:
        return _TO_IPA[self]

    @property
    def is_vowel(self) -> bool:
        return _IS_VOWEL[self]

    @property
    def is_consonant(self) -> bool:
        return not _IS_VOWEL[self]

    def __repr__(self) -> str:
        return f"Phoneme.{self.name}"


_STRESS_SUFFIX = re.compile(r"[012]$")

_VOWELS: FrozenSet[Phoneme] = frozenset(
    {
        Phoneme.AA,
        Phoneme.AE,
        Phoneme.AH,
        Phoneme.AO,
        Phoneme.AW,
        Phoneme.AX,
        Phoneme.AXR,
        Phoneme.AY,
        Phoneme.EH,
        Phoneme.ER,
        Phoneme.EY,
        Phoneme.IH,
        Phoneme.IX,
        Phoneme.IY,
        Phoneme.OW,
        Phoneme.OY,
        Phoneme.UH,
        Phoneme.UW,
        Phoneme.UX,
    }
)

_TO_ARPABET: Dict[Phoneme, str] = {phoneme: phoneme.value for phoneme in Phoneme}

_FROM_ARPABET: Dict[str, Phoneme] = {value: key for key, value in _TO_ARPABET.items()}
_FROM_ARPABET["HH"] = Phoneme.H

_TO_IPA: Dict[Phoneme, str] = {
    Phoneme.AA: "ɑ",
    Phoneme.AE: "æ",
    Phoneme.AH: "ʌ",
    Phoneme.AO: "ɔ",
    Phoneme.AW: "aʊ",
    Phoneme.AX: "əɹ",
    Phoneme.AXR: "ə",
    Phoneme.AY: "aɪ",
    Phoneme.EH: "ɛ",
    Phoneme.ER: "ɛɹ",
    Phoneme.EY: "eɪ",
    Phoneme.IH: "ɪ",
    Phoneme.IX: "ɨ",
    Phoneme.IY: "i",
    Phoneme.OW: "oʊ",
    Phoneme.OY: "ɔɪ",
    Phoneme.UH: "ʊ",
    Phoneme.UW: "u",
    Phoneme.UX: "ʉ",
    Phoneme.B: "b",
    Phoneme.CH: "tʃ",
    Phoneme.D: "d",
    Phoneme.DH: "ð",
    Phoneme.DX: "ɾ",
    Phoneme.EL: "l̩",
    Phoneme.EM: "m̩",
    Phoneme.EN: "n̩",
    Phoneme.F: "f",
    Phoneme.G: "ɡ",
    Phoneme.H: "h",
    Phoneme.JH: "dʒ",
    Phoneme.K: "k",
    Phoneme.L: "l",
    Phoneme.M: "m",
    Phoneme.N: "n",
    Phoneme.NG: "ŋ",
    Phoneme.NX: "ɾ̃",
    Phoneme.P: "p",
    Phoneme.Q: "ʔ",
    Phoneme.R: "ɹ",
    Phoneme.S: "s",
    Phoneme.SH: "ʃ",
    Phoneme.T: "t",
    Phoneme.TH: "θ",
    Phoneme.V: "v",
    Phoneme.W: "w",
    Phoneme.WH: "ʍ",
    Phoneme.Y: "j",
    Phoneme.Z: "z",
    Phoneme.ZH: "ʒ",
}

_FROM_IPA: Dict[str, Phoneme] = {value: key for key, value in _TO_IPA.items()}

_IS_VOWEL: Dict[Phoneme, bool] = {phoneme: phoneme in _VOWELS for phoneme in Phoneme}


def _check_tables() -> None:
    tables = {
        "arpabet": _TO_ARPABET,
        "ipa": _TO_IPA,
        "vowel": _IS_VOWEL,
    }
    for name, table in tables.items():
        missing = [phoneme.name for phoneme in Phoneme if phoneme not in table]
        if missing:
            raise RuntimeError(f"Phoneme table {name!r} is missing {missing}")
    if len(_FROM_IPA) != len(Phoneme):
        raise RuntimeError("IPA symbols must be unique per phoneme")


_check_tables()


ONSET = "onset"
NUCLEUS = "nucleus"
CODA = "coda"
_ROLES = (ONSET, NUCLEUS, CODA)


@dataclass(frozen=True)
class SyllablePart:
    """Structural position of a phoneme inside a syllable.

    Coda positions carry a 1-based ``layer`` counting how deep into a
    consonant cluster the phoneme sits, so ``/t/`` as the second coda
    consonant is a different graph vertex from ``/t/`` as an onset.
    """

    role: str
    layer: int = 0

    def __post_init__(self) -> None:
        if self.role not in _ROLES:
            raise ValueError(f"Unknown syllable role: {self.role!r}")
        if self.role != CODA and self.layer != 0:
            raise ValueError("Only coda positions carry a layer")
        if self.layer < 0:
            raise ValueError("Coda layer must be non-negative")

    @classmethod
    def onset(cls) -> "SyllablePart":
        return _ONSET

    @classmethod
    def nucleus(cls) -> "SyllablePart":
        return _NUCLEUS

    @classmethod
    def coda(cls, layer: int = 1) -> "SyllablePart":
        return cls(CODA, layer)

    @property
    def is_onset(self) -> bool:
        return self.role == ONSET

    @property
    def is_nucleus(self) -> bool:
        return self.role == NUCLEUS

    @property
    def is_coda(self) -> bool:
        return self.role == CODA

    def next(self) -> Optional["SyllablePart"]:
        if self.role == ONSET:
            return _NUCLEUS
        if self.role == NUCLEUS:
            return SyllablePart.coda(1)
        return None

    def deeper(self) -> "SyllablePart":
        if not self.is_coda:
            raise ValueError("Only coda positions can be deepened")
        return SyllablePart.coda(self.layer + 1)

    def key(self) -> str:
        return f"{CODA}:{self.layer}" if self.is_coda else self.role

    @classmethod
    def from_key(cls, key: str) -> "SyllablePart":
        role, _, layer = key.partition(":")
        if role == CODA:
            return cls.coda(int(layer))
        return cls(role)

    def __str__(self) -> str:
        return self.key()


_ONSET = SyllablePart(ONSET)
_NUCLEUS = SyllablePart(NUCLEUS)


__all__ = ["Phoneme", "SyllablePart"]
