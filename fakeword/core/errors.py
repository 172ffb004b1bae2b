"""Exception hierarchy shared by the fakeword core."""

from __future__ import annotations


class FakeWordError(Exception):
    """Base class for errors raised by :mod:`fakeword`."""


class UnknownPhonemeError(FakeWordError, ValueError):
    """Raised when a dictionary token does not name a known phoneme."""

    def __init__(self, token: str, alphabet: str = "arpabet") -> None:
        self.token = token
        self.alphabet = alphabet
        super().__init__(f"Could not convert {token!r} ({alphabet}) to a phoneme")


class SnapshotError(FakeWordError, ValueError):
    """Raised when a cached snapshot cannot be decoded."""


class UnknownNodeError(FakeWordError, LookupError):
    """Raised when a graph lookup targets a node that was never registered."""


__all__ = [
    "FakeWordError",
    "SnapshotError",
    "UnknownNodeError",
    "UnknownPhonemeError",
]
