"""Core phonotactic models for fakeword."""

from .cmudict_loader import CMUDictLoader, SyllabifiedCorpus, parse_dictionary_line
from .connections import ConnectionMode, SyllableConnections
from .errors import FakeWordError, SnapshotError, UnknownNodeError, UnknownPhonemeError
from .generator import FakeWordGenerator, WordGenConfig
from .phoneme import Phoneme, SyllablePart
from .sonority_graph import START, STOP, NodeData, NodeId, SonorityGraph
from .syllable import Syllable, respell_ipa
from .word import Word

__all__ = [
    "CMUDictLoader",
    "ConnectionMode",
    "FakeWordError",
    "FakeWordGenerator",
    "NodeData",
    "NodeId",
    "Phoneme",
    "START",
    "STOP",
    "SnapshotError",
    "SonorityGraph",
    "Syllable",
    "SyllableConnections",
    "SyllablePart",
    "SyllabifiedCorpus",
    "UnknownNodeError",
    "UnknownPhonemeError",
    "Word",
    "WordGenConfig",
    "parse_dictionary_line",
    "respell_ipa",
]
