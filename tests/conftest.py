import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fakeword.config import FakeWordSettings
from fakeword.core import CMUDictLoader


SAMPLE_DICTIONARY = """\
## Syllabified excerpt of the CMU pronouncing dictionary
;;; legacy comment marker
AMAZING  AH0 . M EY1 . Z IH0 NG
BELOW  B IH0 . L OW1
BRR  B R
HOUSE  HH AW1 S
PAPER  P EY1 . P ER0
PAPER(2)  P EY1 . P AH0 R
RHYTHM  R IH1 . DH AH0 M
STRIKE  S T R AY1 K
TABLE  T EY1 . B AH0 L
TIGER\tT AY1 G ER0 / T AY1 . G ER0
WINDOW  W IH1 N . D OW0
"""

SAMPLE_FREQUENCIES = """\
the\t23135851162
house\t413963060
window\t128183023
paper\t102327843
house\t1
zzz\t1
"""


@pytest.fixture
def corpus_files(tmp_path):
    """Write the sample dictionary and frequency list to a temporary directory."""

    data_dir = tmp_path / "resources"
    data_dir.mkdir()
    dict_path = data_dir / "cmudict.0.6-syl.txt"
    frequency_path = data_dir / "word_frequency.txt"
    dict_path.write_text(SAMPLE_DICTIONARY, encoding="utf-8")
    frequency_path.write_text(SAMPLE_FREQUENCIES, encoding="utf-8")
    return dict_path, frequency_path


@pytest.fixture
def settings(tmp_path, corpus_files):
    dict_path, frequency_path = corpus_files
    return FakeWordSettings(
        dict_path=dict_path,
        frequency_path=frequency_path,
        cache_dir=tmp_path / "internal",
        max_workers=2,
    )


@pytest.fixture
def sample_corpus(corpus_files):
    dict_path, frequency_path = corpus_files
    return CMUDictLoader(dict_path, frequency_path, max_workers=2).load()
