from pathlib import Path

import pytest

from fakeword.config import FakeWordSettings, share_interface


def test_defaults_point_at_bundled_assets():
    settings = FakeWordSettings.from_env({})
    assert settings.dict_path == Path("assets/resources/cmudict.0.6-syl.txt")
    assert settings.frequency_path == Path("assets/resources/word_frequency.txt")
    assert settings.cache_dir == Path("assets/internal")
    assert settings.frequency_limit == 60000
    assert settings.max_workers is None


def test_environment_overrides():
    settings = FakeWordSettings.from_env(
        {
            "FAKEWORD_DATA_DIR": "/data",
            "FAKEWORD_DICT_FILE": "dict.txt",
            "FAKEWORD_FREQUENCY_FILE": "freq.txt",
            "FAKEWORD_CACHE_DIR": "/cache",
            "FAKEWORD_FREQUENCY_LIMIT": "500",
            "FAKEWORD_WORKERS": "3",
        }
    )
    assert settings.dict_path == Path("/data/dict.txt")
    assert settings.frequency_path == Path("/data/freq.txt")
    assert settings.cache_dir == Path("/cache")
    assert settings.frequency_limit == 500
    assert settings.max_workers == 3


def test_bad_integer_setting_is_reported():
    with pytest.raises(ValueError, match="FAKEWORD_WORKERS"):
        FakeWordSettings.from_env({"FAKEWORD_WORKERS": "many"})


@pytest.mark.parametrize(
    "value, expected",
    [("1", True), ("true", True), (" Yes ", True), ("0", False), ("", False)],
)
def test_share_interface_flag(value, expected):
    assert share_interface({"FAKEWORD_SHARE": value}) is expected


def test_fingerprint_tracks_corpus_settings(tmp_path):
    settings = FakeWordSettings(dict_path=tmp_path / "a.txt", frequency_path=tmp_path / "f.txt")

    assert settings.fingerprint() == FakeWordSettings(
        dict_path=tmp_path / "a.txt",
        frequency_path=tmp_path / "f.txt",
        cache_dir=tmp_path / "elsewhere",
    ).fingerprint()
    assert settings.fingerprint() != FakeWordSettings(
        dict_path=tmp_path / "b.txt", frequency_path=tmp_path / "f.txt"
    ).fingerprint()
    assert settings.fingerprint() != FakeWordSettings(
        dict_path=tmp_path / "a.txt", frequency_path=tmp_path / "f.txt", frequency_limit=10
    ).fingerprint()
