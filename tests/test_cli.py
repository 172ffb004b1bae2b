import json

import pytest

from fakeword import cli


@pytest.fixture
def cli_env(monkeypatch, tmp_path, corpus_files):
    dict_path, frequency_path = corpus_files
    monkeypatch.setenv("FAKEWORD_DATA_DIR", str(dict_path.parent))
    monkeypatch.setenv("FAKEWORD_DICT_FILE", dict_path.name)
    monkeypatch.setenv("FAKEWORD_FREQUENCY_FILE", frequency_path.name)
    monkeypatch.setenv("FAKEWORD_CACHE_DIR", str(tmp_path / "cache"))
    levels = []
    monkeypatch.setattr(cli, "configure_logging", lambda level=None: levels.append(level))
    return levels


def test_cli_prints_one_word_per_line(cli_env, capsys):
    assert cli.main(["-n", "4", "--seed", "2", "--log-level", "DEBUG"]) == 0

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 4
    assert all(line.endswith(")") and " (" in line for line in lines)
    assert cli_env == ["DEBUG"]


def test_cli_json_output(cli_env, capsys):
    assert cli.main(["-n", "3", "--json", "--max", "2", "--mode", "first", "--seed", "5"]) == 0

    words = json.loads(capsys.readouterr().out)
    assert len(words) == 3
    assert all(len(word["syllables"]) <= 2 for word in words)


def test_cli_zero_maximum_gives_empty_words(cli_env, capsys):
    assert cli.main(["-n", "2", "--json", "--max", "0"]) == 0
    words = json.loads(capsys.readouterr().out)
    assert words == [{"english": "", "ipa": "", "syllables": []}] * 2


def test_cli_is_reproducible_with_a_seed(cli_env, capsys):
    cli.main(["-n", "5", "--seed", "7"])
    first = capsys.readouterr().out
    cli.main(["-n", "5", "--seed", "7", "--rebuild"])
    assert capsys.readouterr().out == first


def test_cli_rejects_invalid_settings(cli_env):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--decay", "0"])
    assert excinfo.value.code == 2


def test_cli_reports_missing_corpus(cli_env, monkeypatch, capsys):
    monkeypatch.setenv("FAKEWORD_DICT_FILE", "missing.txt")
    assert cli.main(["-n", "1"]) == 2
    assert "corpus file not found" in capsys.readouterr().err


def test_cli_reports_unknown_phonemes(cli_env, monkeypatch, tmp_path, capsys):
    bad = tmp_path / "resources" / "bad.txt"
    bad.write_text("BOGUS  B OX1 G\n", encoding="utf-8")
    monkeypatch.setenv("FAKEWORD_DICT_FILE", bad.name)
    assert cli.main(["-n", "1"]) == 1
    assert "OX1" in capsys.readouterr().err
