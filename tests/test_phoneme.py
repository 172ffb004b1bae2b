import pytest

from fakeword.core import Phoneme, SyllablePart, UnknownPhonemeError


def test_every_phoneme_round_trips_through_both_alphabets():
    assert len(Phoneme) == 50
    for phoneme in Phoneme:
        assert Phoneme.from_arpabet(phoneme.to_arpabet()) is phoneme
        assert Phoneme.from_ipa(phoneme.to_ipa()) is phoneme


def test_vowel_classification():
    vowels = {phoneme for phoneme in Phoneme if phoneme.is_vowel}
    assert len(vowels) == 19
    assert Phoneme.AA in vowels and Phoneme.ER in vowels
    assert Phoneme.S.is_consonant
    assert not Phoneme.S.is_vowel


@pytest.mark.parametrize(
    "token, expected",
    [
        ("AY1", Phoneme.AY),
        ("ah0", Phoneme.AH),
        ("EH2", Phoneme.EH),
        ("HH", Phoneme.H),
        ("H", Phoneme.H),
        (" NG ", Phoneme.NG),
    ],
)
def test_from_arpabet_normalises_tokens(token, expected):
    assert Phoneme.from_arpabet(token) is expected


def test_unknown_arpabet_token_raises():
    with pytest.raises(UnknownPhonemeError) as excinfo:
        Phoneme.from_arpabet("QQ1")
    assert excinfo.value.token == "QQ1"
    assert excinfo.value.alphabet == "arpabet"
    assert isinstance(excinfo.value, ValueError)


def test_unknown_ipa_symbol_raises():
    with pytest.raises(UnknownPhonemeError) as excinfo:
        Phoneme.from_ipa("ǂ")
    assert excinfo.value.alphabet == "ipa"


def test_ipa_values_follow_the_lookup_table():
    assert Phoneme.AW.to_ipa() == "aʊ"
    assert Phoneme.ER.to_ipa() == "ɛɹ"
    assert Phoneme.G.to_ipa() == "ɡ"
    assert Phoneme.H.to_arpabet() == "H"


def test_syllable_part_progression():
    onset = SyllablePart.onset()
    assert onset.next() == SyllablePart.nucleus()
    assert SyllablePart.nucleus().next() == SyllablePart.coda(1)
    assert SyllablePart.coda(1).next() is None
    assert SyllablePart.coda(2).deeper() == SyllablePart.coda(3)


def test_syllable_part_keys_round_trip():
    for part in (SyllablePart.onset(), SyllablePart.nucleus(), SyllablePart.coda(4)):
        assert SyllablePart.from_key(part.key()) == part
    assert SyllablePart.coda(2).key() == "coda:2"


def test_only_codas_carry_layers():
    with pytest.raises(ValueError):
        SyllablePart("onset", 2)
    with pytest.raises(ValueError):
        SyllablePart("rime")
