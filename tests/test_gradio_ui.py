from fakeword.app.ui.gradio import format_words_markdown


def test_empty_results_are_reported():
    assert format_words_markdown([]) == "_No words generated._"


def test_words_render_as_a_table():
    markdown = format_words_markdown(
        [
            {"english": "pay-per", "ipa": "peɪ pɛɹ", "syllables": ["P EY", "P ER"]},
            {"english": "", "ipa": "", "syllables": []},
        ]
    )
    lines = markdown.splitlines()
    assert lines[0] == "| # | Spelling | IPA | Syllables |"
    assert lines[2] == "| 1 | **pay-per** | /peɪ pɛɹ/ | 2 |"
    assert lines[3] == "| 2 | **∅** | // | 0 |"
