"""Streamlit front-end for the fakeword project."""

from __future__ import annotations

import streamlit as st

from fakeword.app.app import FakeWordApp
from fakeword.app.ui.gradio import format_words_markdown
from fakeword.core import ConnectionMode, WordGenConfig
from fakeword.utils.logging_config import configure_logging


@st.cache_resource(show_spinner=False)
def _load_app() -> FakeWordApp:
    """Initialise and cache the model-loading facade."""

    configure_logging()
    return FakeWordApp()


def _render_styles() -> None:
    st.markdown(
        """
    <style>
    .fw-hero {text-align: center; padding-bottom: 16px;}
    .fw-hero h2 {font-size: 2.1rem; margin-bottom: 0.25rem;}
    .fw-hero p {color: #4b5563; font-size: 1rem;}
    .fw-empty {margin: 0; color: #94a3b8; font-style: italic;}
    </style>
    """,
        unsafe_allow_html=True,
    )


def main() -> None:
    """Render the interactive Streamlit experience."""

    st.set_page_config(page_title="Fake Word Generator", layout="wide")
    _render_styles()

    with st.spinner("Loading the pronouncing dictionary models..."):
        app = _load_app()

    st.markdown(
        "<div class='fw-hero'><h2>Fake Word Generator</h2>"
        "<p>Invented words that follow English sound patterns.</p></div>",
        unsafe_allow_html=True,
    )

    defaults = WordGenConfig()
    with st.form("generate_words"):
        col1, col2 = st.columns(2)
        with col1:
            count = st.slider("Words", min_value=1, max_value=50, value=10, step=1)
            max_syllables = st.slider(
                "Maximum syllables",
                min_value=0,
                max_value=15,
                value=defaults.word_length_max,
                step=1,
            )
            mode = st.radio(
                "Syllable connections",
                options=[item.value for item in ConnectionMode],
                index=[item.value for item in ConnectionMode].index(defaults.connection_mode.value),
                horizontal=True,
            )
        with col2:
            decay = st.slider(
                "Word length decay",
                min_value=0.5,
                max_value=5.0,
                value=float(defaults.word_length_decay),
                step=0.1,
            )
            bias = st.slider(
                "Word length bias",
                min_value=0.0,
                max_value=3.0,
                value=float(defaults.word_length_bias),
                step=0.1,
            )
            seed_text = st.text_input("Seed (optional)", help="Integer seed for repeatable output.")

        submitted = st.form_submit_button("Generate")

    results_placeholder = st.empty()
    if not submitted:
        results_placeholder.markdown(
            "<p class='fw-empty'>Pick your settings and click <strong>Generate</strong>.</p>",
            unsafe_allow_html=True,
        )
        return

    try:
        config = WordGenConfig(
            word_length_decay=decay,
            word_length_bias=bias,
            word_length_max=int(max_syllables),
            connection_mode=ConnectionMode(mode),
            seed=int(seed_text) if seed_text.strip() else None,
        ).validate()
    except ValueError as exc:
        results_placeholder.error(f"Invalid settings: {exc}")
        return

    words = app.generate_words(int(count), config)
    results_placeholder.markdown(format_words_markdown(words))


if __name__ == "__main__":
    main()
