"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import gradio as gr

from fakeword.core import ConnectionMode, WordGenConfig

if TYPE_CHECKING:  # pragma: no cover
    from fakeword.app.app import FakeWordApp


def format_words_markdown(words: List[Dict[str, Any]]) -> str:
    """Render generated words as a markdown table."""

    if not words:
        return "_No words generated._"

    lines = ["| # | Spelling | IPA | Syllables |", "| --- | --- | --- | --- |"]
    for index, word in enumerate(words, start=1):
        english = word.get("english") or "∅"
        ipa = word.get("ipa") or ""
        syllables = len(word.get("syllables") or [])
        lines.append(f"| {index} | **{english}** | /{ipa}/ | {syllables} |")
    return "\n".join(lines)


def _format_build_summary(snapshot: Dict[str, Any]) -> str:
    phases = snapshot.get("phases") or []
    if not phases:
        return ""
    output = ["#### Model build"]
    for phase in phases:
        source = (phase.get("metadata") or {}).get("source", "")
        suffix = f" ({source})" if source else ""
        output.append(f"- `{phase.get('name')}` took {float(phase.get('duration', 0.0)):.2f}s{suffix}")
    return "\n".join(output)


def create_interface(app: "FakeWordApp") -> gr.Blocks:
    """Construct the interactive Gradio Blocks UI."""

    def generate_interface(
        count: float,
        decay: float,
        bias: float,
        max_syllables: float,
        mode: str,
        seed: Optional[float],
    ) -> str:
        try:
            config = WordGenConfig(
                word_length_decay=float(decay),
                word_length_bias=float(bias),
                word_length_max=int(max_syllables),
                connection_mode=ConnectionMode(mode),
                seed=int(seed) if seed not in (None, "") else None,
            ).validate()
        except ValueError as exc:
            return f"**Invalid settings:** {exc}"

        words = app.generate_words(int(count), config)
        return format_words_markdown(words)

    defaults = WordGenConfig()
    with gr.Blocks(title="Fake Word Generator") as interface:
        gr.Markdown(
            "## Fake Word Generator\n"
            "Invented words that follow English sound patterns learned from the CMU dictionary."
        )
        with gr.Row():
            with gr.Column(scale=1):
                count = gr.Slider(1, 50, value=10, step=1, label="Words")
                decay = gr.Slider(
                    0.5, 5.0, value=defaults.word_length_decay, step=0.1,
                    label="Word length decay",
                )
                bias = gr.Slider(
                    0.0, 3.0, value=defaults.word_length_bias, step=0.1,
                    label="Word length bias",
                )
                max_syllables = gr.Slider(
                    0, 15, value=defaults.word_length_max, step=1,
                    label="Maximum syllables",
                )
                mode = gr.Radio(
                    [item.value for item in ConnectionMode],
                    value=defaults.connection_mode.value,
                    label="Syllable connections",
                )
                seed = gr.Number(value=None, precision=0, label="Seed (optional)")
                generate = gr.Button("Generate", variant="primary")
            with gr.Column(scale=2):
                results = gr.Markdown()
                gr.Markdown(_format_build_summary(app.telemetry.snapshot()))

        generate.click(
            generate_interface,
            inputs=[count, decay, bias, max_syllables, mode, seed],
            outputs=results,
        )

    return interface


__all__ = ["create_interface", "format_words_markdown"]
