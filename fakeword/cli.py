"""Command-line entry point for generating fake words."""

from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional, Sequence

from fakeword.app.app import FakeWordApp
from fakeword.config import FakeWordSettings
from fakeword.core import ConnectionMode, UnknownPhonemeError, WordGenConfig
from fakeword.utils.logging_config import configure_logging
from fakeword.utils.observability import get_logger

_logger = get_logger(__name__).bind(component="cli")


def _build_parser() -> argparse.ArgumentParser:
    defaults = WordGenConfig()
    parser = argparse.ArgumentParser(
        prog="fakeword",
        description="Generate invented words that follow English phonotactics.",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=int,
        default=10,
        help="Number of words to generate (default: 10).",
    )
    parser.add_argument(
        "--decay",
        type=float,
        default=defaults.word_length_decay,
        help="Word length decay; larger values give more consistent lengths.",
    )
    parser.add_argument(
        "--bias",
        type=float,
        default=defaults.word_length_bias,
        help="Word length bias; larger values give longer words.",
    )
    parser.add_argument(
        "--max",
        dest="max_syllables",
        type=int,
        default=defaults.word_length_max,
        help="Hard cap on syllables per word.",
    )
    parser.add_argument(
        "--mode",
        choices=[mode.value for mode in ConnectionMode],
        default=defaults.connection_mode.value,
        help="How syllables are chained (default: weighted).",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible output.")
    parser.add_argument(
        "--rebuild",
        action="store_true",
        help="Discard cached snapshots and rebuild from the dictionary.",
    )
    parser.add_argument("--json", action="store_true", help="Emit results as JSON.")
    parser.add_argument("--log-level", default=None, help="Logging level (default: INFO).")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = WordGenConfig(
            word_length_decay=args.decay,
            word_length_bias=args.bias,
            word_length_max=args.max_syllables,
            connection_mode=ConnectionMode(args.mode),
            seed=args.seed,
        ).validate()
    except ValueError as exc:
        parser.error(str(exc))

    settings = FakeWordSettings.from_env()
    try:
        app = FakeWordApp(settings, connection_mode=config.connection_mode)
        if args.rebuild:
            app.rebuild()
    except FileNotFoundError as exc:
        _logger.error("Corpus file missing", context={"path": str(exc.filename or exc)})
        print(f"fakeword: corpus file not found: {exc.filename or exc}", file=sys.stderr)
        return 2
    except UnknownPhonemeError as exc:
        print(f"fakeword: {exc}", file=sys.stderr)
        return 1

    words = app.generate_words(args.count, config)
    if args.json:
        print(json.dumps(words, ensure_ascii=False, indent=2))
    else:
        lines: List[str] = [f"{word['english']} ({word['ipa']})" for word in words]
        print("\n".join(lines))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
