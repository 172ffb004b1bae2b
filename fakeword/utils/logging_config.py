"""Helpers for configuring consistent project logging output."""

from __future__ import annotations

import logging
import os
from typing import Optional

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_CONFIGURED = False

LOG_LEVEL_ENV = "FAKEWORD_LOG_LEVEL"


def _resolve_level(level: str | int | None) -> int:
    if level is None:
        return logging.INFO
    if isinstance(level, int):
        return level
    try:
        return int(level)
    except (TypeError, ValueError):
        normalized = str(level).strip().upper()
        resolved = getattr(logging, normalized, logging.INFO)
        return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: Optional[str | int] = None, *, force: bool = False) -> int:
    """Initialise root logging handlers and return the effective level.

    Corpus parsing and graph building can take a while on the full
    dictionary, so the default ``INFO`` level surfaces each build phase.
    ``FAKEWORD_LOG_LEVEL`` is consulted when ``level`` is not given.
    """

    global _CONFIGURED

    resolved_level = _resolve_level(level if level is not None else os.environ.get(LOG_LEVEL_ENV))
    if _CONFIGURED and not force:
        logging.getLogger("fakeword").setLevel(resolved_level)
        return resolved_level

    logging.basicConfig(level=resolved_level, format=_DEFAULT_FORMAT, force=force)
    logging.getLogger("fakeword").setLevel(resolved_level)
    _CONFIGURED = True
    return resolved_level


__all__ = ["LOG_LEVEL_ENV", "configure_logging"]
