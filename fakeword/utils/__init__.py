"""Utility helpers shared across the :mod:`fakeword` package."""

from __future__ import annotations

from .logging_config import configure_logging
from .observability import (
    StructuredLoggerAdapter,
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
)
from .sampling import weighted_random_choice
from .telemetry import StructuredTelemetry, TelemetryLogger

__all__ = [
    "StructuredLoggerAdapter",
    "StructuredTelemetry",
    "TelemetryLogger",
    "add_span_attributes",
    "configure_logging",
    "create_counter",
    "create_histogram",
    "get_logger",
    "record_exception",
    "start_span",
    "weighted_random_choice",
]
