"""Utility helpers shared across the :mod:`syllable_heuristics` package."""

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
    timed,
)
from .syllables import DEFAULT_VOWELS, count_vowel_clusters
from .telemetry import SyllableTrace, TraceLogger

__all__ = [
    "configure_logging",
    "StructuredLoggerAdapter",
    "add_span_attributes",
    "create_counter",
    "create_histogram",
    "get_logger",
    "record_exception",
    "start_span",
    "timed",
    "DEFAULT_VOWELS",
    "count_vowel_clusters",
    "SyllableTrace",
    "TraceLogger",
]
