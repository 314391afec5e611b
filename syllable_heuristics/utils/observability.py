"""Logging, metrics and tracing helpers shared by the syllable counter.

Loggers render bound context inline as JSON so a single log line carries the
locale, word counts and similar details. Metrics go through
``prometheus_client`` and spans through the OpenTelemetry API; without an
OpenTelemetry SDK configured the spans are the API's built-in no-ops.
"""

from __future__ import annotations

import json
import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterable, Iterator, Optional, Type, TypeVar

from opentelemetry import trace
from prometheus_client import REGISTRY, Counter, Histogram

_TRACER_NAME = "syllable_heuristics"

_MetricT = TypeVar("_MetricT", Counter, Histogram)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that appends bound and per-call context as JSON."""

    def bind(self, **context: Any) -> "StructuredLoggerAdapter":
        return StructuredLoggerAdapter(self.logger, {**self.extra, **context})

    def process(self, msg: str, kwargs: Dict[str, Any]):
        context: Dict[str, Any] = dict(self.extra)
        extra_context = kwargs.pop("context", None)
        if isinstance(extra_context, dict):
            context.update(extra_context)
        if not context:
            return msg, kwargs
        return f"{msg} | {json.dumps(context, sort_keys=True, default=str)}", kwargs


def get_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    return StructuredLoggerAdapter(logging.getLogger(name), context)


def _register(
    metric_type: Type[_MetricT],
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]],
) -> _MetricT:
    try:
        return metric_type(name, documentation, labelnames=tuple(label_names or ()))
    except ValueError:
        # Already registered, e.g. when a module is imported twice under test.
        existing = REGISTRY._names_to_collectors.get(name)  # type: ignore[attr-defined]
        if isinstance(existing, metric_type):
            return existing
        raise


def create_counter(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Counter:
    """Return the process-wide Prometheus counter called ``name``."""

    return _register(Counter, name, documentation, label_names)


def create_histogram(
    name: str,
    documentation: str,
    label_names: Optional[Iterable[str]] = None,
) -> Histogram:
    """Return the process-wide Prometheus histogram called ``name``."""

    return _register(Histogram, name, documentation, label_names)


@contextmanager
def timed(histogram: Histogram) -> Iterator[None]:
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


@contextmanager
def start_span(name: str, attributes: Optional[Dict[str, Any]] = None):
    """Open an OpenTelemetry span named ``name`` with ``attributes``."""

    tracer = trace.get_tracer(_TRACER_NAME)
    with tracer.start_as_current_span(name) as span:
        if attributes:
            add_span_attributes(span, attributes)
        yield span


def add_span_attributes(span: Any, attributes: Dict[str, Any]) -> None:
    for key, value in attributes.items():
        if value is None:
            continue
        span.set_attribute(str(key), value)


def record_exception(span: Any, error: BaseException) -> None:
    span.record_exception(error)
    span.set_status(trace.Status(trace.StatusCode.ERROR, str(error)))


__all__ = [
    "StructuredLoggerAdapter",
    "get_logger",
    "create_counter",
    "create_histogram",
    "timed",
    "start_span",
    "add_span_attributes",
    "record_exception",
]
