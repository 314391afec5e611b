"""Opt-in tracing of per-word syllable decisions."""

from __future__ import annotations

import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

from .observability import get_logger

TraceListener = Callable[[str, Dict[str, Any]], None]


class SyllableTrace:
    """Collects word breakdowns, counters and timings for inspection.

    A trace is bounded to ``max_events`` word events; older events are
    dropped first. Listeners receive every event as ``(event_type, payload)``
    and a failing listener is logged and skipped so tracing never changes a
    count.
    """

    def __init__(
        self,
        *,
        max_events: int = 512,
        listeners: Optional[Iterable[TraceListener]] = None,
        time_fn: Optional[Callable[[], float]] = None,
    ) -> None:
        self._max_events = max(1, int(max_events))
        self._time_fn = time_fn or time.perf_counter
        self._lock = threading.RLock()
        self._listeners: List[TraceListener] = list(listeners or [])
        self._trace_id = 0
        self._logger = get_logger(__name__).bind(component="syllable_trace")
        self._reset_locked()

    def _reset_locked(self) -> None:
        self._name: Optional[str] = None
        self._words: List[Dict[str, Any]] = []
        self._counters: Dict[str, int] = {}
        self._timings: Dict[str, List[float]] = {}

    def _emit(self, event_type: str, payload: Dict[str, Any]) -> None:
        with self._lock:
            listeners: Tuple[TraceListener, ...] = tuple(self._listeners)
        for listener in listeners:
            try:
                listener(event_type, dict(payload))
            except Exception:
                self._logger.exception(
                    "Trace listener failed", context={"event": event_type}
                )

    def start(self, name: str) -> int:
        with self._lock:
            self._trace_id += 1
            self._reset_locked()
            self._name = name
            trace_id = self._trace_id
        self._emit("trace_started", {"trace_id": trace_id, "name": name})
        return trace_id

    def record_word(self, breakdown: Mapping[str, Any]) -> None:
        event = dict(breakdown)
        with self._lock:
            self._words.append(event)
            if len(self._words) > self._max_events:
                self._words = self._words[-self._max_events :]
        self._emit("word", event)

    def increment(self, name: str, amount: int = 1) -> None:
        with self._lock:
            value = self._counters.get(name, 0) + int(amount)
            self._counters[name] = value
        self._emit("counter", {"name": name, "delta": int(amount), "value": value})

    @contextmanager
    def timer(self, name: str) -> Iterator[None]:
        start = self._time_fn()
        try:
            yield
        finally:
            duration = max(0.0, float(self._time_fn() - start))
            with self._lock:
                self._timings.setdefault(name, []).append(duration)
            self._emit("timing", {"name": name, "duration": duration})

    def snapshot(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "trace_id": self._trace_id,
                "name": self._name,
                "words": [dict(event) for event in self._words],
                "counters": dict(self._counters),
                "timings": {key: list(values) for key, values in self._timings.items()},
            }

    def add_listener(self, listener: TraceListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: TraceListener) -> None:
        with self._lock:
            self._listeners = [entry for entry in self._listeners if entry is not listener]


class TraceLogger:
    """Listener that writes trace events to the project logger at DEBUG."""

    def __init__(
        self,
        *,
        logger: Optional[logging.LoggerAdapter] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self._logger = logger or get_logger(__name__).bind(component="syllable_trace")
        self._level = level

    def __call__(self, event_type: str, payload: Dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(self._level):
            return
        label = payload.get("word") or payload.get("name") or payload.get("trace_id") or "event"
        self._logger.log(
            self._level,
            f"Syllable trace {event_type}: {label}",
            context={"trace.event": event_type, **payload},
        )


__all__ = ["SyllableTrace", "TraceLogger", "TraceListener"]
