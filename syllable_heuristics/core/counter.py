"""Text-level syllable counting built on the per-word rule pipeline."""

from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from syllable_heuristics.utils.observability import (
    add_span_attributes,
    create_counter,
    create_histogram,
    get_logger,
    record_exception,
    start_span,
    timed,
)
from syllable_heuristics.utils.settings import CounterSettings
from syllable_heuristics.utils.syllables import count_vowel_clusters
from syllable_heuristics.utils.telemetry import SyllableTrace, TraceLogger

from .adjustments import adjust
from .compiler import CompiledLocale, PatternCompiler
from .errors import InvalidInputError, SyllableCountError
from .exclusions import apply_exclusions
from .rules import LocaleRuleStore
from .tokenizer import get_words


@dataclass(frozen=True)
class WordBreakdown:
    """How one word's syllable count was reached."""

    word: str
    language: str
    remainder: str
    exclusion_syllables: int
    matched_categories: Tuple[str, ...]
    vowel_clusters: int
    additions: int
    subtractions: int

    @property
    def total(self) -> int:
        # May be negative; callers needing a floor clamp the aggregate.
        return self.exclusion_syllables + self.vowel_clusters + self.additions - self.subtractions

    def as_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["matched_categories"] = list(self.matched_categories)
        payload["total"] = self.total
        return payload


def _require_text(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(f"{label} must be a string, got {type(value).__name__}")
    return value


class SyllableCounter:
    """Count syllables in text using locale rule tables.

    The counter is safe to share between threads: compiled matchers are
    cached per language and never mutated, and every call works on its own
    words. With a trace attached, traced calls run one at a time so each
    trace run holds exactly one call's words.
    """

    def __init__(
        self,
        store: Optional[LocaleRuleStore] = None,
        *,
        compiler: Optional[PatternCompiler] = None,
        settings: Optional[CounterSettings] = None,
        trace: Optional[SyllableTrace] = None,
    ) -> None:
        if settings is None:
            settings = store.settings if store is not None else CounterSettings.from_env()
        self.settings = settings
        self.store = store or LocaleRuleStore(settings=settings)
        self.compiler = compiler or PatternCompiler(self.store)

        if trace is None and settings.trace:
            trace = SyllableTrace(listeners=[TraceLogger()])
        self.trace = trace
        # One trace run at a time; concurrent traced calls would reset each other.
        self._trace_lock = threading.Lock()

        self._logger = get_logger(__name__).bind(component="syllable_counter")
        self._metric_requests = create_counter(
            "syllable_count_requests_total",
            "Text-level syllable count requests.",
        )
        self._metric_failures = create_counter(
            "syllable_count_failures_total",
            "Syllable count requests that raised an error.",
        )
        self._metric_words = create_counter(
            "syllable_count_words_total",
            "Words run through the syllable pipeline.",
        )
        self._metric_latency = create_histogram(
            "syllable_count_seconds",
            "Latency of text-level syllable counts.",
        )

    # ------------------------------------------------------------------
    # Per-word pipeline
    # ------------------------------------------------------------------
    def _breakdown(self, word: str, compiled: CompiledLocale) -> WordBreakdown:
        state = apply_exclusions(word.lower(), compiled)
        adjustment = adjust(state.word, compiled)
        breakdown = WordBreakdown(
            word=word,
            language=compiled.language,
            remainder=state.word,
            exclusion_syllables=state.syllables,
            matched_categories=state.matched_categories,
            vowel_clusters=count_vowel_clusters(state.word, compiled.vowels),
            additions=adjustment.additions,
            subtractions=adjustment.subtractions,
        )
        if self.trace is not None:
            self.trace.record_word(breakdown.as_dict())
        return breakdown

    def _compile(self, locale: Optional[str]) -> CompiledLocale:
        if locale is not None:
            _require_text(locale, "locale")
        return self.compiler.compile(locale)

    def breakdown(self, word: str, locale: Optional[str] = None) -> WordBreakdown:
        """Run a single token through the pipeline without tokenizing it."""

        word = _require_text(word, "word")
        compiled = self._compile(locale)
        if self.trace is None:
            return self._breakdown(word, compiled)
        with self._trace_lock:
            return self._breakdown(word, compiled)

    def count_word(self, word: str, locale: Optional[str] = None) -> int:
        return self.breakdown(word, locale).total

    def analyze(self, text: str, locale: Optional[str] = None) -> List[WordBreakdown]:
        """Return one :class:`WordBreakdown` per word of ``text``, in order."""

        text = _require_text(text, "text")
        compiled = self._compile(locale)
        words = get_words(text)

        if self.trace is None:
            return [self._breakdown(word, compiled) for word in words]

        with self._trace_lock:
            self.trace.start("count_syllables")
            with self.trace.timer("analyze"):
                breakdowns = [self._breakdown(word, compiled) for word in words]
            self.trace.increment("words", len(breakdowns))
        return breakdowns

    # ------------------------------------------------------------------
    # Text-level entry point
    # ------------------------------------------------------------------
    def count(self, text: str, locale: Optional[str] = None) -> int:
        """Return the summed syllable count of every word in ``text``."""

        self._metric_requests.inc()
        with start_span("syllables.count", {"syllables.locale": locale}) as span:
            try:
                with timed(self._metric_latency):
                    breakdowns = self.analyze(text, locale)
            except SyllableCountError as error:
                self._metric_failures.inc()
                record_exception(span, error)
                self._logger.error(
                    "Syllable count failed",
                    context={
                        "locale": locale,
                        "error_type": type(error).__name__,
                        "error": str(error),
                    },
                )
                raise

            total = sum(breakdown.total for breakdown in breakdowns)
            add_span_attributes(
                span,
                {"syllables.words": len(breakdowns), "syllables.total": total},
            )

        self._metric_words.inc(len(breakdowns))
        self._logger.debug(
            "Counted syllables",
            context={"locale": locale, "words": len(breakdowns), "total": total},
        )
        return total

    def supported_locales(self) -> List[str]:
        return self.store.available_languages()

    def clear_cache(self) -> None:
        self.compiler.clear_cache()
        self.store.clear_cache()


_default_counter: Optional[SyllableCounter] = None
_default_lock = threading.Lock()


def get_default_counter() -> SyllableCounter:
    """Return the process-wide counter configured from the environment."""

    global _default_counter

    if _default_counter is None:
        with _default_lock:
            if _default_counter is None:
                _default_counter = SyllableCounter()
    return _default_counter


def count_syllables(text: str, locale: Optional[str] = None) -> int:
    """Count the syllables in ``text`` for ``locale`` (default ``en_US``)."""

    return get_default_counter().count(text, locale)


def supported_locales() -> List[str]:
    return get_default_counter().supported_locales()


__all__ = [
    "SyllableCounter",
    "WordBreakdown",
    "count_syllables",
    "get_default_counter",
    "supported_locales",
]
