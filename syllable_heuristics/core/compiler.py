"""Compile locale rule tables into reusable regular-expression matchers."""

from __future__ import annotations

import re
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from syllable_heuristics.utils.observability import create_counter, get_logger
from syllable_heuristics.utils.syllables import DEFAULT_VOWELS

from .errors import RuleDataError
from .policies import (
    ADD_CATEGORY,
    EXCLUSION_CATEGORIES,
    SUBTRACT_CATEGORY,
    BoundaryPolicy,
    CategorySpec,
)
from .rules import LocaleRuleSet, LocaleRuleStore, Rule

_FLAGS = re.IGNORECASE

_metric_compile_cache = create_counter(
    "syllable_compile_cache_total",
    "Locale matcher cache lookups, by outcome.",
    label_names=("outcome",),
)


def count_matches(regex: Pattern[str], word: str) -> int:
    """Count the non-empty matches of ``regex`` in ``word``.

    Zero-width hits (lookarounds, ``\\b``) consume nothing, so they neither
    score nor get stripped.
    """

    return sum(1 for match in regex.finditer(word) if match.end() > match.start())


@dataclass(frozen=True)
class RuleMatcher:
    """A single rule compiled under its category's boundary policy."""

    rule: Rule
    regex: Pattern[str]

    def count(self, word: str) -> int:
        return count_matches(self.regex, word)


@dataclass(frozen=True)
class CompiledCategory:
    """All rules of one exclusion category.

    ``matchers`` score a word rule by rule; ``combined`` is the single
    alternation used to strip every matched occurrence in one pass.
    """

    name: str
    policy: BoundaryPolicy
    matchers: Tuple[RuleMatcher, ...]
    combined: Optional[Pattern[str]]

    def score(self, word: str) -> Tuple[int, int]:
        """Return ``(match_count, syllables)`` for ``word``."""

        matches = 0
        syllables = 0
        for matcher in self.matchers:
            hits = matcher.count(word)
            if hits:
                matches += hits
                syllables += hits * matcher.rule.syllables
        return matches, syllables

    def strip(self, word: str) -> str:
        if self.combined is None:
            return word
        return self.combined.sub("", word)


@dataclass(frozen=True)
class CompiledLocale:
    """Everything the per-word pipeline needs for one language."""

    language: str
    categories: Tuple[CompiledCategory, ...]
    add: Optional[Pattern[str]]
    subtract: Optional[Pattern[str]]
    vowels: str = DEFAULT_VOWELS

    def category(self, name: str) -> CompiledCategory:
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)


def _compile_source(
    source: str,
    *,
    language: str,
    category: str,
    index: Optional[int] = None,
) -> Pattern[str]:
    try:
        return re.compile(source, _FLAGS)
    except re.error as error:
        raise RuleDataError(
            f"Invalid pattern {source!r}: {error}",
            locale=language,
            category=category,
            index=index,
        ) from error


def _load_rules(rule_set: LocaleRuleSet, category: str, *, weighted: bool) -> List[Rule]:
    entries = rule_set.category(category)
    if isinstance(entries, (str, bytes)) or not isinstance(entries, Sequence):
        raise RuleDataError(
            "Category must be a list of entries",
            locale=rule_set.language,
            category=category,
        )

    rules: List[Rule] = []
    for index, entry in enumerate(entries):
        rule = Rule.from_entry(
            entry,
            weighted=weighted,
            locale=rule_set.language,
            category=category,
            index=index,
        )
        bare = _compile_source(
            rule.pattern, language=rule_set.language, category=category, index=index
        )
        if bare.match("") is not None:
            raise RuleDataError(
                f"Pattern {rule.pattern!r} matches the empty string",
                locale=rule_set.language,
                category=category,
                index=index,
                entry=entry,
            )
        rules.append(rule)
    return rules


def _alternation(fragments: Sequence[str]) -> str:
    return "|".join(f"(?:{fragment})" for fragment in fragments)


def compile_category(rule_set: LocaleRuleSet, spec: CategorySpec) -> CompiledCategory:
    rules = _load_rules(rule_set, spec.name, weighted=True)
    fragments = [spec.policy.fragment(rule.pattern) for rule in rules]
    matchers = tuple(
        RuleMatcher(
            rule=rule,
            regex=_compile_source(
                fragment, language=rule_set.language, category=spec.name, index=index
            ),
        )
        for index, (rule, fragment) in enumerate(zip(rules, fragments))
    )
    combined = (
        _compile_source(_alternation(fragments), language=rule_set.language, category=spec.name)
        if fragments
        else None
    )
    return CompiledCategory(
        name=spec.name, policy=spec.policy, matchers=matchers, combined=combined
    )


def compile_adjustment(rule_set: LocaleRuleSet, category: str) -> Optional[Pattern[str]]:
    rules = _load_rules(rule_set, category, weighted=False)
    if not rules:
        return None
    return _compile_source(
        _alternation([rule.pattern for rule in rules]),
        language=rule_set.language,
        category=category,
    )


def compile_rule_set(
    rule_set: LocaleRuleSet,
    categories: Sequence[CategorySpec] = EXCLUSION_CATEGORIES,
) -> CompiledLocale:
    """Build the matchers for ``rule_set``.

    ``categories`` fixes the order in which the exclusion matcher applies
    them; callers should only pass something other than the default for
    experiments on the ordering itself.
    """

    return CompiledLocale(
        language=rule_set.language,
        categories=tuple(compile_category(rule_set, spec) for spec in categories),
        add=compile_adjustment(rule_set, ADD_CATEGORY),
        subtract=compile_adjustment(rule_set, SUBTRACT_CATEGORY),
        vowels=rule_set.vowels or DEFAULT_VOWELS,
    )


class PatternCompiler:
    """Locale-keyed, lazily populated cache of :class:`CompiledLocale` objects."""

    def __init__(
        self,
        store: Optional[LocaleRuleStore] = None,
        *,
        categories: Sequence[CategorySpec] = EXCLUSION_CATEGORIES,
    ) -> None:
        self.store = store or LocaleRuleStore()
        self.categories: Tuple[CategorySpec, ...] = tuple(categories)
        self._lock = threading.RLock()
        self._compiled: Dict[str, CompiledLocale] = {}
        self._logger = get_logger(__name__).bind(component="pattern_compiler")

    def compile(self, locale: Optional[str]) -> CompiledLocale:
        language = self.store.resolve(locale)

        with self._lock:
            cached = self._compiled.get(language)
        if cached is not None:
            _metric_compile_cache.labels(outcome="hit").inc()
            return cached

        _metric_compile_cache.labels(outcome="miss").inc()
        rule_set = self.store.get_rule_set(language)
        try:
            compiled = compile_rule_set(rule_set, self.categories)
        except RuleDataError as error:
            self._logger.error(
                "Syllable rules failed to compile",
                context={"language": language, "category": error.category, "index": error.index},
            )
            raise

        with self._lock:
            existing = self._compiled.get(language)
            if existing is not None:
                return existing
            self._compiled[language] = compiled

        self._logger.info(
            "Compiled syllable rules",
            context={
                "language": language,
                "rules": sum(len(category.matchers) for category in compiled.categories),
                "has_add": compiled.add is not None,
                "has_subtract": compiled.subtract is not None,
            },
        )
        return compiled

    def cached_languages(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._compiled))

    def clear_cache(self) -> None:
        self._logger.info("Clearing compiled syllable rules")
        with self._lock:
            self._compiled.clear()


__all__ = [
    "RuleMatcher",
    "count_matches",
    "CompiledCategory",
    "CompiledLocale",
    "PatternCompiler",
    "compile_category",
    "compile_adjustment",
    "compile_rule_set",
]
