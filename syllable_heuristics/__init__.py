"""Locale-driven, rule-based syllable counting for readability scoring."""

from .core import (
    ConfigurationError,
    InvalidInputError,
    LocaleRuleStore,
    RuleDataError,
    SyllableCountError,
    SyllableCounter,
    WordBreakdown,
    count_syllables,
    supported_locales,
)

__all__ = [
    "SyllableCounter",
    "WordBreakdown",
    "LocaleRuleStore",
    "count_syllables",
    "supported_locales",
    "SyllableCountError",
    "ConfigurationError",
    "RuleDataError",
    "InvalidInputError",
]
