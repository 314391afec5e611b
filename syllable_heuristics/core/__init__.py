"""Core rule compilation and counting pipeline."""

from .adjustments import Adjustment, adjust
from .compiler import CompiledCategory, CompiledLocale, PatternCompiler, compile_rule_set
from .counter import (
    SyllableCounter,
    WordBreakdown,
    count_syllables,
    get_default_counter,
    supported_locales,
)
from .errors import (
    ConfigurationError,
    InvalidInputError,
    RuleDataError,
    SyllableCountError,
)
from .exclusions import ExclusionState, apply_exclusions
from .policies import EXCLUSION_CATEGORIES, BoundaryPolicy, CategorySpec
from .rules import LocaleRuleSet, LocaleRuleStore, Rule, language_of
from .tokenizer import get_words

__all__ = [
    "Adjustment",
    "adjust",
    "CompiledCategory",
    "CompiledLocale",
    "PatternCompiler",
    "compile_rule_set",
    "SyllableCounter",
    "WordBreakdown",
    "count_syllables",
    "get_default_counter",
    "supported_locales",
    "ConfigurationError",
    "InvalidInputError",
    "RuleDataError",
    "SyllableCountError",
    "ExclusionState",
    "apply_exclusions",
    "EXCLUSION_CATEGORIES",
    "BoundaryPolicy",
    "CategorySpec",
    "LocaleRuleSet",
    "LocaleRuleStore",
    "Rule",
    "language_of",
    "get_words",
]
