"""Apply exclusion categories to a word, stripping what they account for."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .compiler import CompiledCategory, CompiledLocale


@dataclass(frozen=True)
class ExclusionState:
    """Accumulator threaded through the ordered exclusion categories."""

    word: str
    syllables: int = 0
    matched_categories: Tuple[str, ...] = ()


def apply_category(state: ExclusionState, category: CompiledCategory) -> ExclusionState:
    """Score ``state.word`` against one category and strip its matches.

    Each rule is scanned on its own and contributes ``hits * syllables``; a
    category that matches at all strips every occurrence of its combined
    alternation, even when its rules are worth zero syllables.
    """

    matches, syllables = category.score(state.word)
    if not matches:
        return state
    return ExclusionState(
        word=category.strip(state.word),
        syllables=state.syllables + syllables,
        matched_categories=state.matched_categories + (category.name,),
    )


def apply_exclusions(word: str, compiled: CompiledLocale) -> ExclusionState:
    state = ExclusionState(word=word)
    for category in compiled.categories:
        state = apply_category(state, category)
    return state


__all__ = ["ExclusionState", "apply_category", "apply_exclusions"]
