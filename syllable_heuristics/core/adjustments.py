"""Add/subtract corrections on top of the vowel-cluster estimate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Pattern

from .compiler import CompiledLocale, count_matches


@dataclass(frozen=True)
class Adjustment:
    additions: int = 0
    subtractions: int = 0

    @property
    def delta(self) -> int:
        return self.additions - self.subtractions


def _count(regex: Optional[Pattern[str]], word: str) -> int:
    if regex is None or not word:
        return 0
    return count_matches(regex, word)


def adjust(word: str, compiled: CompiledLocale) -> Adjustment:
    """Count add and subtract pattern hits in ``word``; each hit is worth one."""

    return Adjustment(
        additions=_count(compiled.add, word),
        subtractions=_count(compiled.subtract, word),
    )


__all__ = ["Adjustment", "adjust"]
