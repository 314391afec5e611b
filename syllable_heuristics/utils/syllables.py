"""Vowel-cluster syllable estimate shared by every locale."""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Pattern


__all__ = ["DEFAULT_VOWELS", "count_vowel_clusters"]


DEFAULT_VOWELS = "aáäâeéëêiíïîoóöôuúüûy"


@lru_cache(maxsize=32)
def _separator_pattern(vowels: str) -> Pattern[str]:
    return re.compile(f"[^{re.escape(vowels)}]+")


def count_vowel_clusters(word: str, vowels: str = DEFAULT_VOWELS) -> int:
    """Count maximal runs of ``vowels`` in ``word``.

    Anything outside the vowel alphabet separates clusters, so ``"queue"``
    has one cluster and ``"rhythm"`` one (the ``y``). An empty word has none.
    """

    normalized = word.lower()
    if not normalized:
        return 0
    segments = _separator_pattern(vowels.lower()).split(normalized)
    return sum(1 for segment in segments if segment)
