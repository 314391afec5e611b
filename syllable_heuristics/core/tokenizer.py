"""Text normalisation and word splitting ahead of syllable counting."""

from __future__ import annotations

import re
from typing import List

SENTENCE_PUNCTUATION = re.compile(r"[.,!?:;¿¡]")
_WHITESPACE = re.compile(r"\s+")
# Stripped from either end of a token; apostrophes and hyphens inside a word stay.
_EDGE_PUNCTUATION = "\"'`´‘’“”«»‹›()[]{}<>–—-_/\\*…"


def replace_sentence_punctuation(text: str) -> str:
    return SENTENCE_PUNCTUATION.sub(" ", text)


def _split_words(text: str) -> List[str]:
    words = []
    for token in _WHITESPACE.split(text):
        cleaned = token.strip(_EDGE_PUNCTUATION)
        if cleaned:
            words.append(cleaned)
    return words


def get_words(text: str) -> List[str]:
    """Return the words of ``text`` in order.

    Sentence punctuation becomes whitespace, the text is split on whitespace,
    and quotes, brackets and dashes around each token are removed. Tokens
    that were only punctuation are dropped.
    """

    return _split_words(replace_sentence_punctuation(text))


__all__ = ["SENTENCE_PUNCTUATION", "get_words", "replace_sentence_punctuation"]
