"""Boundary policies describing where an exclusion pattern may match."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Anchor(Enum):
    WHOLE_WORD = "whole_word"
    ANYWHERE = "anywhere"
    BEGIN_OR_END = "begin_or_end"
    BEGIN = "begin"
    END = "end"


@dataclass(frozen=True)
class BoundaryPolicy:
    """How a bare pattern becomes a regex fragment.

    ``disallowed`` lists letters that disqualify a match when they follow the
    pattern. The check character belongs to the match, so it is stripped
    together with the pattern. A pattern sitting at the very end of the word
    always matches.
    """

    name: str
    anchor: Anchor
    disallowed: str = ""
    plural: bool = False

    def fragment(self, pattern: str) -> str:
        word = f"(?:{pattern})"
        if self.plural:
            word = f"{word}s?"

        if self.anchor is Anchor.WHOLE_WORD:
            return f"^{word}$"
        if self.anchor is Anchor.END:
            return f"{word}$"

        if not self.disallowed:
            if self.anchor is Anchor.ANYWHERE:
                return word
            if self.anchor is Anchor.BEGIN:
                return f"^{word}"
            return f"^{word}|{word}$"

        follower = f"[^{self.disallowed}]"
        if self.anchor is Anchor.ANYWHERE:
            return f"{word}{follower}|{word}$"
        if self.anchor is Anchor.BEGIN:
            return f"^{word}{follower}|^{word}$"
        return f"^{word}{follower}|{word}$"


INDEPENDENT = BoundaryPolicy("independent", Anchor.WHOLE_WORD)
ANYWHERE_NO_N = BoundaryPolicy("anywhere_no_n", Anchor.ANYWHERE, "n")
ANYWHERE_NO_NS = BoundaryPolicy("anywhere_no_ns", Anchor.ANYWHERE, "ns")
ANYWHERE_NO_RS = BoundaryPolicy("anywhere_no_rs", Anchor.ANYWHERE, "rs")
ANYWHERE_NO_NR = BoundaryPolicy("anywhere_no_nr", Anchor.ANYWHERE, "nr")
ANYWHERE_NO_NRS = BoundaryPolicy("anywhere_no_nrs", Anchor.ANYWHERE, "nrs")
BEGIN_END_NO_S = BoundaryPolicy("begin_end_no_s", Anchor.BEGIN_OR_END, "s")
BEGIN_NO_S = BoundaryPolicy("begin_no_s", Anchor.BEGIN, "s")
BEGIN_END_NO_NR = BoundaryPolicy("begin_end_no_nr", Anchor.BEGIN_OR_END, "nr")
BEGIN_END_NO_NRS = BoundaryPolicy("begin_end_no_nrs", Anchor.BEGIN_OR_END, "nrs")
WORD_PART = BoundaryPolicy("word_part", Anchor.ANYWHERE)
COMPOUND = BoundaryPolicy("compound", Anchor.BEGIN_OR_END)
COMPOUND_END = BoundaryPolicy("compound_end", Anchor.END)
END_PLURAL = BoundaryPolicy("end_plural", Anchor.BEGIN_OR_END, plural=True)


@dataclass(frozen=True)
class CategorySpec:
    """A rule-table category name bound to its boundary policy."""

    name: str
    policy: BoundaryPolicy


# Application order matters: later categories only see what earlier ones
# left behind.
EXCLUSION_CATEGORIES: Tuple[CategorySpec, ...] = (
    CategorySpec("exclusionWords", INDEPENDENT),
    CategorySpec("exclusionCompounds", COMPOUND),
    CategorySpec("exclusionCompoundEnds", COMPOUND_END),
    CategorySpec("exclusionWordParts", WORD_PART),
    CategorySpec("exclusionsEndPlural", END_PLURAL),
    CategorySpec("exclusionsBeginEndNoS", BEGIN_END_NO_S),
    CategorySpec("exclusionsBeginNoS", BEGIN_NO_S),
    CategorySpec("exclusionsNoN", ANYWHERE_NO_N),
    CategorySpec("exclusionsNoNS", ANYWHERE_NO_NS),
    CategorySpec("exclusionsNoRS", ANYWHERE_NO_RS),
    CategorySpec("exclusionsNoNR", ANYWHERE_NO_NR),
    CategorySpec("exclusionsBeginEndNoNR", BEGIN_END_NO_NR),
    CategorySpec("exclusionsNoNRS", ANYWHERE_NO_NRS),
    CategorySpec("exclusionsBeginEndNoNRS", BEGIN_END_NO_NRS),
)

ADD_CATEGORY = "addSyllables"
SUBTRACT_CATEGORY = "subtractSyllables"


def category_spec(name: str) -> CategorySpec:
    for spec in EXCLUSION_CATEGORIES:
        if spec.name == name:
            return spec
    raise KeyError(name)


__all__ = [
    "Anchor",
    "BoundaryPolicy",
    "CategorySpec",
    "EXCLUSION_CATEGORIES",
    "ADD_CATEGORY",
    "SUBTRACT_CATEGORY",
    "category_spec",
    "INDEPENDENT",
    "ANYWHERE_NO_N",
    "ANYWHERE_NO_NS",
    "ANYWHERE_NO_RS",
    "ANYWHERE_NO_NR",
    "ANYWHERE_NO_NRS",
    "BEGIN_END_NO_S",
    "BEGIN_NO_S",
    "BEGIN_END_NO_NR",
    "BEGIN_END_NO_NRS",
    "WORD_PART",
    "COMPOUND",
    "COMPOUND_END",
    "END_PLURAL",
]
