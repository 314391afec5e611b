import pytest

from syllable_heuristics.core.compiler import compile_category
from syllable_heuristics.core.policies import (
    EXCLUSION_CATEGORIES,
    INDEPENDENT,
    category_spec,
)
from syllable_heuristics.core.rules import LocaleRuleSet


def _category(name, *rules):
    entries = [{"word": word, "syllables": syllables} for word, syllables in rules]
    rule_set = LocaleRuleSet("xx", {name: entries})
    return compile_category(rule_set, category_spec(name))


def test_exclusion_categories_cover_fourteen_distinct_policies():
    names = [spec.name for spec in EXCLUSION_CATEGORIES]
    policies = {spec.policy for spec in EXCLUSION_CATEGORIES}

    assert len(names) == 14
    assert len(set(names)) == 14
    assert len(policies) == 14


def test_exclusion_categories_run_in_fixed_order():
    names = [spec.name for spec in EXCLUSION_CATEGORIES]

    assert names == [
        "exclusionWords",
        "exclusionCompounds",
        "exclusionCompoundEnds",
        "exclusionWordParts",
        "exclusionsEndPlural",
        "exclusionsBeginEndNoS",
        "exclusionsBeginNoS",
        "exclusionsNoN",
        "exclusionsNoNS",
        "exclusionsNoRS",
        "exclusionsNoNR",
        "exclusionsBeginEndNoNR",
        "exclusionsNoNRS",
        "exclusionsBeginEndNoNRS",
    ]


def test_fragment_wraps_pattern_so_alternatives_stay_anchored():
    assert INDEPENDENT.fragment("a|b") == "^(?:a|b)$"


@pytest.mark.parametrize(
    "category, word, expected_matches",
    [
        ("exclusionWords", "cat", 1),
        ("exclusionWords", "cats", 0),
        ("exclusionWords", "bobcat", 0),
    ],
)
def test_independent_matches_whole_word_only(category, word, expected_matches):
    compiled = _category(category, ("cat", 1))

    assert compiled.score(word)[0] == expected_matches


@pytest.mark.parametrize(
    "category, matching, rejected",
    [
        ("exclusionsNoN", ["beat", "beas", "bear", "tea"], ["bean"]),
        ("exclusionsNoNS", ["beat", "bear", "tea"], ["bean", "beas"]),
        ("exclusionsNoRS", ["beat", "bean", "tea"], ["bear", "beas"]),
        ("exclusionsNoNR", ["beat", "beas", "tea"], ["bean", "bear"]),
        ("exclusionsNoNRS", ["beat", "tea"], ["bean", "bear", "beas"]),
    ],
)
def test_anywhere_policies_reject_disqualifying_followers(category, matching, rejected):
    compiled = _category(category, ("ea", 1))

    for word in matching:
        assert compiled.score(word) == (1, 1), word
    for word in rejected:
        assert compiled.score(word) == (0, 0), word


@pytest.mark.parametrize(
    "category, matching, rejected",
    [
        ("exclusionsBeginEndNoS", ["eat", "ear", "tea"], ["eas", "beat"]),
        ("exclusionsBeginEndNoNR", ["eat", "eas", "tea"], ["ean", "ear", "beat"]),
        ("exclusionsBeginEndNoNRS", ["eat", "tea"], ["ean", "ear", "eas", "beat"]),
    ],
)
def test_begin_end_policies_only_match_at_the_edges(category, matching, rejected):
    compiled = _category(category, ("ea", 1))

    for word in matching:
        assert compiled.score(word) == (1, 1), word
    for word in rejected:
        assert compiled.score(word) == (0, 0), word


def test_begin_no_s_matches_start_only():
    compiled = _category("exclusionsBeginNoS", ("ea", 1))

    assert compiled.score("eat") == (1, 1)
    assert compiled.score("ea") == (1, 1)
    assert compiled.score("eas") == (0, 0)
    assert compiled.score("tea") == (0, 0)


def test_disqualifying_check_character_is_stripped_with_the_match():
    compiled = _category("exclusionsNoN", ("ea", 1))

    assert compiled.strip("beat") == "b"
    assert compiled.strip("tea") == "t"
    assert compiled.strip("bean") == "bean"


def test_word_part_matches_every_occurrence():
    compiled = _category("exclusionWordParts", ("ea", 1))

    assert compiled.score("teatea") == (2, 2)
    assert compiled.strip("teatea") == "tt"


def test_compound_matches_start_or_end():
    compiled = _category("exclusionCompounds", ("some", 1))

    assert compiled.score("somebody") == (1, 1)
    assert compiled.score("handsome") == (1, 1)
    assert compiled.score("wholesomeness") == (0, 0)
    assert compiled.strip("handsome") == "hand"


def test_compound_end_matches_end_only():
    compiled = _category("exclusionCompoundEnds", ("like", 1))

    assert compiled.score("childlike") == (1, 1)
    assert compiled.score("likely") == (0, 0)


def test_end_plural_accepts_optional_trailing_s():
    compiled = _category("exclusionsEndPlural", ("shoe", 1))

    assert compiled.score("shoe") == (1, 1)
    assert compiled.score("snowshoes") == (1, 1)
    assert compiled.strip("snowshoes") == "snow"
    assert compiled.strip("shoelace") == "lace"


def test_matching_ignores_case():
    compiled = _category("exclusionsNoN", ("ea", 1))

    assert compiled.score("BEAT") == (1, 1)
    assert compiled.score("BEAN") == (0, 0)


def test_category_sums_contributions_rule_by_rule():
    compiled = _category("exclusionWordParts", ("ab", 1), ("cd", 2))

    assert compiled.score("abcdab") == (3, 4)
    assert compiled.strip("abcdab") == ""


def test_empty_category_matches_nothing():
    rule_set = LocaleRuleSet("xx", {})
    compiled = compile_category(rule_set, category_spec("exclusionsNoN"))

    assert compiled.matchers == ()
    assert compiled.combined is None
    assert compiled.score("anything") == (0, 0)
    assert compiled.strip("anything") == "anything"
