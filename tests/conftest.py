import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from syllable_heuristics.core import LocaleRuleStore, SyllableCounter
from syllable_heuristics.utils.settings import CounterSettings


TOY_TABLE = {
    "exclusionWords": [{"word": "stone", "syllables": 3}],
    "exclusionWordParts": [{"word": "qu", "syllables": 0}],
    "addSyllables": ["ia"],
    "subtractSyllables": ["ee$"],
}


@pytest.fixture
def toy_settings():
    """Settings whose default locale is the toy ``xx`` table."""

    return CounterSettings(default_locale="xx")


@pytest.fixture
def toy_store(toy_settings):
    """Rule store serving only the in-memory ``xx`` table."""

    return LocaleRuleStore({"xx": TOY_TABLE}, settings=toy_settings, include_bundled=False)


@pytest.fixture
def toy_counter(toy_store):
    return SyllableCounter(toy_store)


@pytest.fixture
def english_counter():
    """Counter backed by the bundled tables with a fixed English default."""

    return SyllableCounter(LocaleRuleStore(settings=CounterSettings()))
