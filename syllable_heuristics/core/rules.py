"""Locale rule tables consumed by the syllable counter."""

from __future__ import annotations

import json
import re
import threading
from collections import OrderedDict
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from syllable_heuristics.utils.observability import get_logger
from syllable_heuristics.utils.settings import CounterSettings

from .errors import ConfigurationError, InvalidInputError, RuleDataError

_LOCALE_SEPARATOR = re.compile(r"[_\-.@]")
_VOWELS_KEY = "vowels"
_MAX_REMEMBERED_FALLBACKS = 256


def language_of(locale: str) -> str:
    """Return the lower-case language key for ``locale`` (``en_US`` -> ``en``)."""

    if not isinstance(locale, str):
        raise InvalidInputError(f"locale must be a string, got {type(locale).__name__}")
    return _LOCALE_SEPARATOR.split(locale.strip(), maxsplit=1)[0].lower()


def _coerce_syllables(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class Rule:
    """A single exception pattern and the syllables it stands for."""

    pattern: str
    syllables: int = 1

    @classmethod
    def from_entry(
        cls,
        entry: Any,
        *,
        weighted: bool,
        locale: Optional[str] = None,
        category: Optional[str] = None,
        index: Optional[int] = None,
    ) -> "Rule":
        """Validate a raw table entry.

        Weighted entries (the exclusion categories) must be mappings carrying
        ``word`` and ``syllables``. Add/subtract entries may be bare pattern
        strings; any ``syllables`` they carry is ignored since each match is
        worth exactly one.
        """

        location = {"locale": locale, "category": category, "index": index, "entry": entry}

        if isinstance(entry, str) and not weighted:
            pattern = entry
        elif isinstance(entry, Mapping):
            pattern = entry.get("word")
        else:
            raise RuleDataError("Rule entry must be a mapping with a 'word' key", **location)

        if not isinstance(pattern, str) or not pattern:
            raise RuleDataError("Rule entry is missing a non-empty 'word'", **location)

        if not weighted:
            return cls(pattern=pattern, syllables=1)

        raw_syllables = entry.get("syllables")
        syllables = _coerce_syllables(raw_syllables)
        if syllables is None:
            raise RuleDataError(
                f"Rule 'syllables' must be an integer, got {raw_syllables!r}", **location
            )
        if syllables < 0:
            raise RuleDataError("Rule 'syllables' must not be negative", **location)
        return cls(pattern=pattern, syllables=syllables)


@dataclass(frozen=True)
class LocaleRuleSet:
    """Raw categorized rule lists for one language.

    Entries stay unvalidated here; the pattern compiler checks them category
    by category so a bad entry is reported against the category it lives in.
    """

    language: str
    categories: Mapping[str, Any] = field(default_factory=dict)
    vowels: Optional[str] = None

    @classmethod
    def from_mapping(cls, language: str, raw: Mapping[str, Any]) -> "LocaleRuleSet":
        vowels = raw.get(_VOWELS_KEY)
        if vowels is not None and (not isinstance(vowels, str) or not vowels):
            raise RuleDataError("'vowels' must be a non-empty string", locale=language)
        categories = {
            str(name): value for name, value in raw.items() if name != _VOWELS_KEY
        }
        return cls(language=language, categories=categories, vowels=vowels)

    @classmethod
    def empty(cls, language: str) -> "LocaleRuleSet":
        return cls(language=language)

    def category(self, name: str) -> Any:
        """Return the raw entries for ``name``; missing categories are empty."""

        value = self.categories.get(name)
        return [] if value is None else value


class LocaleRuleStore:
    """Resolve locales to rule tables.

    Tables come from, in order of precedence: the in-memory ``tables`` passed
    at construction, ``<language>.json`` files in ``rules_dir``, and the JSON
    tables bundled under ``syllable_heuristics/data``.
    """

    def __init__(
        self,
        tables: Optional[Mapping[str, Mapping[str, Any]]] = None,
        *,
        rules_dir: Optional[Path | str] = None,
        settings: Optional[CounterSettings] = None,
        include_bundled: bool = True,
    ) -> None:
        self.settings = settings or CounterSettings()
        if rules_dir is None:
            rules_dir = self.settings.rules_dir
        self.rules_dir: Optional[Path] = Path(rules_dir) if rules_dir else None
        self.include_bundled = include_bundled

        self._tables: Dict[str, Mapping[str, Any]] = {
            language_of(key): value for key, value in (tables or {}).items()
        }
        self._lock = threading.RLock()
        self._loaded: Dict[str, LocaleRuleSet] = {}
        self._resolved: Dict[str, str] = {}
        # Unknown language keys, oldest first; each is warned about once while remembered.
        self._fallbacks: "OrderedDict[str, None]" = OrderedDict()
        self._logger = get_logger(__name__).bind(component="locale_rule_store")

    # ------------------------------------------------------------------
    # Table discovery
    # ------------------------------------------------------------------
    def _override_path(self, language: str) -> Optional[Path]:
        if self.rules_dir is None:
            return None
        candidate = self.rules_dir / f"{language}.json"
        return candidate if candidate.is_file() else None

    def _bundled_resource(self, language: str):
        if not self.include_bundled or not language:
            return None
        data_dir = resources.files("syllable_heuristics").joinpath("data")
        resource = data_dir.joinpath(f"{language}.json")
        return resource if resource.is_file() else None

    def has_table(self, language: str) -> bool:
        if not language:
            return False
        return (
            language in self._tables
            or self._override_path(language) is not None
            or self._bundled_resource(language) is not None
        )

    def available_languages(self) -> List[str]:
        languages: Set[str] = set(self._tables)
        if self.rules_dir is not None and self.rules_dir.is_dir():
            languages.update(path.stem.lower() for path in self.rules_dir.glob("*.json"))
        if self.include_bundled:
            data_dir = resources.files("syllable_heuristics").joinpath("data")
            for entry in data_dir.iterdir():
                if entry.name.endswith(".json"):
                    languages.add(entry.name[: -len(".json")].lower())
        return sorted(languages)

    def _read_table(self, language: str) -> Mapping[str, Any]:
        if language in self._tables:
            return self._tables[language]

        source = self._override_path(language) or self._bundled_resource(language)
        if source is None:
            return {}

        try:
            with source.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as error:
            raise ConfigurationError(
                f"Could not read syllable table for {language!r} from {source}: {error}"
            ) from error

        if not isinstance(raw, Mapping):
            raise ConfigurationError(
                f"Syllable table for {language!r} must be a JSON object"
            )
        self._logger.debug(
            "Loaded syllable table",
            context={"language": language, "source": str(source), "categories": len(raw)},
        )
        return raw

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def resolve(self, locale: Optional[str]) -> str:
        """Return the language key whose table will serve ``locale``.

        ``None`` or a blank locale means the configured default. An unknown
        locale raises :class:`ConfigurationError` in strict mode and falls back
        to the default locale otherwise, logging one warning per language.

        Known languages are remembered, so once a table has been located no
        further file lookups happen for it.
        """

        default_language = language_of(self.settings.default_locale)
        if locale is None or (isinstance(locale, str) and not locale.strip()):
            return default_language

        language = language_of(locale)
        with self._lock:
            resolved = self._resolved.get(language)
            if resolved is None and language in self._fallbacks:
                self._fallbacks.move_to_end(language)
                return default_language
        if resolved is not None:
            return resolved

        if self.has_table(language):
            with self._lock:
                self._resolved[language] = language
            return language

        if self.settings.strict_locales:
            raise ConfigurationError(f"No syllable rules available for locale {locale!r}")

        with self._lock:
            first_warning = language not in self._fallbacks
            self._fallbacks[language] = None
            while len(self._fallbacks) > _MAX_REMEMBERED_FALLBACKS:
                self._fallbacks.popitem(last=False)
        if first_warning:
            self._logger.warning(
                "Unknown locale, using default syllable rules",
                context={"locale": locale, "fallback": default_language},
            )
        return default_language

    def get_rule_set(self, locale: Optional[str]) -> LocaleRuleSet:
        language = self.resolve(locale)

        with self._lock:
            cached = self._loaded.get(language)
        if cached is not None:
            return cached

        raw = self._read_table(language)
        rule_set = (
            LocaleRuleSet.from_mapping(language, raw) if raw else LocaleRuleSet.empty(language)
        )

        with self._lock:
            existing = self._loaded.get(language)
            if existing is not None:
                return existing
            self._loaded[language] = rule_set
        return rule_set

    def cached_languages(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(sorted(self._loaded))

    def clear_cache(self) -> None:
        with self._lock:
            self._loaded.clear()
            self._resolved.clear()
            self._fallbacks.clear()


__all__ = [
    "Rule",
    "LocaleRuleSet",
    "LocaleRuleStore",
    "language_of",
]
