"""Environment-driven settings for the syllable counter."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from syllable_heuristics.core.errors import ConfigurationError

DEFAULT_LOCALE = "en_US"

_DEFAULT_LOCALE_ENV = "SYLLABLES_DEFAULT_LOCALE"
_STRICT_LOCALES_ENV = "SYLLABLES_STRICT_LOCALES"
_TRACE_ENV = "SYLLABLES_TRACE"
_RULES_DIR_ENV = "SYLLABLES_RULES_DIR"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_flag(name: str, value: Optional[str], default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {value!r}")


@dataclass(frozen=True)
class CounterSettings:
    """Runtime knobs for :class:`~syllable_heuristics.core.counter.SyllableCounter`.

    ``strict_locales`` switches unknown locales from a logged fallback to the
    default table into a :class:`ConfigurationError`. ``trace`` turns on the
    per-word breakdown events; it never prints, it only feeds the trace
    collector and the debug logger.
    """

    default_locale: str = DEFAULT_LOCALE
    strict_locales: bool = False
    trace: bool = False
    rules_dir: Optional[Path] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "CounterSettings":
        env = os.environ if environ is None else environ

        default_locale = (env.get(_DEFAULT_LOCALE_ENV) or "").strip() or DEFAULT_LOCALE
        rules_dir_value = (env.get(_RULES_DIR_ENV) or "").strip()
        rules_dir = Path(rules_dir_value) if rules_dir_value else None
        if rules_dir is not None and not rules_dir.is_dir():
            raise ConfigurationError(
                f"{_RULES_DIR_ENV} points to {rules_dir_value!r}, which is not a directory"
            )

        return cls(
            default_locale=default_locale,
            strict_locales=_parse_flag(
                _STRICT_LOCALES_ENV, env.get(_STRICT_LOCALES_ENV), False
            ),
            trace=_parse_flag(_TRACE_ENV, env.get(_TRACE_ENV), False),
            rules_dir=rules_dir,
        )


__all__ = ["CounterSettings", "DEFAULT_LOCALE"]
