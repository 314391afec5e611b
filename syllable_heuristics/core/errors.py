"""Exception types raised by the syllable counting pipeline."""

from __future__ import annotations

from typing import Any, Optional


class SyllableCountError(Exception):
    """Base class for every error surfaced by :mod:`syllable_heuristics`."""


class ConfigurationError(SyllableCountError):
    """Raised when settings or locale resolution cannot be satisfied."""


class RuleDataError(SyllableCountError, ValueError):
    """Raised when a locale table contains an entry that cannot be compiled."""

    def __init__(
        self,
        message: str,
        *,
        locale: Optional[str] = None,
        category: Optional[str] = None,
        index: Optional[int] = None,
        entry: Any = None,
    ) -> None:
        self.locale = locale
        self.category = category
        self.index = index
        self.entry = entry

        location = [
            f"{label}={value}"
            for label, value in (("locale", locale), ("category", category), ("index", index))
            if value is not None
        ]
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)


class InvalidInputError(SyllableCountError, TypeError):
    """Raised when callers pass something other than a string to count."""


__all__ = [
    "SyllableCountError",
    "ConfigurationError",
    "RuleDataError",
    "InvalidInputError",
]
