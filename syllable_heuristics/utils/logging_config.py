"""Opt-in log output for scripts and services that embed the syllable counter."""

from __future__ import annotations

import logging
import os
from typing import Optional

from syllable_heuristics.core.errors import ConfigurationError

_DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_LOG_LEVEL_ENV = "SYLLABLES_LOG_LEVEL"
_PACKAGE_LOGGER = "syllable_heuristics"
_CONFIGURED = False


def _level_from(value: str | int | None) -> int:
    """Turn ``"debug"``, ``"10"`` or ``10`` into a logging level number.

    Unset or blank means ``INFO``; an unknown name is a configuration error
    rather than a silent fallback.
    """

    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value

    name = str(value).strip().upper()
    if not name:
        return logging.INFO
    if name.isdigit():
        return int(name)

    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ConfigurationError(f"Unknown log level {value!r} for {_LOG_LEVEL_ENV}")
    return level


def configure_logging(
    level: Optional[str | int] = None, *, force: bool = False
) -> logging.Logger:
    """Send the counter's structured log lines to stderr.

    Importing :mod:`syllable_heuristics` never touches logging; callers opt in
    here. The level comes from ``level``, then ``SYLLABLES_LOG_LEVEL``. A second
    call is ignored unless ``force`` replaces the handlers installed earlier.
    Returns the package logger.
    """

    global _CONFIGURED

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    if _CONFIGURED and not force:
        return package_logger

    resolved = _level_from(level if level is not None else os.environ.get(_LOG_LEVEL_ENV))
    logging.basicConfig(level=resolved, format=_DEFAULT_FORMAT, force=force)
    package_logger.setLevel(resolved)
    _CONFIGURED = True
    return package_logger


__all__ = ["configure_logging"]
