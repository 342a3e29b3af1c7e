"""Configuration constants and .env loading.

WHY: The few tunables (input size bound, playback tolerance, log level,
default output formats) should be easy to find and override per
deployment without touching code.

HOW: python-dotenv loads the .env file on import. String settings are
module-level values read from the environment with defaults. Numeric
settings are read on call by load_* functions that raise a clear
ValueError on malformed values, so importing the package never fails.

RULES:
- MAX_SOURCE_WORDS bounds the alignment table (n * m cells); the core
  itself never enforces it, callers do
- PLAYBACK_EPSILON_S widens active chunk/word windows on both sides;
  NaN, inf and negative values are rejected
- LOG_LEVEL is applied only by the CLI; the library never configures
  logging handlers
- DEFAULT_FORMATS is a comma-separated list of formatter keys; empty
  means all registered formatters
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

from readalong_aligner.core.timing import finite_or_none

# Load .env from the working directory
load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got {!r}".format(name, raw))
    if value <= 0:
        raise ValueError("{} must be positive, got {}".format(name, value))
    return value


def _env_seconds(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        parsed = float(raw)
    except ValueError:
        raise ValueError("{} must be a number, got {!r}".format(name, raw))
    value = finite_or_none(parsed)
    if value is None or value < 0:
        raise ValueError("{} must be a finite, non-negative number, got {!r}".format(name, raw))
    return value


DEFAULT_MAX_SOURCE_WORDS = 20000

DEFAULT_PLAYBACK_EPSILON_S = 0.05
"""Tolerance in seconds around chunk/word windows during playback."""

LOG_LEVEL = os.getenv("READALONG_LOG_LEVEL", "WARNING").strip().upper() or "WARNING"

DEFAULT_FORMATS = os.getenv("READALONG_DEFAULT_FORMATS", "").strip()


def load_max_source_words() -> int:
    """Read the source word bound from the environment.

    Evaluated on call (not import) so a malformed value only fails the
    command that needs it.

    Raises:
        ValueError: If READALONG_MAX_SOURCE_WORDS is not a positive integer.
    """
    return _env_int("READALONG_MAX_SOURCE_WORDS", DEFAULT_MAX_SOURCE_WORDS)


def load_playback_epsilon() -> float:
    """Read the playback window tolerance from the environment.

    Evaluated on call, like load_max_source_words.

    Raises:
        ValueError: If READALONG_PLAYBACK_EPSILON_S is not a finite,
            non-negative number.
    """
    return _env_seconds("READALONG_PLAYBACK_EPSILON_S", DEFAULT_PLAYBACK_EPSILON_S)
