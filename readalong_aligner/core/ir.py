"""Intermediate representation dataclasses for transcript-to-text alignment.

WHY: The pipeline passes tokens and timings between five stages
(tokenize, flatten, align, interpolate, chunk). Loosely-shaped dicts
make it easy to mix up character offsets with playback seconds or to
forget that a timing may be missing. Typed records make each stage's
contract explicit.

HOW: Five frozen dataclasses:
  OriginalToken   — one word of the source text with character offsets
  TimedToken      — one word recognized by ASR with playback timing
  WordAlignment   — one source word with the timing it ended up with
  ChunkTiming     — one sentence/paragraph span with aggregate timing
  AlignmentResult — the value returned by the pipeline

RULES:
- Records carry data only — no behavior
- All records are frozen; stages build new records instead of mutating
- char_start/char_end are string indices into the original text
  (end exclusive)
- start/end are float seconds, or None when no timing is known
- WordAlignment.index equals the OriginalToken.index it came from
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class OriginalToken:
    """A word extracted from the source text.

    RULES:
    - norm: lowercase, with everything but letters and digits removed
    - text == original_text[char_start:char_end]
    """

    index: int
    text: str
    norm: str
    char_start: int
    char_end: int


@dataclass(frozen=True)
class TimedToken:
    """A word recognized by ASR, with playback timestamps in seconds.

    start/end are None only when the provider sent a non-finite value.
    """

    index: int
    text: str
    norm: str
    start: Optional[float]
    end: Optional[float]


@dataclass(frozen=True)
class WordAlignment:
    """One entry per OriginalToken, carrying its (possibly missing) timing."""

    index: int
    text: str
    char_start: int
    char_end: int
    start: Optional[float] = None
    end: Optional[float] = None


@dataclass(frozen=True)
class ChunkTiming:
    """A sentence or paragraph span with timing derived from its words.

    RULES:
    - text is the trimmed span; char_start/char_end are the raw,
      untrimmed boundary positions
    - word_indices lists WordAlignment.index values whose midpoint falls
      in [char_start, char_end)
    - start/end are the min start / max end over those words, or None
    """

    index: int
    text: str
    char_start: int
    char_end: int
    start: Optional[float] = None
    end: Optional[float] = None
    word_indices: Tuple[int, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class AlignmentResult:
    """The complete alignment of one text against one transcription.

    This is the immutable snapshot handed to persistence. Only chunk
    start/end may be corrected afterwards, and corrections produce a
    new AlignmentResult.
    """

    text: str
    words: Tuple[WordAlignment, ...] = field(default_factory=tuple)
    chunks: Tuple[ChunkTiming, ...] = field(default_factory=tuple)
