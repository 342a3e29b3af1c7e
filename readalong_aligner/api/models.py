"""ASR provider response dataclasses.

WHY: The transcription provider returns a ``verbose_json`` document with
segments and, when word timestamps were requested, a per-segment word
list. Typed dataclasses make the shape explicit at the one place it
enters the package, and give the flattener a stable input.

HOW: Each dataclass maps 1:1 to a provider JSON object. Factory methods
(from_dict) parse raw response dicts. Timestamps pass through
finite_or_none so NaN or non-numeric values arrive as None.

RULES:
- Segments are kept in the order the provider sent them (no re-sorting)
- AsrSegment.words is None when the segment has no word timestamps
- A response without a "segments" list raises TranscriptionFormatError;
  this belongs to the caller that fetched the transcription, not to the
  alignment core
- A word dict without a "word" key parses as an empty word (skipped later)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from readalong_aligner.core.timing import finite_or_none


class TranscriptionFormatError(ValueError):
    """Raised when a transcription response cannot be parsed."""


@dataclass
class AsrWord:
    """A single word with timestamps from a transcription segment."""

    word: str
    start: Optional[float]
    end: Optional[float]

    @classmethod
    def from_dict(cls, data: dict) -> AsrWord:
        word = data.get("word")
        return cls(
            word=word if isinstance(word, str) else "",
            start=finite_or_none(data.get("start")),
            end=finite_or_none(data.get("end")),
        )


@dataclass
class AsrSegment:
    """One transcription segment.

    RULES:
    - start/end: float seconds, None if missing or not finite
    - text: the segment's recognized text (not used for alignment)
    - words: None when word-level timestamps were not returned
    """

    start: Optional[float]
    end: Optional[float]
    text: str
    words: Optional[List[AsrWord]] = None

    @classmethod
    def from_dict(cls, data: dict) -> AsrSegment:
        raw_words = data.get("words")
        words = None
        if isinstance(raw_words, list):
            words = [AsrWord.from_dict(w) for w in raw_words if isinstance(w, dict)]
        return cls(
            start=finite_or_none(data.get("start")),
            end=finite_or_none(data.get("end")),
            text=data.get("text") or "",
            words=words,
        )


@dataclass
class TranscriptionResponse:
    """A full ``verbose_json`` transcription response.

    RULES:
    - segments is required and must be a list
    - text, language and duration are informational only
    """

    text: str
    segments: List[AsrSegment]
    language: Optional[str] = None
    duration: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> TranscriptionResponse:
        """Parse a transcription response dict.

        Raises:
            TranscriptionFormatError: If data is not a dict or has no
                "segments" list.
        """
        if not isinstance(data, dict):
            raise TranscriptionFormatError(
                "Transcription response must be a JSON object, got {}".format(
                    type(data).__name__
                )
            )
        segments = data.get("segments")
        if not isinstance(segments, list):
            raise TranscriptionFormatError("Transcription response missing segments")
        return cls(
            text=data.get("text") or "",
            segments=[AsrSegment.from_dict(s) for s in segments if isinstance(s, dict)],
            language=data.get("language"),
            duration=finite_or_none(data.get("duration")),
        )
