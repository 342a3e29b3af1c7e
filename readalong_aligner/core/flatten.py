"""Flatten ASR segments into one ordered stream of timed words.

WHY: The provider groups words into segments, but alignment works on a
single word sequence. This module drops the segment level and assigns a
global index to every recognized word.

HOW: Walk segments in the given order, then their words. Each word is
stripped, normalized with the same rule as the source tokenizer, and
numbered sequentially across all segments.

RULES:
- Segments without word timestamps contribute nothing
- Empty words (after strip) are skipped and do not consume an index
- Segment order is trusted; nothing is re-sorted by start time, but a
  segment starting before its predecessor is logged as a warning
- Non-finite timestamps arrive as None (see core.timing)
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from readalong_aligner.api.models import AsrSegment
from readalong_aligner.core.ir import TimedToken
from readalong_aligner.core.timing import finite_or_none
from readalong_aligner.core.tokenizer import normalize_word

logger = logging.getLogger(__name__)


def _coerce_segment(segment: Union[AsrSegment, dict]) -> AsrSegment:
    if isinstance(segment, AsrSegment):
        return segment
    return AsrSegment.from_dict(segment)


def flatten_segments(segments: Iterable[Union[AsrSegment, dict]]) -> List[TimedToken]:
    """Flatten transcription segments into TimedToken objects.

    Args:
        segments: AsrSegment objects or raw provider segment dicts,
            assumed chronological.

    Returns:
        TimedToken list indexed 0..k in stream order.
    """
    tokens: List[TimedToken] = []
    last_start: Optional[float] = None

    for pos, raw_segment in enumerate(segments):
        segment = _coerce_segment(raw_segment)
        if segment.start is not None:
            if last_start is not None and segment.start < last_start:
                logger.warning(
                    "Segment %d starts at %.3fs, before the previous segment (%.3fs); "
                    "keeping provider order",
                    pos, segment.start, last_start,
                )
            last_start = segment.start
        if not segment.words:
            continue

        for w in segment.words:
            text = (w.word or "").strip()
            if not text:
                continue
            tokens.append(TimedToken(
                index=len(tokens),
                text=text,
                norm=normalize_word(text),
                start=finite_or_none(w.start),
                end=finite_or_none(w.end),
            ))

    return tokens
