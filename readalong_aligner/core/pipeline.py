"""End-to-end alignment pipeline: text + transcription segments → result.

WHY: Callers (the TTS job handler, the CLI) should not need to know the
stage order. This module is the single entry point that composes the
stages and returns the immutable snapshot for persistence.

HOW: tokenize → flatten → align → interpolate → chunk, then freeze the
lists into an AlignmentResult.

RULES:
- Pure and synchronous: no I/O, no shared state, safe to run concurrently
- Never raises for poor input: no recognized words gives all-null
  timing, no source words gives an empty result
- Input size is not bounded here; callers reject oversized texts
"""

from __future__ import annotations

import logging
from typing import Iterable, Union

from readalong_aligner.api.models import AsrSegment
from readalong_aligner.core.aligner import align_tokens_with_timings
from readalong_aligner.core.chunks import build_chunks_from_text
from readalong_aligner.core.flatten import flatten_segments
from readalong_aligner.core.interpolate import interpolate_word_timings
from readalong_aligner.core.ir import AlignmentResult
from readalong_aligner.core.timing import is_timed
from readalong_aligner.core.tokenizer import tokenize_original

logger = logging.getLogger(__name__)


def build_alignment_result(
    original_text: str,
    segments: Iterable[Union[AsrSegment, dict]],
) -> AlignmentResult:
    """Align a transcription to its source text at word and chunk level.

    Args:
        original_text: The text that was synthesized.
        segments: Transcription segments (typed or raw dicts), in
            chronological order.

    Returns:
        AlignmentResult with the original text, one WordAlignment per
        source word, and the sentence/paragraph chunks.
    """
    original_tokens = tokenize_original(original_text)
    timed_tokens = flatten_segments(segments)

    raw_words = align_tokens_with_timings(original_tokens, timed_tokens)
    anchors = sum(1 for w in raw_words if is_timed(w.start, w.end))

    words = interpolate_word_timings(raw_words)
    chunks = build_chunks_from_text(original_text, words)

    logger.info(
        "Alignment built: %d words (%d anchored), %d recognized words, %d chunks",
        len(words), anchors, len(timed_tokens), len(chunks),
    )
    if original_tokens and not anchors:
        logger.warning("No source word could be paired with a timed word; all timings are null")

    return AlignmentResult(
        text=original_text,
        words=tuple(words),
        chunks=tuple(chunks),
    )
