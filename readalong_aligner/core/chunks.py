"""Sentence/paragraph chunking of the source text with aggregate timing.

WHY: Word-level highlighting is too fine for navigation. Players show a
chunk bar (tap a sentence to seek) and highlight the whole current
sentence, so the text is also cut into sentence/paragraph spans whose
timing is derived from the words inside them.

HOW: One scan marks boundaries after newlines and after sentence-ending
punctuation that is followed by whitespace or the end of the text. Each
span between consecutive boundaries becomes a chunk unless it is blank.
Words are assigned to chunks by their character midpoint, then each
chunk takes the earliest start and latest end among its words.

RULES:
- Boundaries: 0, len(text), after every "\\n", after ".", "!" or "?"
  when the next character is whitespace or there is none
- Chunk text is the stripped span; char_start/char_end stay the raw
  boundary positions
- Blank spans are dropped; remaining chunks are numbered 0..k
- A word belongs to the chunk whose [char_start, char_end) holds
  (char_start + char_end) / 2; it may belong to none, never to two
- Chunk start/end ignore words without finite timing; None if no word
  has timing
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from readalong_aligner.core.ir import ChunkTiming, WordAlignment
from readalong_aligner.core.timing import finite_or_none

_SENTENCE_END = frozenset(".!?")


def find_chunk_boundaries(text: str) -> List[int]:
    """Return strictly increasing boundary positions from 0 to len(text)."""
    length = len(text)
    boundaries = [0]

    for i, ch in enumerate(text):
        if ch == "\n":
            cut = i + 1
        elif ch in _SENTENCE_END and (i + 1 == length or text[i + 1].isspace()):
            cut = i + 1
        else:
            continue
        if cut > boundaries[-1]:
            boundaries.append(cut)

    if boundaries[-1] != length:
        boundaries.append(length)

    return boundaries


def _chunk_for_midpoint(spans: List[ChunkTiming], mid: float) -> Optional[int]:
    for pos, chunk in enumerate(spans):
        if chunk.char_start <= mid < chunk.char_end:
            return pos
    return None


def build_chunks_from_text(
    text: str,
    words: Sequence[WordAlignment],
) -> List[ChunkTiming]:
    """Split text into chunks and derive each chunk's timing from its words.

    Args:
        text: The original text.
        words: Interpolated word alignments for the same text.

    Returns:
        ChunkTiming list covering every non-blank span, in text order.
    """
    boundaries = find_chunk_boundaries(text)

    spans: List[ChunkTiming] = []
    for start, end in zip(boundaries, boundaries[1:]):
        stripped = text[start:end].strip()
        if not stripped:
            continue
        spans.append(ChunkTiming(
            index=len(spans),
            text=stripped,
            char_start=start,
            char_end=end,
        ))

    members: Dict[int, List[WordAlignment]] = {pos: [] for pos in range(len(spans))}
    for w in words:
        pos = _chunk_for_midpoint(spans, (w.char_start + w.char_end) / 2)
        if pos is not None:
            members[pos].append(w)

    chunks: List[ChunkTiming] = []
    for pos, span in enumerate(spans):
        starts = [s for s in (finite_or_none(w.start) for w in members[pos]) if s is not None]
        ends = [e for e in (finite_or_none(w.end) for w in members[pos]) if e is not None]
        chunks.append(ChunkTiming(
            index=span.index,
            text=span.text,
            char_start=span.char_start,
            char_end=span.char_end,
            start=min(starts) if starts else None,
            end=max(ends) if ends else None,
            word_indices=tuple(w.index for w in members[pos]),
        ))

    return chunks
