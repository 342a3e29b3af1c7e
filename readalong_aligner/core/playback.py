"""Playback-position lookups for synchronized highlighting."""

from __future__ import annotations

from typing import Optional, Sequence

from readalong_aligner.config import load_playback_epsilon
from readalong_aligner.core.ir import ChunkTiming, WordAlignment
from readalong_aligner.core.timing import is_timed


def active_chunk_index(
    chunks: Sequence[ChunkTiming],
    position_s: float,
    epsilon_s: Optional[float] = None,
) -> int:
    """Index into chunks of the first chunk playing at position_s, or -1.

    Chunks without timing are skipped. The window is widened by
    epsilon_s on both sides so that a position exactly on a boundary
    still highlights something.
    """
    eps = load_playback_epsilon() if epsilon_s is None else epsilon_s
    for i, chunk in enumerate(chunks):
        if not is_timed(chunk.start, chunk.end):
            continue
        if position_s + eps >= chunk.start and position_s <= chunk.end + eps:
            return i
    return -1


def active_word_index(
    words: Sequence[WordAlignment],
    position_s: float,
    epsilon_s: Optional[float] = None,
) -> int:
    """Index into words of the word playing at position_s, or -1.

    When windows overlap the latest matching word wins. Scanning stops
    at the first timed word that starts after position_s.
    """
    eps = load_playback_epsilon() if epsilon_s is None else epsilon_s
    current = -1
    for i, word in enumerate(words):
        if not is_timed(word.start, word.end):
            continue
        if position_s + eps >= word.start and position_s <= word.end + eps:
            current = i
        elif word.start > position_s:
            break
    return current
