"""Dynamic-programming alignment of source words to recognized words.

WHY: ASR output of synthesized speech is close to the source text but
not identical: words get dropped, misrecognized ("colour" → "color"),
split or joined, and filler tokens appear. Walking both lists forward
and skipping until something matches silently loses correct pairs once
local noise pushes the pointer past them. A global edit-distance
alignment does not have that failure mode.

HOW: Classic Levenshtein table over the two token sequences, with a
direction table for backtracking. The diagonal step is free when the
pair is approximately equal and costs 1 otherwise; dropping a source
word or discarding a recognized word costs 1. Backtracking from the
bottom-right corner pairs every diagonal step's source word with its
recognized word.

RULES:
- dp[i][0] = i, dp[0][j] = j
- Ties prefer diagonal, then up (delete source word), then left
  (discard recognized word) — this favors 1:1 pairings
- A diagonal step assigns timing for matches AND substitutions
- Output has exactly one WordAlignment per source token, same order
- O(n*m) time; the direction table takes one byte per cell and only
  two rows of costs are kept; the caller bounds n
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from readalong_aligner.core.ir import OriginalToken, TimedToken, WordAlignment

logger = logging.getLogger(__name__)

# Backtrace directions
_DIAG = 0
_UP = 1
_LEFT = 2


def approx_equals(a: str, b: str) -> bool:
    """Loose equality for normalized words.

    Identical strings match. Otherwise the lengths may differ by at most
    two and one must be a prefix of the other ("walk" ~ "walked").

    Known weakness: very short words are matched generously ("a" ~ "at",
    "i" ~ "in"). The alignment cost usually sorts these out, so the rule
    is kept as is.
    """
    if a == b:
        return True
    if not a or not b:
        return False
    if abs(len(a) - len(b)) > 2:
        return False
    return a.startswith(b) or b.startswith(a)


def _fill_tables(
    original_tokens: Sequence[OriginalToken],
    timed_tokens: Sequence[TimedToken],
) -> Tuple[int, List[bytearray]]:
    """Fill the direction table, keeping only two rows of costs.

    Returns the total edit cost and one bytearray of directions per row.
    """
    n = len(original_tokens)
    m = len(timed_tokens)

    prev_row = list(range(m + 1))
    back = [bytearray(m + 1) for _ in range(n + 1)]
    for j in range(1, m + 1):
        back[0][j] = _LEFT

    timed_norms = [t.norm for t in timed_tokens]

    for i in range(1, n + 1):
        a = original_tokens[i - 1].norm
        row = [i] + [0] * m
        back_row = back[i]
        back_row[0] = _UP
        for j in range(1, m + 1):
            match_cost = 0 if approx_equals(a, timed_norms[j - 1]) else 1

            best = prev_row[j - 1] + match_cost
            direction = _DIAG

            cost_up = prev_row[j] + 1
            if cost_up < best:
                best = cost_up
                direction = _UP

            cost_left = row[j - 1] + 1
            if cost_left < best:
                best = cost_left
                direction = _LEFT

            row[j] = best
            back_row[j] = direction
        prev_row = row

    return prev_row[m], back


def _backtrace(back: Sequence[bytearray], n: int, m: int) -> List[Optional[int]]:
    """Walk the direction table from (n, m) to (0, 0).

    Returns, for each source index, the paired timed index or None.
    """
    aligned: List[Optional[int]] = [None] * n
    i, j = n, m

    while i > 0 or j > 0:
        direction = back[i][j]
        if direction == _DIAG:
            aligned[i - 1] = j - 1
            i -= 1
            j -= 1
        elif direction == _UP:
            i -= 1
        else:
            j -= 1

    return aligned


def align_tokens_with_timings(
    original_tokens: Sequence[OriginalToken],
    timed_tokens: Sequence[TimedToken],
) -> List[WordAlignment]:
    """Pair each source token with at most one recognized token.

    Args:
        original_tokens: Tokens of the source text, in text order.
        timed_tokens: Recognized words, in playback order.

    Returns:
        One WordAlignment per source token. Timing is copied from the
        paired recognized word, or None when the source word was dropped.
    """
    n = len(original_tokens)
    m = len(timed_tokens)

    cost, back = _fill_tables(original_tokens, timed_tokens)
    aligned = _backtrace(back, n, m)

    result: List[WordAlignment] = []
    for orig, timed_index in zip(original_tokens, aligned):
        start = end = None
        if timed_index is not None:
            timed = timed_tokens[timed_index]
            start, end = timed.start, timed.end
        result.append(WordAlignment(
            index=orig.index,
            text=orig.text,
            char_start=orig.char_start,
            char_end=orig.char_end,
            start=start,
            end=end,
        ))

    logger.debug(
        "Aligned %d source words to %d recognized words (edit cost %d, %d paired)",
        n, m, cost, sum(1 for k in aligned if k is not None),
    )
    return result
