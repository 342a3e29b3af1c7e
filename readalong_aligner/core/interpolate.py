"""Fill missing word timings from matched neighbors.

WHY: Alignment leaves dropped or heavily misrecognized words without
timing. Playback still needs to highlight them, so each gap gets a
plausible timing derived from the nearest matched ("anchor") words.

HOW: Collect anchors (words with finite start and end). Words before
the first anchor copy it, words after the last anchor copy it, and words
between two anchors are linearly interpolated by position.

RULES:
- No anchors → input returned unchanged
- Anchors are never modified
- No extrapolation: edges copy the nearest anchor verbatim
- Between anchors i0 < k < i1: frac = (k - i0) / (i1 - i0), and
  start/end are each lerped between the anchors' start/end
- Length and order are preserved
"""

from __future__ import annotations

from dataclasses import replace
from typing import List, Sequence

from readalong_aligner.core.ir import WordAlignment
from readalong_aligner.core.timing import is_timed, lerp


def interpolate_word_timings(words: Sequence[WordAlignment]) -> List[WordAlignment]:
    """Give every word a timing, using anchors on either side.

    Args:
        words: WordAlignment list straight from the aligner.

    Returns:
        A new list of the same length; anchored entries are the same
        objects, gaps are replaced with timed copies.
    """
    result = list(words)
    n = len(result)

    anchors = [i for i, w in enumerate(result) if is_timed(w.start, w.end)]
    if not anchors:
        return result

    first = result[anchors[0]]
    for i in range(anchors[0]):
        result[i] = replace(result[i], start=first.start, end=first.end)

    last = result[anchors[-1]]
    for i in range(anchors[-1] + 1, n):
        result[i] = replace(result[i], start=last.start, end=last.end)

    for i0, i1 in zip(anchors, anchors[1:]):
        span = i1 - i0
        if span <= 1:
            continue
        w0 = result[i0]
        w1 = result[i1]
        for k in range(i0 + 1, i1):
            frac = (k - i0) / span
            result[k] = replace(
                result[k],
                start=lerp(w0.start, w1.start, frac),
                end=lerp(w0.end, w1.end, frac),
            )

    return result
