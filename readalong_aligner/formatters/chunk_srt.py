"""Chunk-level SRT caption formatter.

WHY: The sentence/paragraph chunks are a ready-made caption track for
the synthesized audio, handy for checking an alignment in any video
player or for shipping captions alongside the audio file.

HOW: Every chunk with both timings becomes one SRT cue, numbered from 1
in chunk order. Timestamps are rendered as HH:MM:SS,mmm.

RULES:
- Chunks without start or end are skipped (numbering stays contiguous)
- Negative times are clamped to 0
- Output suffix: "-chunks.srt"
- Media type: "application/x-subrip"
"""

from __future__ import annotations

from typing import List

from readalong_aligner.core.ir import AlignmentResult
from readalong_aligner.core.timing import is_timed
from readalong_aligner.formatters.base import BaseFormatter, FormatterOutput


def format_srt_timestamp(seconds: float) -> str:
    """Render seconds as an SRT timestamp, e.g. 3723.5 → "01:02:03,500"."""
    total_ms = int(round(max(seconds, 0.0) * 1000))
    hours, rem = divmod(total_ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    secs, millis = divmod(rem, 1000)
    return "{:02d}:{:02d}:{:02d},{:03d}".format(hours, minutes, secs, millis)


class ChunkSRTFormatter(BaseFormatter):
    """Formatter that produces one SRT cue per timed chunk."""

    @property
    def name(self) -> str:
        return "Chunk SRT"

    def format(self, result: AlignmentResult) -> List[FormatterOutput]:
        blocks: List[str] = []
        for chunk in result.chunks:
            if not is_timed(chunk.start, chunk.end):
                continue
            blocks.append("{}\n{} --> {}\n{}\n".format(
                len(blocks) + 1,
                format_srt_timestamp(chunk.start),
                format_srt_timestamp(chunk.end),
                chunk.text,
            ))

        return [
            FormatterOutput(
                suffix="-chunks.srt",
                content="\n".join(blocks),
                media_type="application/x-subrip",
            )
        ]
