"""ASR provider boundary — typed parsing of transcription responses.

WHY: The alignment core never calls the transcription provider. The
caller fetches a ``verbose_json`` response and hands it over; this
package is where that untyped JSON becomes typed segments.

RULES:
- No network code lives here
- Malformed responses raise TranscriptionFormatError before the core runs
"""

from readalong_aligner.api.models import (
    AsrSegment,
    AsrWord,
    TranscriptionFormatError,
    TranscriptionResponse,
)

__all__ = ["AsrSegment", "AsrWord", "TranscriptionFormatError", "TranscriptionResponse"]
