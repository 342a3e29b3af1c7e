"""Output formatter registry.

WHY: The CLI needs a single lookup to find a formatter by key. A central
dict makes adding a format a one-line change.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``FORMATTERS["page_audio_json"]()``.

RULES:
- Keys are snake_case identifiers (used in CLI flags and config)
- Values are BaseFormatter subclasses (not instances)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from readalong_aligner.formatters.chunk_srt import ChunkSRTFormatter
from readalong_aligner.formatters.page_audio_json import PageAudioJSONFormatter

if TYPE_CHECKING:
    from readalong_aligner.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "page_audio_json": PageAudioJSONFormatter,
    "chunk_srt": ChunkSRTFormatter,
}
