"""Page audio alignment JSON formatter.

WHY: The alignment snapshot is stored once and read by every playback
client, which index into words and chunks by number. A malformed
document (missing charStart, a string where a number belongs) would
break highlighting far away from where it was produced, so the document
is validated before it leaves the package.

HOW: result_to_dict builds the {text, words, chunks} document, which is
validated with jsonschema against page_audio_schema.json (shipped next
to this module) and dumped as UTF-8 JSON.

RULES:
- Output suffix: "-alignment.json"
- Schema validation is mandatory — raises on invalid output
- ensure_ascii=False so non-Latin text stays readable
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import jsonschema

from readalong_aligner.core.ir import AlignmentResult
from readalong_aligner.core.serialization import result_to_dict
from readalong_aligner.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "page_audio_schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def get_schema() -> dict[str, Any]:
    """Load and cache the page audio JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def validate_document(document: dict[str, Any]) -> None:
    """Validate a stored alignment document.

    Raises:
        jsonschema.ValidationError: If the document does not match the schema.
    """
    jsonschema.validate(instance=document, schema=get_schema())


class PageAudioJSONFormatter(BaseFormatter):
    """Formatter that produces the stored alignment snapshot."""

    @property
    def name(self) -> str:
        return "Page audio JSON"

    def format(self, result: AlignmentResult) -> list[FormatterOutput]:
        """Serialize and validate the alignment result.

        Raises:
            jsonschema.ValidationError: If the generated JSON does not
                conform to the page audio schema.
        """
        document = result_to_dict(result)
        validate_document(document)

        return [
            FormatterOutput(
                suffix="-alignment.json",
                content=json.dumps(document, indent=2, ensure_ascii=False),
                media_type="application/json",
            )
        ]
