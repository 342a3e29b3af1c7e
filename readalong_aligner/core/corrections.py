"""Manual corrections of chunk timing.

WHY: Automatic alignment is occasionally off by a sentence, and editors
fix it by hand in the chunk editor. The stored snapshot must stay
consistent with the text, so a correction may only move a chunk's
start/end; it must never renumber chunks or change which characters or
words a chunk covers.

HOW: Each correction is validated into a ChunkTimingPatch (pydantic).
Unknown fields are rejected at validation time, so a payload that tries
to change text, offsets or word membership fails before anything is
applied. Valid patches are applied with dataclasses.replace onto a new
AlignmentResult.

RULES:
- Only "start" and "end" are writable; "index" selects the chunk
- A field left out of a patch is untouched; an explicit null clears it
- start/end must be JSON numbers; strings and booleans are rejected
- Non-finite numbers (NaN, inf) are stored as null
- Unknown chunk index → CorrectionError; nothing is applied
- Several patches for one chunk are applied in order
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field, StrictFloat, ValidationError, field_validator

from readalong_aligner.core.ir import AlignmentResult, ChunkTiming

logger = logging.getLogger(__name__)


class CorrectionError(ValueError):
    """Raised when a correction payload is invalid or targets no chunk."""


class ChunkTimingPatch(BaseModel):
    """A start/end overwrite for one chunk."""

    index: int = Field(ge=0, description="Index of the chunk to correct.")
    start: Optional[StrictFloat] = Field(default=None, description="New start in seconds, or null.")
    end: Optional[StrictFloat] = Field(default=None, description="New end in seconds, or null.")

    model_config = {"extra": "forbid"}

    @field_validator("start", "end", mode="after")
    @classmethod
    def _non_finite_to_none(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and not math.isfinite(value):
            return None
        return value


def parse_chunk_patches(raw: Any) -> List[ChunkTimingPatch]:
    """Validate a raw correction payload (a list of dicts).

    Raises:
        CorrectionError: If raw is not a list or any item is invalid.
    """
    if not isinstance(raw, list):
        raise CorrectionError("chunks must be an array")

    patches: List[ChunkTimingPatch] = []
    for pos, item in enumerate(raw):
        try:
            patches.append(ChunkTimingPatch.model_validate(item))
        except ValidationError as e:
            raise CorrectionError("Invalid chunk correction #{}: {}".format(pos, e)) from e
    return patches


def apply_chunk_corrections(
    result: AlignmentResult,
    patches: Iterable[ChunkTimingPatch],
) -> AlignmentResult:
    """Return a copy of result with chunk start/end overwritten by patches.

    Args:
        result: The stored alignment snapshot.
        patches: Validated patches, see parse_chunk_patches.

    Raises:
        CorrectionError: If a patch names a chunk index that does not exist.
    """
    by_index: Dict[int, ChunkTiming] = {c.index: c for c in result.chunks}

    for patch in patches:
        chunk = by_index.get(patch.index)
        if chunk is None:
            raise CorrectionError("No chunk with index {}".format(patch.index))

        changes = {}
        for name in ("start", "end"):
            if name in patch.model_fields_set:
                changes[name] = getattr(patch, name)
        if changes:
            by_index[patch.index] = replace(chunk, **changes)
            logger.debug("Corrected chunk %d: %s", patch.index, changes)

    return replace(
        result,
        chunks=tuple(by_index[c.index] for c in result.chunks),
    )
