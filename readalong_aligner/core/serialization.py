"""Conversion between AlignmentResult and its stored JSON shape.

WHY: Persistence and the playback clients work with plain JSON using
camelCase keys (charStart, wordIndices). The IR uses Python names and
tuples. Keeping the mapping in one place means the stored shape cannot
drift between writer and reader.

RULES:
- Keys: index, text, charStart, charEnd, start, end (+ wordIndices on chunks)
- Missing timings serialize as null
- Loading coerces non-finite or non-numeric timings to None
"""

from __future__ import annotations

from typing import Any, Dict, List

from readalong_aligner.core.ir import AlignmentResult, ChunkTiming, WordAlignment
from readalong_aligner.core.timing import finite_or_none


def word_to_dict(word: WordAlignment) -> Dict[str, Any]:
    return {
        "index": word.index,
        "text": word.text,
        "charStart": word.char_start,
        "charEnd": word.char_end,
        "start": word.start,
        "end": word.end,
    }


def chunk_to_dict(chunk: ChunkTiming) -> Dict[str, Any]:
    return {
        "index": chunk.index,
        "text": chunk.text,
        "charStart": chunk.char_start,
        "charEnd": chunk.char_end,
        "start": chunk.start,
        "end": chunk.end,
        "wordIndices": list(chunk.word_indices),
    }


def result_to_dict(result: AlignmentResult) -> Dict[str, Any]:
    """Serialize a result to the stored {text, words, chunks} document."""
    return {
        "text": result.text,
        "words": [word_to_dict(w) for w in result.words],
        "chunks": [chunk_to_dict(c) for c in result.chunks],
    }


def _word_from_dict(data: Dict[str, Any]) -> WordAlignment:
    return WordAlignment(
        index=int(data["index"]),
        text=data["text"],
        char_start=int(data["charStart"]),
        char_end=int(data["charEnd"]),
        start=finite_or_none(data.get("start")),
        end=finite_or_none(data.get("end")),
    )


def _chunk_from_dict(data: Dict[str, Any]) -> ChunkTiming:
    return ChunkTiming(
        index=int(data["index"]),
        text=data["text"],
        char_start=int(data["charStart"]),
        char_end=int(data["charEnd"]),
        start=finite_or_none(data.get("start")),
        end=finite_or_none(data.get("end")),
        word_indices=tuple(int(i) for i in data.get("wordIndices", [])),
    )


def result_from_dict(data: Dict[str, Any]) -> AlignmentResult:
    """Rebuild a result from a stored document.

    Raises:
        KeyError: If a required key is missing.
    """
    words: List[WordAlignment] = [_word_from_dict(w) for w in data.get("words", [])]
    chunks: List[ChunkTiming] = [_chunk_from_dict(c) for c in data.get("chunks", [])]
    return AlignmentResult(
        text=data["text"],
        words=tuple(words),
        chunks=tuple(chunks),
    )
