"""Shared test fixtures for the readalong_aligner test suite.

WHY: Several test modules need the same small, hand-checked scenarios:
a clean transcription, one with a dropped word and one with a filler
word. Centralizing them keeps expected values in one place.

HOW: Pytest fixtures provide the source text and provider-shaped
segment dicts (``verbose_json`` layout) for each scenario.

RULES:
- SAMPLE_TEXT has two sentences, four words
- Timings are chosen so interpolated values are exact decimal fractions
"""

from typing import Any, Dict, List

import pytest

SAMPLE_TEXT = "Hello world. Goodbye now."


def make_segment(words: List[tuple], text: str = "") -> Dict[str, Any]:
    """Build a provider segment dict from (word, start, end) tuples."""
    return {
        "start": words[0][1] if words else 0.0,
        "end": words[-1][2] if words else 0.0,
        "text": text or " ".join(w for w, _, _ in words),
        "words": [{"word": w, "start": s, "end": e} for w, s, e in words],
    }


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT


@pytest.fixture
def clean_segments():
    """Scenario A: every word recognized exactly."""
    return [
        make_segment([(" Hello", 0.0, 0.3), (" world.", 0.3, 0.6)]),
        make_segment([(" Goodbye", 1.0, 1.4), (" now.", 1.4, 1.6)]),
    ]


@pytest.fixture
def dropped_word_segments():
    """Scenario B: "world" missing from the transcription."""
    return [
        make_segment([(" Hello", 0.0, 0.3), (" Goodbye", 1.0, 1.4), (" now.", 1.4, 1.6)]),
    ]


@pytest.fixture
def filler_word_segments():
    """Scenario C: a recognized "um" with no counterpart in the text."""
    return [
        make_segment([(" Hello", 0.0, 0.3), (" um", 0.3, 0.4), (" world.", 0.4, 0.6)]),
        make_segment([(" Goodbye", 1.0, 1.4), (" now.", 1.4, 1.6)]),
    ]


@pytest.fixture
def verbose_json_response(clean_segments):
    """Full provider response wrapping the clean segments."""
    return {
        "task": "transcribe",
        "language": "english",
        "duration": 1.6,
        "text": "Hello world. Goodbye now.",
        "segments": clean_segments,
    }
