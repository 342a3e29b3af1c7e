"""Read-along aligner — word and sentence timing for synthesized speech.

WHY: Text-to-speech audio is played back with the source text
highlighted in sync. The only timing available is an ASR transcription
of the generated audio, whose words do not match the source one to one
(drops, substitutions, filler words). This package maps that noisy
timing back onto the exact characters of the source text.

HOW: Five pure stages — tokenize the source, flatten the transcription,
align the two word sequences with edit-distance DP, interpolate timing
gaps, and cut the text into sentence/paragraph chunks. The result is an
immutable snapshot that formatters serialize for storage and captions.

RULES:
- The core performs no I/O and calls no network service
- Poor input degrades to null timings, never to an exception
- The stored JSON shape is the contract with playback clients
"""

__version__ = "0.1.0"
