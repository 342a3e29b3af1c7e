"""Source text tokenization with exact character offsets.

WHY: Highlighting during playback marks characters in the original text,
so every word must remember exactly where it came from. Splitting on
whitespace loses that, and an ASCII-only word rule breaks Cyrillic,
Greek, CJK and any text written with combining accents.

HOW: A single left-to-right scan classifies each character with
unicodedata. A word starts at a letter and extends over letters and
combining marks; a number is a run of numeric characters. Everything
else is a separator: skipped, but still counted in the offsets.

RULES:
- Letter run: starts with category L*, continues with L* or M*
- Number run: category N*
- "abc123" gives two tokens ("abc", "123")
- norm = lowercase, keeping only letters and numbers (marks are dropped)
- Tokens are numbered 0..n-1 in text order
"""

from __future__ import annotations

import unicodedata
from typing import List, Optional

from readalong_aligner.core.ir import OriginalToken


def _char_class(ch: str) -> Optional[str]:
    """Return "L", "M" or "N" for letters, marks and numbers, else None."""
    major = unicodedata.category(ch)[0]
    if major in ("L", "M", "N"):
        return major
    return None


def normalize_word(word: str) -> str:
    """Lowercase a word and strip everything that is not a letter or number.

    Used for both source tokens and ASR words so the two sides compare
    on equal terms.
    """
    return "".join(
        ch for ch in word.lower()
        if unicodedata.category(ch)[0] in ("L", "N")
    )


def tokenize_original(text: str) -> List[OriginalToken]:
    """Split the original text into word tokens with character offsets.

    Args:
        text: The source text exactly as it will be displayed.

    Returns:
        OriginalToken list in text order. Empty for empty input.
    """
    tokens: List[OriginalToken] = []
    length = len(text)
    i = 0

    while i < length:
        cls = _char_class(text[i])

        if cls == "L":
            j = i + 1
            while j < length and _char_class(text[j]) in ("L", "M"):
                j += 1
        elif cls == "N":
            j = i + 1
            while j < length and _char_class(text[j]) == "N":
                j += 1
        else:
            # Separator (or a stray mark with no letter before it)
            i += 1
            continue

        raw = text[i:j]
        tokens.append(OriginalToken(
            index=len(tokens),
            text=raw,
            norm=normalize_word(raw),
            char_start=i,
            char_end=j,
        ))
        i = j

    return tokens
