"""Reading time estimation for mixed Japanese / Latin text."""

from __future__ import annotations

import math
import re

# Hiragana, Katakana and the CJK Unified Ideographs block
_CJK_RE = re.compile(r"[\u3040-\u309F\u30A0-\u30FF\u4E00-\u9FAF]")
_LATIN_RE = re.compile(r"[A-Za-z0-9]")

CJK_CHARS_PER_MINUTE = 400
LATIN_WORDS_PER_MINUTE = 200


def count_cjk_characters(text: str) -> int:
    return len(_CJK_RE.findall(text))


def count_latin_words(text: str) -> int:
    """Count whitespace-separated tokens that contain a Latin letter or digit."""
    return sum(1 for token in text.split() if _LATIN_RE.search(token))


def count_words(text: str) -> int:
    """Word count where each CJK character counts as one word."""
    if not text:
        return 0
    return count_cjk_characters(text) + count_latin_words(text)


def estimate_reading_time(text: str) -> int:
    """Estimated reading time in whole minutes, never less than one."""
    if not text:
        return 1
    minutes = (
        count_cjk_characters(text) / CJK_CHARS_PER_MINUTE
        + count_latin_words(text) / LATIN_WORDS_PER_MINUTE
    )
    # round half up
    return max(1, math.floor(minutes + 0.5))
