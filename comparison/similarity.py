"""Edit-distance similarity and diff tokenization."""
from __future__ import annotations

import re
from typing import List

from rapidfuzz.distance import Levenshtein

# Word runs are ASCII-only so every CJK character becomes its own token.
_TOKEN_RE = re.compile(r"[A-Za-z0-9_]+|\s+|[^A-Za-z0-9_\s]")


def edit_distance(text_a: str, text_b: str) -> int:
    """
    Levenshtein distance over Unicode code points (unit insert/delete/substitute cost).

    Examples:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("", "abc")
        3
    """
    if not text_a or not text_b:
        return max(len(text_a), len(text_b))
    return Levenshtein.distance(text_a, text_b)


def similarity(text_a: str, text_b: str) -> float:
    """Normalized similarity in [0, 1]: ``1 - distance / max(len)``."""
    if text_a == text_b:
        return 1.0
    if not text_a or not text_b:
        return 0.0
    longest = max(len(text_a), len(text_b))
    return 1.0 - edit_distance(text_a, text_b) / longest


def tokenize(text: str) -> List[str]:
    """
    Split text into word runs, single symbols, and whitespace runs.

    Joining the tokens reproduces ``text`` exactly.

    Examples:
        >>> tokenize("Excel  2級")
        ['Excel', '  ', '2', '級']
    """
    if not text:
        return []
    return _TOKEN_RE.findall(text)
