"""Token-level diff spans for matched element pairs."""
from __future__ import annotations

from difflib import SequenceMatcher
from typing import List, Tuple

from comparison.models import DiffKind, DiffPart, DocumentElement
from comparison.similarity import tokenize
from utils.logging import logger


def _append(parts: List[DiffPart], text: str, kind: DiffKind) -> None:
    if not text:
        return
    if parts and parts[-1].kind == kind:
        parts[-1].text += text
    else:
        parts.append(DiffPart(text, kind))


def diff_tokens(original_text: str, corrected_text: str) -> List[DiffPart]:
    """
    Diff two strings token by token.

    Returns a single ordered span list where adjacent tokens of the same kind
    are merged. Replacements emit the removed span before the added span.

    Examples:
        >>> [(p.text, p.kind) for p in diff_tokens("営業事務", "営業事務リーダー")]
        [('営業事務', 'unchanged'), ('リーダー', 'added')]
    """
    tokens_a = tokenize(original_text)
    tokens_b = tokenize(corrected_text)
    matcher = SequenceMatcher(a=tokens_a, b=tokens_b, autojunk=False)

    parts: List[DiffPart] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            _append(parts, "".join(tokens_a[i1:i2]), "unchanged")
            continue
        if tag in ("delete", "replace"):
            _append(parts, "".join(tokens_a[i1:i2]), "removed")
        if tag in ("insert", "replace"):
            _append(parts, "".join(tokens_b[j1:j2]), "added")
    return parts


def split_sides(parts: List[DiffPart]) -> Tuple[List[DiffPart], List[DiffPart]]:
    """Split a combined span list into original-side and corrected-side spans."""
    original_side: List[DiffPart] = []
    corrected_side: List[DiffPart] = []
    for part in parts:
        if part.kind != "added":
            _append(original_side, part.text, part.kind)
        if part.kind != "removed":
            _append(corrected_side, part.text, part.kind)
    return original_side, corrected_side


def apply_token_diffs(original: List[DocumentElement], corrected: List[DocumentElement]) -> int:
    """
    Refine ``diff_parts`` for every matched pair.

    The original element receives ``unchanged`` + ``removed`` spans and the
    corrected element ``unchanged`` + ``added`` spans. A pair that fails to
    diff falls back to whole ``removed`` / ``added`` spans.

    Returns:
        Number of pairs that had to fall back.
    """
    failures = 0
    for i, orig in enumerate(original):
        j = orig.matched_index
        if j is None:
            continue
        if not 0 <= j < len(corrected):
            logger.warning("Matched index %d for original element %d is out of range", j, i)
            continue
        corr = corrected[j]
        try:
            orig.diff_parts, corr.diff_parts = split_sides(diff_tokens(orig.text, corr.text))
        except Exception as exc:
            failures += 1
            logger.warning("Token diff failed for pair (%d, %d), using whole spans: %s", i, j, exc)
            orig.diff_parts = [DiffPart(orig.text, "removed")]
            corr.diff_parts = [DiffPart(corr.text, "added")]
    return failures
