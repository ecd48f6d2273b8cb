"""Heuristic line classification into document element types.

Each line is matched against an ordered table of ``(predicate, ElementType)``
rules; the first matching rule wins and unmatched lines are paragraphs.
Document-level passes then repair the sequence:

a. only the first Heading1 survives, later ones become Heading2
b. a long Heading2 directly after another Heading2 becomes a paragraph
c. an indented list item with no list neighbour becomes a paragraph
d. a short colon-bearing paragraph right after a Heading1/Heading2 becomes Heading3

All cutoffs and keyword tables come from ``config.settings``.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from comparison.models import ElementType
from config.settings import settings
from utils.logging import logger


_H1_MARKER_RE = re.compile(r"^#(?!#)\s*\S")
_H2_MARKER_RE = re.compile(r"^##(?!#)\s*\S")
_H3_MARKER_RE = re.compile(r"^###(?!#)\s*\S")
_DATE_PREFIX_RE = re.compile(r"^\d{4}\s*年|^\d{4}[/.\-]\d{1,2}")
_NUMBERED_HEADING_RE = re.compile(
    r"^(?:\(\d+\)|（\d+）|[①-⑳]|第\d+[章節部]?|[▶▷◎]|[-*+]\s|\d+[.)]\s|[・•‣◦▪])\s*(?P<content>.+)$"
)
_MARKDOWN_LIST_RE = re.compile(r"^(?:[-*+]|\d+[.)])\s+\S")
_BULLET_GLYPH_RE = re.compile(r"^[・•‣◦▪]")
_INDENTED_RE = re.compile(r"^(?: {4,}|\t)")
_QUOTE_WRAPPED_RE = re.compile(r'^(?:「.*」|『.*』|".+"|“.*”)$')
_ANGLE_WRAPPED_RE = re.compile(r"^(?:<.*>|＜.*＞|〈.*〉|《.*》)$")
_COLONS = (":", "：")
_PERIODS = (".", "。")


@dataclass(frozen=True)
class LineContext:
    """A line with its immediate neighbours; ``None`` marks the document boundary."""
    raw: str
    previous: Optional[str] = None
    following: Optional[str] = None

    @property
    def trimmed(self) -> str:
        return self.raw.strip()


def _is_blank(line: Optional[str]) -> bool:
    return line is None or not line.strip()


def _is_indented(line: Optional[str]) -> bool:
    return line is not None and bool(_INDENTED_RE.match(line))


def has_explicit_list_marker(text: str) -> bool:
    """True for markdown bullets/numbers and Japanese bullet glyphs."""
    trimmed = text.strip()
    return bool(_MARKDOWN_LIST_RE.match(trimmed) or _BULLET_GLYPH_RE.match(trimmed))


def _is_all_caps(text: str) -> bool:
    """No lowercase, and uppercase letters make up most of the non-space characters.

    Keeps mixed lines such as ``自己PR`` or ``TOEIC 800点`` out of Heading1.
    """
    if text != text.upper():
        return False
    visible = [ch for ch in text if not ch.isspace()]
    uppercase = sum(1 for ch in visible if ch.isupper())
    return uppercase > 0 and uppercase / len(visible) >= settings.heading1_caps_min_ratio


def _is_heading1(ctx: LineContext) -> bool:
    text = ctx.trimmed
    if _H1_MARKER_RE.match(text):
        return True
    if text == settings.document_title:
        return True
    if len(text) < settings.heading1_caps_max_length and _is_all_caps(text):
        return True
    return (
        len(text) < settings.heading1_isolated_max_length
        and not any(period in text for period in _PERIODS)
        and _is_blank(ctx.previous)
        and _is_blank(ctx.following)
    )


def _is_bracket_label(text: str) -> bool:
    limit = settings.heading2_label_max_length
    if text.startswith("【") and text.endswith("】"):
        label = text[1:-1]
    elif text.startswith("[") and text.endswith("]"):
        label = text[1:-1]
    else:
        return False
    return 0 < len(label) <= limit and not any(ch in label for ch in "【】[]")


def _is_heading2(ctx: LineContext) -> bool:
    text = ctx.trimmed
    if _H2_MARKER_RE.match(text):
        return True
    if _is_bracket_label(text):
        return True
    if _DATE_PREFIX_RE.match(text):
        return True
    return len(text) < settings.heading2_keyword_max_length and text.startswith(
        tuple(settings.organization_keywords)
    )


def _is_heading3(ctx: LineContext) -> bool:
    text = ctx.trimmed
    if _H3_MARKER_RE.match(text):
        return True
    numbered = _NUMBERED_HEADING_RE.match(text)
    if numbered and len(numbered.group("content").strip()) >= settings.heading3_list_min_content:
        return True
    if text.startswith(tuple(settings.project_keywords)):
        return True
    return len(text) < settings.heading3_colon_max_length and text.endswith(_COLONS)


def _is_list_item(ctx: LineContext) -> bool:
    if has_explicit_list_marker(ctx.raw):
        return True
    return _is_indented(ctx.raw) and not _is_indented(ctx.previous)


def _is_blockquote(ctx: LineContext) -> bool:
    text = ctx.trimmed
    if text.startswith(">"):
        return True
    if len(text) >= 2 and _QUOTE_WRAPPED_RE.match(text):
        return True
    if text.startswith(tuple(settings.evaluation_markers)):
        return True
    return len(text) >= 2 and bool(_ANGLE_WRAPPED_RE.match(text))


LINE_RULES: Tuple[Tuple[Callable[[LineContext], bool], ElementType], ...] = (
    (_is_heading1, ElementType.HEADING1),
    (_is_heading2, ElementType.HEADING2),
    (_is_heading3, ElementType.HEADING3),
    (_is_list_item, ElementType.LIST_ITEM),
    (_is_blockquote, ElementType.BLOCKQUOTE),
)


def classify_line(line: str, previous: Optional[str] = None, following: Optional[str] = None) -> ElementType:
    """Classify one line given its neighbours (``None`` = document boundary)."""
    ctx = LineContext(raw=line, previous=previous, following=following)
    if not ctx.trimmed:
        return ElementType.PARAGRAPH
    for predicate, element_type in LINE_RULES:
        if predicate(ctx):
            return element_type
    return ElementType.PARAGRAPH


def enforce_single_heading1(
    types: Sequence[ElementType],
    keep_index: Optional[int] = None,
) -> List[ElementType]:
    """Demote every Heading1 except ``keep_index`` (default: the first one) to Heading2."""
    result = list(types)
    if keep_index is None:
        keep_index = next((i for i, t in enumerate(result) if t is ElementType.HEADING1), None)
    for idx, element_type in enumerate(result):
        if element_type is ElementType.HEADING1 and idx != keep_index:
            result[idx] = ElementType.HEADING2
    return result


def collapse_repeated_heading2(types: Sequence[ElementType], lines: Sequence[str]) -> List[ElementType]:
    result = list(types)
    for idx in range(1, len(result)):
        if (
            result[idx] is ElementType.HEADING2
            and result[idx - 1] is ElementType.HEADING2
            and len(lines[idx].strip()) >= settings.repeated_heading2_min_length
        ):
            result[idx] = ElementType.PARAGRAPH
    return result


def demote_isolated_list_items(types: Sequence[ElementType], lines: Sequence[str]) -> List[ElementType]:
    result = list(types)
    last = len(result) - 1
    for idx, element_type in enumerate(result):
        if element_type is not ElementType.LIST_ITEM:
            continue
        above = idx > 0 and result[idx - 1] is ElementType.LIST_ITEM
        below = idx < last and result[idx + 1] is ElementType.LIST_ITEM
        if not above and not below and not has_explicit_list_marker(lines[idx]):
            result[idx] = ElementType.PARAGRAPH
    return result


def promote_colon_subheadings(types: Sequence[ElementType], lines: Sequence[str]) -> List[ElementType]:
    result = list(types)
    for idx in range(1, len(result)):
        if result[idx] is not ElementType.PARAGRAPH:
            continue
        if result[idx - 1] not in (ElementType.HEADING1, ElementType.HEADING2):
            continue
        text = lines[idx].strip()
        if text and len(text) < settings.colon_subheading_max_length and any(c in text for c in _COLONS):
            result[idx] = ElementType.HEADING3
    return result


def classify(lines: Sequence[str]) -> List[ElementType]:
    """
    Assign an element type to every line, then apply the document-level passes.

    Args:
        lines: Ordered document lines. Blank entries act as blank neighbours
            and are classified as paragraphs.

    Returns:
        One ``ElementType`` per input line.
    """
    last = len(lines) - 1
    types = [
        classify_line(
            line,
            previous=lines[idx - 1] if idx > 0 else None,
            following=lines[idx + 1] if idx < last else None,
        )
        for idx, line in enumerate(lines)
    ]

    types = enforce_single_heading1(types)
    types = collapse_repeated_heading2(types, lines)
    types = demote_isolated_list_items(types, lines)
    types = promote_colon_subheadings(types, lines)

    logger.debug("Classified %d lines", len(types))
    return types
