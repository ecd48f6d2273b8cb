"""Project aligned, diffed elements into side-by-side HTML."""
from __future__ import annotations

import html
import re
from typing import List, Literal, Optional

from comparison.models import DiffPart, DocumentElement, ElementType
from utils.logging import logger
from visualization.styles import DesignInfo, resolve_style, style_to_css


Side = Literal["original", "corrected"]

_MARKER_RE = re.compile(r"^\s*(?:#{1,3}(?!#)\s*(?=\S)|>\s?|(?:[-*+]|\d+[.)])\s+|[・•‣◦▪]\s*)")

_TAGS = {
    ElementType.HEADING1: "h1",
    ElementType.HEADING2: "h2",
    ElementType.HEADING3: "h3",
    ElementType.PARAGRAPH: "p",
    ElementType.LIST_ITEM: "li",
    ElementType.BLOCKQUOTE: "blockquote",
}

_DIFF_CLASSES = {
    "added": "diff-added",
    "removed": "diff-removed",
}

DIFF_CSS = """
.diff-added { background-color: #dcfce7; }
.diff-removed { background-color: #fee2e2; text-decoration: line-through; }
""".strip()


def strip_markdown_marker(text: str) -> str:
    """Remove the leading heading, quote, bullet or number marker the classifier reads as structure."""
    return _MARKER_RE.sub("", text, count=1)


def _drop_prefix(parts: List[DiffPart], length: int) -> List[DiffPart]:
    """Remove the first ``length`` characters across the span sequence."""
    result: List[DiffPart] = []
    remaining = length
    for part in parts:
        if remaining >= len(part.text):
            remaining -= len(part.text)
            continue
        result.append(DiffPart(part.text[remaining:], part.kind))
        remaining = 0
    return result


def _render_parts(parts: List[DiffPart], show_diff: bool) -> str:
    chunks = []
    for part in parts:
        escaped = html.escape(part.text)
        css_class = _DIFF_CLASSES.get(part.kind)
        if show_diff and css_class:
            chunks.append(f'<span class="{css_class}">{escaped}</span>')
        else:
            chunks.append(escaped)
    return "".join(chunks)


def render_element(
    element: DocumentElement,
    side: Side = "corrected",
    design_info: Optional[DesignInfo] = None,
    show_diff: bool = True,
) -> str:
    """
    Render one element as an HTML fragment.

    Diff spans are wrapped in ``diff-added`` / ``diff-removed`` classes when
    ``show_diff`` is set. With ``show_diff`` off, the opposite side's spans
    are dropped so the plain document text for ``side`` remains.
    """
    tag = _TAGS.get(element.element_type, "p")
    parts = element.diff_parts or [DiffPart(element.text, "unchanged")]
    if not show_diff:
        hidden = "added" if side == "original" else "removed"
        parts = [part for part in parts if part.kind != hidden]

    marker_length = len(element.text) - len(strip_markdown_marker(element.text))
    if marker_length:
        parts = _drop_prefix(parts, marker_length)

    style = style_to_css(resolve_style(element, design_info))
    css_classes = [element.special_style or element.element_type.value]
    if show_diff and not element.is_matched:
        css_classes.append(_DIFF_CLASSES["removed" if side == "original" else "added"])

    return (
        f'<{tag} class="{" ".join(css_classes)}" style="{html.escape(style)}">'
        f"{_render_parts(parts, show_diff)}</{tag}>"
    )


def render_document(
    elements: List[DocumentElement],
    side: Side = "corrected",
    design_info: Optional[DesignInfo] = None,
    show_diff: bool = True,
) -> str:
    """Render a whole element sequence; consecutive list items share one ``<ul>``."""
    logger.debug("Rendering %d %s elements (show_diff=%s)", len(elements), side, show_diff)
    chunks: List[str] = []
    in_list = False
    for element in elements:
        is_item = element.element_type is ElementType.LIST_ITEM
        if is_item and not in_list:
            chunks.append("<ul>")
        elif not is_item and in_list:
            chunks.append("</ul>")
        in_list = is_item
        chunks.append(render_element(element, side, design_info, show_diff))
    if in_list:
        chunks.append("</ul>")
    return f'<div class="document document-{side}">' + "\n".join(chunks) + "</div>"
