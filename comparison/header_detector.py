"""Detect the fixed resume header and section markers on top of generic classification."""
from __future__ import annotations

import re
from typing import List, Optional, Sequence

from comparison.element_classifier import classify, enforce_single_heading1
from comparison.models import DocumentElement, ElementType
from config.settings import settings
from utils.logging import logger


_DATE_RANGE_RE = re.compile(r"[0-9X]{4}\s*年\s*[0-9X]{1,2}\s*月|[0-9]{4}[/.][0-9]{1,2}")
_INFO_WRAPPED_RE = re.compile(r"^[（(].*[）)]$")


def find_title_index(lines: Sequence[str]) -> Optional[int]:
    """Index of the document title within the leading scan window, if present."""
    for idx, line in enumerate(lines[: settings.header_scan_lines]):
        if line.strip() == settings.document_title:
            return idx
    return None


def _is_section_marker(text: str) -> bool:
    return bool(text) and text[0] in settings.section_marker_glyphs


def _is_company_heading(text: str) -> bool:
    has_anchor = any(k in text for k in settings.organization_keywords) or bool(_DATE_RANGE_RE.search(text))
    return has_anchor and any(k in text for k in settings.employment_status_keywords)


def _apply_section_overrides(element: DocumentElement) -> None:
    text = element.text.strip()
    if _is_section_marker(text):
        element.element_type = ElementType.HEADING2
        element.special_style = "section"
    elif _is_company_heading(text):
        element.element_type = ElementType.HEADING3
        element.special_style = "companyHeading"
    elif len(text) >= 2 and _INFO_WRAPPED_RE.match(text):
        element.element_type = ElementType.PARAGRAPH
        element.special_style = "companyInfo"


def _build_elements(lines: Sequence[str]) -> List[DocumentElement]:
    types = classify(lines)
    elements = [DocumentElement(text=line, element_type=t) for line, t in zip(lines, types)]

    title_idx = find_title_index(lines)
    header_indices = set()
    if title_idx is not None:
        title = elements[title_idx]
        title.element_type = ElementType.HEADING1
        title.special_style = "title"
        title.position = "center"
        title.is_header = True
        header_indices.add(title_idx)

        # Fixed positional contract: the two lines after the title are date then name.
        for offset, style in ((1, "date"), (2, "name")):
            idx = title_idx + offset
            if idx >= len(elements):
                break
            elements[idx].element_type = ElementType.PARAGRAPH
            elements[idx].special_style = style
            elements[idx].position = "right"
            elements[idx].is_header = True
            header_indices.add(idx)

    for idx, element in enumerate(elements):
        if idx not in header_indices:
            _apply_section_overrides(element)

    types = enforce_single_heading1([e.element_type for e in elements], keep_index=title_idx)
    for element, element_type in zip(elements, types):
        element.element_type = element_type
    return elements


def detect_elements(lines: Sequence[str]) -> List[DocumentElement]:
    """
    Build classified ``DocumentElement`` objects for a document.

    Recognizes the title/date/name header in the first lines and the section,
    company heading, and company info patterns, falling back to generic
    classification for everything else.

    Never raises: on any internal error every line becomes a plain paragraph.
    """
    try:
        elements = _build_elements(lines)
    except Exception as exc:
        logger.warning("Header/section detection failed, falling back to paragraphs: %s", exc)
        return [DocumentElement(text=line, element_type=ElementType.PARAGRAPH) for line in lines]

    logger.debug(
        "Detected %d elements (%d header, %d styled)",
        len(elements),
        sum(1 for e in elements if e.is_header),
        sum(1 for e in elements if e.special_style),
    )
    return elements
