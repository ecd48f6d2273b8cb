"""Shared data models for classification, alignment, and diffing."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional


class ElementType(str, Enum):
    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "listItem"
    BLOCKQUOTE = "blockquote"


DiffKind = Literal["added", "removed", "unchanged"]
SpecialStyle = Literal["title", "date", "name", "section", "companyHeading", "companyInfo"]
Position = Literal["left", "center", "right"]


@dataclass
class DiffPart:
    text: str
    kind: DiffKind = "unchanged"

    def to_dict(self) -> dict:
        return {"text": self.text, "kind": self.kind}


@dataclass
class DocumentElement:
    text: str
    element_type: ElementType = ElementType.PARAGRAPH
    special_style: Optional[SpecialStyle] = None
    position: Optional[Position] = None
    is_header: bool = False
    matched_index: Optional[int] = None
    diff_parts: List[DiffPart] = field(default_factory=list)

    @property
    def is_matched(self) -> bool:
        return self.matched_index is not None

    @property
    def has_changes(self) -> bool:
        """True when any diff part is an addition or removal."""
        return any(part.kind != "unchanged" for part in self.diff_parts)

    def reconstructed_text(self) -> str:
        return "".join(part.text for part in self.diff_parts)

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "element_type": self.element_type.value,
            "special_style": self.special_style,
            "position": self.position,
            "is_header": self.is_header,
            "matched_index": self.matched_index,
            "diff_parts": [part.to_dict() for part in self.diff_parts],
        }


@dataclass
class ComparisonResult:
    original: List[DocumentElement] = field(default_factory=list)
    corrected: List[DocumentElement] = field(default_factory=list)
    summary: dict = field(default_factory=dict)

    def matched_pairs(self) -> List[tuple[int, int]]:
        """Return ``(original_index, corrected_index)`` for every match, in original order."""
        return [
            (idx, element.matched_index)
            for idx, element in enumerate(self.original)
            if element.matched_index is not None
        ]

    def to_dict(self) -> dict:
        return {
            "original": [element.to_dict() for element in self.original],
            "corrected": [element.to_dict() for element in self.corrected],
            "summary": self.summary,
        }
