"""Design information models and the element style lookup used for rendering."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from comparison.models import DocumentElement


class ElementStyle(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    font_size: Optional[str] = Field(default=None, alias="fontSize")
    font_family: Optional[str] = Field(default=None, alias="fontFamily")
    font_weight: Optional[str] = Field(default=None, alias="fontWeight")
    color: Optional[str] = None
    line_height: Optional[str] = Field(default=None, alias="lineHeight")
    text_align: Optional[str] = Field(default=None, alias="textAlign")


class PageMargins(BaseModel):
    top: str = "30px"
    right: str = "30px"
    bottom: str = "30px"
    left: str = "30px"


class PageLayout(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page_count: int = Field(default=1, alias="pageCount")
    margins: PageMargins = Field(default_factory=PageMargins)


class CssRule(BaseModel):
    selector: str
    properties: Dict[str, str] = Field(default_factory=dict)


class DesignInfo(BaseModel):
    """Document design reported alongside the corrected text."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    fonts: List[str] = Field(default_factory=list)
    layout: PageLayout = Field(default_factory=PageLayout)
    styles: Dict[str, ElementStyle] = Field(default_factory=dict)
    css_rules: List[CssRule] = Field(default_factory=list, alias="cssRules")


_FONT = "'Noto Sans JP', sans-serif"


def _style(size: str, weight: str, color: str = "#000000", line_height: str = "1.6", align: str = "left") -> ElementStyle:
    return ElementStyle(
        font_size=size,
        font_family=_FONT,
        font_weight=weight,
        color=color,
        line_height=line_height,
        text_align=align,
    )


DEFAULT_DESIGN_INFO = DesignInfo(
    fonts=["Noto Sans JP", "sans-serif"],
    styles={
        "heading1": _style("20px", "700", line_height="1.4"),
        "heading2": _style("17px", "700", line_height="1.4"),
        "heading3": _style("15px", "600", line_height="1.4"),
        "paragraph": _style("14px", "400"),
        "listItem": _style("14px", "400"),
        "blockquote": _style("14px", "400", color="#333333"),
        # Special styles set by the header/section detector.
        "title": _style("22px", "700", line_height="1.4", align="center"),
        "date": _style("13px", "400", align="right"),
        "name": _style("16px", "400", align="right"),
        "section": _style("17px", "700", line_height="1.4"),
        "companyHeading": _style("15px", "700", line_height="1.4"),
        "companyInfo": _style("13px", "400", color="#555555"),
    },
)

_CSS_PROPERTIES = (
    ("font_size", "font-size"),
    ("font_family", "font-family"),
    ("font_weight", "font-weight"),
    ("color", "color"),
    ("line_height", "line-height"),
    ("text_align", "text-align"),
)


def style_key(element: DocumentElement) -> str:
    """Lookup key for an element: its special style, else its element type."""
    return element.special_style or element.element_type.value


def resolve_style(element: DocumentElement, design_info: Optional[DesignInfo] = None) -> ElementStyle:
    """
    Merge style layers for an element, most specific last.

    Order: default type style, default special style, design-info type style,
    design-info special style. Unset fields never override set ones. An
    element ``position`` always wins for text alignment.
    """
    layers = [DEFAULT_DESIGN_INFO.styles.get(element.element_type.value)]
    if element.special_style:
        layers.append(DEFAULT_DESIGN_INFO.styles.get(element.special_style))
    if design_info is not None:
        layers.append(design_info.styles.get(element.element_type.value))
        if element.special_style:
            layers.append(design_info.styles.get(element.special_style))

    merged: dict = {}
    for layer in layers:
        if layer is not None:
            merged.update(layer.model_dump(exclude_none=True))
    if element.position:
        merged["text_align"] = element.position
    return ElementStyle(**merged)


def style_to_css(style: ElementStyle) -> str:
    """Inline CSS declaration string, e.g. ``font-size: 14px; color: #000000``."""
    declarations = []
    for attr, prop in _CSS_PROPERTIES:
        value = getattr(style, attr)
        if value:
            declarations.append(f"{prop}: {value}")
    return "; ".join(declarations)


def css_from_rules(rules: List[CssRule]) -> str:
    """Render design-info CSS rules as a stylesheet."""
    blocks = []
    for rule in rules:
        body = "\n".join(f"  {key}: {value};" for key, value in rule.properties.items())
        blocks.append(f"{rule.selector} {{\n{body}\n}}")
    return "\n\n".join(blocks)
