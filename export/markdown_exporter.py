"""Export one side of a comparison as Markdown."""
from __future__ import annotations

from pathlib import Path
from typing import List

from comparison.models import ComparisonResult, DocumentElement, ElementType
from utils.logging import logger
from visualization.diff_renderer import Side, strip_markdown_marker


_PREFIXES = {
    ElementType.HEADING1: "# ",
    ElementType.HEADING2: "## ",
    ElementType.HEADING3: "### ",
    ElementType.BLOCKQUOTE: "> ",
    ElementType.LIST_ITEM: "- ",
}


def build_markdown(elements: List[DocumentElement]) -> str:
    """
    Render elements as Markdown.

    Headings get ``#``/``##``/``###``, list items ``- `` and blockquotes ``> ``;
    paragraphs are plain lines. Blocks are separated by a blank line and
    consecutive list items form one block.
    """
    blocks: List[str] = []
    in_list = False
    for element in elements:
        line = _PREFIXES.get(element.element_type, "") + strip_markdown_marker(element.text.strip())
        is_item = element.element_type is ElementType.LIST_ITEM
        if is_item and in_list:
            blocks[-1] += "\n" + line
        else:
            blocks.append(line)
        in_list = is_item
    return "\n\n".join(blocks) + "\n" if blocks else ""


def export_markdown(result: ComparisonResult, output_path: str | Path, side: Side = "corrected") -> Path:
    output = Path(output_path)
    logger.info("Writing %s Markdown to %s", side, output)
    elements = result.corrected if side == "corrected" else result.original
    output.write_text(build_markdown(elements), encoding="utf-8")
    return output
