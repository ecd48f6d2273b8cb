"""Export one side of a comparison as plain text."""
from __future__ import annotations

from pathlib import Path
from typing import List

from comparison.models import ComparisonResult, DocumentElement
from utils.logging import logger
from visualization.diff_renderer import Side, strip_markdown_marker


def build_text(elements: List[DocumentElement]) -> str:
    """One line per element with structural markers removed."""
    lines = [strip_markdown_marker(element.text.strip()) for element in elements]
    return "\n".join(lines) + "\n" if lines else ""


def export_text(result: ComparisonResult, output_path: str | Path, side: Side = "corrected") -> Path:
    output = Path(output_path)
    logger.info("Writing %s text to %s", side, output)
    elements = result.corrected if side == "corrected" else result.original
    output.write_text(build_text(elements), encoding="utf-8")
    return output
