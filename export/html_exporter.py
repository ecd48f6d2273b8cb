"""Export one side of a comparison as a standalone HTML document."""
from __future__ import annotations

import html
from pathlib import Path
from typing import Optional

from comparison.models import ComparisonResult
from utils.logging import logger
from visualization.diff_renderer import DIFF_CSS, Side, render_document
from visualization.styles import DesignInfo, css_from_rules


_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="UTF-8">
<title>{title}</title>
<style>
body {{
  font-family: 'Noto Sans JP', 'Hiragino Kaku Gothic Pro', Meiryo, sans-serif;
  line-height: 1.6;
  max-width: 210mm;
  margin: 0 auto;
  padding: 20mm;
}}
{diff_css}
{design_css}
</style>
</head>
<body>
{body}
</body>
</html>
"""


def build_html(
    result: ComparisonResult,
    side: Side = "corrected",
    design_info: Optional[DesignInfo] = None,
    show_diff: bool = False,
    title: str = "",
) -> str:
    elements = result.corrected if side == "corrected" else result.original
    design_css = css_from_rules(design_info.css_rules) if design_info else ""
    return _PAGE_TEMPLATE.format(
        title=html.escape(title or side),
        diff_css=DIFF_CSS if show_diff else "",
        design_css=design_css,
        body=render_document(elements, side, design_info, show_diff),
    )


def export_html(
    result: ComparisonResult,
    output_path: str | Path,
    side: Side = "corrected",
    design_info: Optional[DesignInfo] = None,
    show_diff: bool = False,
) -> Path:
    """Write ``side`` of ``result`` to ``output_path`` (diff markup off by default)."""
    output = Path(output_path)
    logger.info("Writing %s HTML to %s", side, output)
    output.write_text(
        build_html(result, side, design_info, show_diff, title=output.stem),
        encoding="utf-8",
    )
    return output
