"""Export comparison results as JSON."""
from __future__ import annotations

import json
from pathlib import Path

from comparison.models import ComparisonResult
from utils.logging import logger


def export_json(result: ComparisonResult, output_path: str | Path) -> Path:
    """
    Export a comparison result as JSON.

    Both element sequences are written in source order with their types,
    match pointers, and diff spans, so a renderer can rebuild either side.
    """
    output = Path(output_path)
    logger.info("Writing JSON diff to %s", output)

    payload = result.to_dict()
    payload["matches"] = [
        {"original_index": i, "corrected_index": j} for i, j in result.matched_pairs()
    ]
    output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return output
