"""Parse the reviewer model's JSON reply into corrected text and design info."""
from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Optional

from pydantic import ValidationError

from utils.logging import logger
from visualization.styles import DesignInfo


_JSON_PATTERNS = (
    re.compile(r"```json\s*({[\s\S]*?})\s*```"),
    re.compile(r"```\s*({[\s\S]*?})\s*```"),
    re.compile(r"({[\s\S]*})"),
)


@dataclass
class ReviewResponse:
    corrected_text: str
    design_info: Optional[DesignInfo] = None
    raw_response: str = ""


def extract_json_block(response: str) -> str:
    """Return the JSON object text inside a fenced block or braces, else the input."""
    for pattern in _JSON_PATTERNS:
        match = pattern.search(response)
        if match:
            return match.group(1).strip()
    return response


def parse_review_response(response: str) -> ReviewResponse:
    """
    Parse a reply of the form ``{"correctedText": ..., "designInfo": {...}}``.

    Falls back to the whole reply as the corrected text when it is not a
    JSON object. An invalid ``designInfo`` is dropped.
    """
    try:
        payload = json.loads(extract_json_block(response))
    except (json.JSONDecodeError, TypeError) as exc:
        logger.warning("Review response is not valid JSON, using raw text: %s", exc)
        return ReviewResponse(corrected_text=response, raw_response=response)

    if not isinstance(payload, dict):
        logger.warning("Unexpected review response shape (%s), using raw text", type(payload).__name__)
        return ReviewResponse(corrected_text=response, raw_response=response)

    corrected_text = payload.get("correctedText") or ""
    if not isinstance(corrected_text, str):
        corrected_text = str(corrected_text)
    if not corrected_text:
        logger.warning("Review response has no correctedText field")

    design_info = None
    raw_design = payload.get("designInfo")
    if raw_design is not None:
        try:
            design_info = DesignInfo.model_validate(raw_design)
        except ValidationError as exc:
            logger.warning("Ignoring invalid designInfo: %s", exc)

    return ReviewResponse(corrected_text=corrected_text, design_info=design_info, raw_response=response)
