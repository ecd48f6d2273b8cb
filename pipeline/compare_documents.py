"""
Main orchestrator: original vs corrected resume comparison.

Provides a single entrypoint that:
1. Splits both texts into non-blank lines
2. Classifies lines into document elements (header/section aware)
3. Aligns elements across the two documents
4. Computes token-level diffs for matched pairs
5. Returns a ComparisonResult with a summary and stage timings

Every call builds fresh elements; nothing is cached between comparisons.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from comparison.document_aligner import align_elements
from comparison.header_detector import detect_elements
from comparison.models import ComparisonResult, DocumentElement
from comparison.token_differ import apply_token_diffs
from config.settings import settings
from utils.logging import logger
from utils.performance import Timing, summarize_timings, track_time


_NEWLINE_RE = re.compile(r"\r?\n")


def split_lines(text: str) -> List[str]:
    """Split on LF or CRLF line breaks and drop blank lines. Kept lines are returned unmodified."""
    if not text:
        return []
    return [line for line in _NEWLINE_RE.split(text) if line.strip()]


def build_elements(text: str) -> List[DocumentElement]:
    """Classify one document's text into elements."""
    return detect_elements(split_lines(text))


@dataclass
class ComparisonMetrics:
    """Counts and timings for a single comparison."""
    original_elements: int = 0
    corrected_elements: int = 0
    matched: int = 0
    modified: int = 0
    unchanged: int = 0
    removed: int = 0
    added: int = 0
    diff_failures: int = 0
    threshold: float = 0.0
    timing_breakdown: Dict[str, float] = field(default_factory=dict)

    @property
    def match_ratio(self) -> float:
        return self.matched / max(1, max(self.original_elements, self.corrected_elements))

    def to_dict(self) -> dict:
        """Export to JSON-serializable dict."""
        return {
            "original_elements": self.original_elements,
            "corrected_elements": self.corrected_elements,
            "matched": self.matched,
            "modified": self.modified,
            "unchanged": self.unchanged,
            "removed": self.removed,
            "added": self.added,
            "diff_failures": self.diff_failures,
            "threshold": self.threshold,
            "match_ratio": self.match_ratio,
            "timing_breakdown": self.timing_breakdown,
        }


class ComparisonPipeline:
    """
    End-to-end original/corrected comparison.

    Usage:
        pipeline = ComparisonPipeline(threshold=0.6)
        result = pipeline.compare(original_text, corrected_text)
    """

    def __init__(self, threshold: Optional[float] = None):
        self.threshold = settings.similarity_threshold if threshold is None else threshold

    def compare(self, original_text: str, corrected_text: str) -> ComparisonResult:
        timings: List[Timing] = []
        logger.info("=== Starting document comparison ===")

        with track_time("classification", timings):
            original = build_elements(original_text)
            corrected = build_elements(corrected_text)

        with track_time("alignment", timings):
            matches = align_elements(original, corrected, threshold=self.threshold)

        with track_time("token_diff", timings):
            failures = apply_token_diffs(original, corrected)

        metrics = ComparisonMetrics(
            original_elements=len(original),
            corrected_elements=len(corrected),
            matched=len(matches),
            modified=sum(1 for i, j, _ in matches if original[i].has_changes or corrected[j].has_changes),
            removed=sum(1 for e in original if not e.is_matched),
            added=sum(1 for e in corrected if not e.is_matched),
            diff_failures=failures,
            threshold=self.threshold,
            timing_breakdown=summarize_timings(timings),
        )
        metrics.unchanged = metrics.matched - metrics.modified

        logger.info(
            "Comparison complete: %d matched (%d modified), %d removed, %d added",
            metrics.matched,
            metrics.modified,
            metrics.removed,
            metrics.added,
        )
        return ComparisonResult(original=original, corrected=corrected, summary=metrics.to_dict())


def compare_documents(
    original_text: str,
    corrected_text: str,
    *,
    threshold: Optional[float] = None,
) -> ComparisonResult:
    """
    Compare an original document with its corrected version.

    Args:
        original_text: Text extracted from the uploaded document
        corrected_text: Text returned by the reviewer
        threshold: Element similarity threshold (defaults to settings)

    Returns:
        ComparisonResult with annotated elements for both sides

    Example:
        result = compare_documents("営業事務\\n受発注管理", "営業事務\\n受発注管理の改善")
        for element in result.corrected:
            print(element.element_type, [(p.text, p.kind) for p in element.diff_parts])
    """
    return ComparisonPipeline(threshold=threshold).compare(original_text, corrected_text)
