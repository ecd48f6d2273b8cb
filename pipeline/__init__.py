"""Pipeline module - orchestrates end-to-end document comparison."""
from pipeline.compare_documents import (
    compare_documents,
    build_elements,
    split_lines,
    ComparisonPipeline,
    ComparisonMetrics,
)
from pipeline.review_response import ReviewResponse, parse_review_response

__all__ = [
    "compare_documents",
    "build_elements",
    "split_lines",
    "ComparisonPipeline",
    "ComparisonMetrics",
    "ReviewResponse",
    "parse_review_response",
]
