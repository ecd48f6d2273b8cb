"""Greedy element alignment between original and corrected documents."""
from __future__ import annotations

from typing import List, Optional, Tuple

from comparison.models import DiffPart, DocumentElement
from comparison.similarity import similarity
from config.settings import settings
from utils.logging import logger


Match = Tuple[int, int, float]  # (original index, corrected index, similarity)


def build_candidate_pairs(
    original: List[DocumentElement],
    corrected: List[DocumentElement],
) -> List[Match]:
    """Score the full cross product, sorted by descending similarity.

    The sort is stable, so equal scores keep ``(i, j)`` discovery order.
    """
    candidates = [
        (i, j, similarity(orig.text, corr.text))
        for i, orig in enumerate(original)
        for j, corr in enumerate(corrected)
    ]
    candidates.sort(key=lambda pair: pair[2], reverse=True)
    return candidates


def select_greedy_matches(
    candidates: List[Match],
    original_count: int,
    corrected_count: int,
    threshold: float,
) -> List[Match]:
    """Accept best-first pairs at or above ``threshold`` whose ends are both unclaimed.

    This is a greedy approximation, not an optimal assignment.
    """
    claimed_original: set[int] = set()
    claimed_corrected: set[int] = set()
    matches: List[Match] = []

    for i, j, score in candidates:
        if score < threshold:
            # Sorted descending: nothing later can pass.
            break
        if not (0 <= i < original_count and 0 <= j < corrected_count):
            logger.warning("Skipping out-of-range candidate pair (%d, %d)", i, j)
            continue
        if i in claimed_original or j in claimed_corrected:
            continue
        claimed_original.add(i)
        claimed_corrected.add(j)
        matches.append((i, j, score))

    return matches


def align_elements(
    original: List[DocumentElement],
    corrected: List[DocumentElement],
    threshold: Optional[float] = None,
) -> List[Match]:
    """
    Link corresponding elements of two classified documents.

    Sets ``matched_index`` symmetrically on matched pairs and initial
    whole-text ``diff_parts`` on every element (``unchanged`` for matched,
    ``removed`` / ``added`` for unmatched original / corrected elements).
    A matched corrected element without a special style inherits the
    original element's type.

    Args:
        original: Elements of the original document (annotated in place)
        corrected: Elements of the corrected document (annotated in place)
        threshold: Minimum similarity; defaults to ``settings.similarity_threshold``

    Returns:
        Accepted ``(original_index, corrected_index, similarity)`` matches,
        in acceptance order.
    """
    if threshold is None:
        threshold = settings.similarity_threshold

    logger.info("Aligning %d original elements -> %d corrected elements", len(original), len(corrected))

    for element in original:
        element.matched_index = None
        element.diff_parts = [DiffPart(element.text, "removed")]
    for element in corrected:
        element.matched_index = None
        element.diff_parts = [DiffPart(element.text, "added")]

    if not original or not corrected:
        return []

    candidates = build_candidate_pairs(original, corrected)
    matches = select_greedy_matches(candidates, len(original), len(corrected), threshold)

    for i, j, _score in matches:
        orig, corr = original[i], corrected[j]
        orig.matched_index = j
        corr.matched_index = i
        orig.diff_parts = [DiffPart(orig.text, "unchanged")]
        corr.diff_parts = [DiffPart(corr.text, "unchanged")]
        if corr.special_style is None:
            corr.element_type = orig.element_type

    logger.debug(
        "Alignment complete: %d matches, %d removed, %d added",
        len(matches),
        len(original) - len(matches),
        len(corrected) - len(matches),
    )
    return matches
