"""Performance profiling utilities."""
from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Generator, List

from utils.logging import logger


@dataclass
class Timing:
    name: str
    duration: float
    metadata: dict = field(default_factory=dict)


@contextmanager
def track_time(name: str, timings: List[Timing] | None = None, **metadata) -> Generator[Timing, None, None]:
    """Context manager to track execution time.

    The finished ``Timing`` is appended to ``timings`` when a list is given,
    so each comparison keeps its own record.
    """
    timing = Timing(name=name, duration=0, metadata=metadata)
    start = time.perf_counter()
    try:
        yield timing
    finally:
        timing.duration = time.perf_counter() - start
        if timings is not None:
            timings.append(timing)
        logger.debug("Timing: %s took %.3f seconds", name, timing.duration)


def summarize_timings(timings: List[Timing]) -> dict:
    """Return ``{name: seconds}`` plus a ``total`` entry."""
    summary = {t.name: round(t.duration, 6) for t in timings}
    summary["total"] = round(sum(t.duration for t in timings), 6)
    return summary
