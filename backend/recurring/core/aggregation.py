"""Aggregation Engine — fans evaluation out over many definitions and merges the result.

Invariants:
    - Output is sorted by (date, name); this final sort is never skipped
    - Parallel and sequential paths return identical sequences for the same input
    - Each worker reads its own contiguous slice and fills its own list; nothing
      is shared between workers until the join
    - Candidates are never mutated

Design Decisions:
    - ThreadPoolExecutor.map over chunks is the fork/join: map() blocks on the
      results, so the join point is the list() around it
    - Worker count is an argument (None = os.cpu_count()): the engine does not
      read configuration itself
"""

import logging
import math
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from datetime import date

from recurring.core.domain_types import Occurrence, RecurrenceDefinition
from recurring.core.recurrence import evaluate

logger = logging.getLogger(__name__)

DEFAULT_PARALLEL_THRESHOLD: int = 64


def occurrence_sort_key(occurrence: Occurrence) -> tuple[date, str]:
    return occurrence.date, occurrence.name


def available_workers(max_workers: int | None = None) -> int:
    """Worker count for the parallel path. Always >= 1."""
    if max_workers is None:
        max_workers = os.cpu_count() or 1
    return max(1, max_workers)


def chunk_candidates(
    candidates: Sequence[RecurrenceDefinition], workers: int,
) -> list[Sequence[RecurrenceDefinition]]:
    """Split into at most `workers` contiguous chunks of ceil(n / workers) items."""
    if not candidates:
        return []
    size = max(1, math.ceil(len(candidates) / max(1, workers)))
    return [
        candidates[i:i + size] for i in range(0, len(candidates), size)
    ]


def evaluate_chunk(
    chunk: Sequence[RecurrenceDefinition], window_start: date, window_end: date,
) -> list[Occurrence]:
    """Evaluate a slice sequentially into a fresh local list."""
    out: list[Occurrence] = []
    for definition in chunk:
        out.extend(evaluate(definition, window_start, window_end))
    return out


def aggregate(
    candidates: Sequence[RecurrenceDefinition],
    window_start: date,
    window_end: date,
    parallel_enabled: bool = False,
    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
    max_workers: int | None = None,
) -> list[Occurrence]:
    """Every occurrence of every candidate in the window, sorted by (date, name)."""
    candidates = tuple(candidates)

    if not parallel_enabled or len(candidates) < parallel_threshold:
        logger.debug(
            "Evaluating occurrences sequentially",
            extra={"event_count": len(candidates)},
        )
        merged = evaluate_chunk(candidates, window_start, window_end)
    else:
        workers = available_workers(max_workers)
        chunks = chunk_candidates(candidates, workers)
        logger.debug(
            "Evaluating occurrences in parallel",
            extra={"event_count": len(candidates), "workers": len(chunks)},
        )
        with ThreadPoolExecutor(
            max_workers=max(1, len(chunks)), thread_name_prefix="occurrences",
        ) as executor:
            partials = list(executor.map(
                lambda chunk: evaluate_chunk(chunk, window_start, window_end),
                chunks,
            ))
        merged = [occ for partial in partials for occ in partial]

    merged.sort(key=occurrence_sort_key)
    return merged
