"""Occurrence Computation — boundary between the occurrence core and its callers.

Invariants:
    - Window validated BEFORE the candidate selector is called
    - Candidate selector called exactly once per computation
    - Parallel settings arrive as arguments; nothing here reads configuration
    - Returned occurrences are sorted by (date, name)

Design Decisions:
    - Aggregation runs in a worker thread (asyncio.to_thread): large candidate
      sets must not stall the event loop, and the engine itself stays synchronous
"""

import asyncio
import logging
from datetime import date

from recurring.core.aggregation import DEFAULT_PARALLEL_THRESHOLD, aggregate
from recurring.core.domain_types import CustomerId, Occurrence
from recurring.core.occurrence_query import normalize_name_filter, validate_window
from recurring.core.repository_protocols import CandidateSelector

logger = logging.getLogger(__name__)


async def compute_occurrences(
    selector: CandidateSelector,
    customer_id: CustomerId,
    window_start: date,
    window_end: date,
    name_filter: str | None = None,
    parallel_enabled: bool = False,
    parallel_threshold: int = DEFAULT_PARALLEL_THRESHOLD,
    max_workers: int | None = None,
) -> list[Occurrence]:
    """Occurrences of the customer's (optionally name-filtered) events in the window."""
    window = validate_window(window_start, window_end)
    candidates = await selector.find_for_occurrences(
        customer_id, normalize_name_filter(name_filter),
    )
    logger.info(
        f"Found {len(candidates)} events for occurrences computation",
        extra={"customer_id": str(customer_id), "event_count": len(candidates)},
    )

    return await asyncio.to_thread(
        aggregate,
        candidates,
        window.start,
        window.end,
        parallel_enabled,
        parallel_threshold,
        max_workers,
    )
