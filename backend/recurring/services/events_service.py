"""Events Service — event lifecycle and occurrence listing for one customer at a time.

Invariants:
    - Every write is validated by core/event_rules.py before it reaches the repository
    - Missing events (or events of another customer) raise ResourceNotFoundError
    - list_occurrences passes worker settings to the core explicitly

Design Decisions:
    - Service receives the repository and Settings via constructor: routes build it
      per request, tests inject fakes
"""

import logging
from collections.abc import Sequence
from datetime import date

from recurring.config import Settings
from recurring.core.domain_types import CustomerId, EventId, Occurrence
from recurring.core.errors import ErrorContext, ResourceNotFoundError
from recurring.core.event_rules import (
    compute_cut_stop, merge_event_patch, validate_event_fields,
)
from recurring.core.repository_protocols import EventLike, EventRepository
from recurring.services.occurrences import compute_occurrences

logger = logging.getLogger(__name__)


class EventsService:
    """Customer-scoped operations over recurring events."""

    def __init__(self, repo: EventRepository, settings: Settings):
        self.repo = repo
        self.settings = settings

    async def create(
        self, customer_id: CustomerId, name: str, start_date: date,
        interval_days: int, stop_at: date | None = None,
    ) -> EventLike:
        logger.info(
            f"Creating event for customer_id: {customer_id}",
            extra={"customer_id": str(customer_id)},
        )
        name = validate_event_fields(name, start_date, interval_days, stop_at)
        return await self.repo.create(
            customer_id, name, start_date, interval_days, stop_at,
        )

    async def get(self, customer_id: CustomerId, event_id: EventId) -> EventLike:
        event = await self.repo.get(customer_id, event_id)
        if event is None:
            raise _not_found(customer_id, event_id)
        return event

    async def list_events(
        self, customer_id: CustomerId, limit: int, offset: int,
    ) -> Sequence[EventLike]:
        return await self.repo.list(customer_id, limit, offset)

    async def update(
        self, customer_id: CustomerId, event_id: EventId, patch: dict,
    ) -> EventLike:
        logger.info(
            f"Updating event {event_id} for customer_id: {customer_id}",
            extra={"customer_id": str(customer_id), "event_id": str(event_id)},
        )
        current = await self.get(customer_id, event_id)
        changes = merge_event_patch(_event_fields(current), patch)
        if not changes:
            return current

        updated = await self.repo.update(customer_id, event_id, changes)
        if updated is None:
            raise _not_found(customer_id, event_id)
        return updated

    async def delete(self, customer_id: CustomerId, event_id: EventId) -> bool:
        logger.info(
            f"Deleting event {event_id} for customer_id: {customer_id}",
            extra={"customer_id": str(customer_id), "event_id": str(event_id)},
        )
        return await self.repo.delete(customer_id, event_id)

    async def cut_from(
        self, customer_id: CustomerId, event_id: EventId, from_date: date,
    ) -> EventLike:
        """End the series so from_date and every later occurrence disappear."""
        current = await self.get(customer_id, event_id)
        new_stop = compute_cut_stop(current.start_date, current.stop_at, from_date)
        logger.info(
            f"Cutting event {event_id} from {from_date} (stop_at={new_stop})",
            extra={"customer_id": str(customer_id), "event_id": str(event_id)},
        )
        updated = await self.repo.update(
            customer_id, event_id, {"stop_at": new_stop},
        )
        if updated is None:
            raise _not_found(customer_id, event_id)
        return updated

    async def list_occurrences(
        self, customer_id: CustomerId, start: date, end: date,
        name: str | None = None,
    ) -> list[Occurrence]:
        logger.info(
            f"Listing occurrences for customer_id: {customer_id} from {start} to {end}",
            extra={"customer_id": str(customer_id)},
        )
        occurrences = await compute_occurrences(
            self.repo,
            customer_id,
            start,
            end,
            name_filter=name,
            parallel_enabled=self.settings.workers_enabled,
            parallel_threshold=self.settings.worker_min_items,
            max_workers=self.settings.worker_max_threads,
        )
        logger.info(
            f"Computed {len(occurrences)} occurrences",
            extra={
                "customer_id": str(customer_id),
                "occurrence_count": len(occurrences),
            },
        )
        return occurrences


def _event_fields(event: EventLike) -> dict:
    return {
        "name": event.name,
        "start_date": event.start_date,
        "interval_days": event.interval_days,
        "stop_at": event.stop_at,
    }


def _not_found(customer_id: CustomerId, event_id: EventId) -> ResourceNotFoundError:
    return ResourceNotFoundError(
        "Event", str(event_id),
        ErrorContext(customer_id=str(customer_id), event_id=str(event_id)),
    )
