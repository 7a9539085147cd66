"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - Every method is scoped to one customer; other customers' rows are invisible

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO, but the evaluator and aggregation
      engine that consume the results are plain synchronous functions
    - CandidateSelector split from EventRepository: occurrence computation needs
      only the one read, so callers can supply a narrower fake
"""

from collections.abc import Sequence
from datetime import date
from typing import Protocol

from recurring.core.domain_types import CustomerId, EventId, RecurrenceDefinition


class EventLike(Protocol):
    """Structural contract for persisted events handed back by the repository."""
    id: EventId
    customer_id: CustomerId
    name: str
    start_date: date
    interval_days: int
    stop_at: date | None


class CandidateSelector(Protocol):
    """Contract for choosing which definitions an occurrence query evaluates.

    name_filter, when given, is already normalized and matches as a
    case-insensitive substring. Result order carries no meaning.
    """
    async def find_for_occurrences(
        self, customer_id: CustomerId, name_filter: str | None,
    ) -> Sequence[RecurrenceDefinition]: ...


class EventRepository(CandidateSelector, Protocol):
    """Contract for event persistence — implemented by shell."""
    async def create(
        self, customer_id: CustomerId, name: str, start_date: date,
        interval_days: int, stop_at: date | None,
    ) -> EventLike: ...
    async def get(
        self, customer_id: CustomerId, event_id: EventId,
    ) -> EventLike | None: ...
    async def list(
        self, customer_id: CustomerId, limit: int, offset: int,
    ) -> Sequence[EventLike]: ...
    async def update(
        self, customer_id: CustomerId, event_id: EventId, changes: dict,
    ) -> EventLike | None: ...
    async def delete(
        self, customer_id: CustomerId, event_id: EventId,
    ) -> bool: ...
