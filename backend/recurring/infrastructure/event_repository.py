"""Event Repository — SQLAlchemy implementation of EventRepository and CandidateSelector.

Invariants:
    - Every statement filters on customer_id (tenant isolation)
    - Writes commit before returning; rows are refreshed so callers see final values
    - find_for_occurrences returns frozen RecurrenceDefinition snapshots, not ORM rows
    - No business validation here: core/event_rules.py runs before any write

Design Decisions:
    - ilike() for the name filter: compiles to ILIKE on PostgreSQL and to
      lower() LIKE lower() on SQLite, so tests exercise the same query
    - LIKE wildcards in the filter are escaped: the filter is a literal substring
"""

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from recurring.core.domain_types import CustomerId, EventId, RecurrenceDefinition
from recurring.models.event import Event

logger = logging.getLogger(__name__)


def _like_pattern(name_filter: str) -> str:
    escaped = (
        name_filter.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


class SqlEventRepository:
    """Event persistence over one AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, customer_id: CustomerId, name: str, start_date: date,
        interval_days: int, stop_at: date | None,
    ) -> Event:
        event = Event(
            customer_id=customer_id,
            name=name,
            start_date=start_date,
            interval_days=interval_days,
            stop_at=stop_at,
        )
        self.db.add(event)
        await self.db.commit()
        await self.db.refresh(event)
        return event

    async def get(
        self, customer_id: CustomerId, event_id: EventId,
    ) -> Event | None:
        result = await self.db.execute(
            select(Event)
            .where(Event.id == event_id)
            .where(Event.customer_id == customer_id)
        )
        return result.scalar_one_or_none()

    async def list(
        self, customer_id: CustomerId, limit: int, offset: int,
    ) -> Sequence[Event]:
        result = await self.db.execute(
            select(Event)
            .where(Event.customer_id == customer_id)
            .order_by(Event.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return result.scalars().all()

    async def update(
        self, customer_id: CustomerId, event_id: EventId, changes: dict,
    ) -> Event | None:
        event = await self.get(customer_id, event_id)
        if event is None:
            return None
        for key, value in changes.items():
            setattr(event, key, value)
        await self.db.commit()
        await self.db.refresh(event)
        return event

    async def delete(
        self, customer_id: CustomerId, event_id: EventId,
    ) -> bool:
        result = await self.db.execute(
            delete(Event)
            .where(Event.id == event_id)
            .where(Event.customer_id == customer_id)
        )
        await self.db.commit()
        return result.rowcount > 0

    async def find_for_occurrences(
        self, customer_id: CustomerId, name_filter: str | None,
    ) -> Sequence[RecurrenceDefinition]:
        query = select(Event).where(Event.customer_id == customer_id)
        if name_filter:
            query = query.where(
                Event.name.ilike(_like_pattern(name_filter), escape="\\"),
            )
        query = query.order_by(Event.created_at.asc())

        result = await self.db.execute(query)
        rows = result.scalars().all()
        logger.debug(
            "Selected occurrence candidates",
            extra={"customer_id": str(customer_id), "event_count": len(rows)},
        )
        return [row.to_definition() for row in rows]
