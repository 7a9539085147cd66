"""Event ORM — persisted recurring event definition, scoped to one customer.

Invariants:
    - id is UUID primary key
    - customer_id is non-nullable and indexed: every query filters on it
    - interval_days > 0 and stop_at >= start_date (enforced in core/event_rules.py)
    - stop_at is an exclusive cutoff

Design Decisions:
    - Date columns (no time component): occurrences are calendar dates
    - to_definition() hands the core a frozen snapshot, never the live row
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Index, Integer, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from recurring.core.domain_types import CustomerId, EventId, RecurrenceDefinition
from recurring.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    """Recurring event — start date, day interval, optional exclusive stop."""
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("interval_days > 0", name="events_interval_days_positive"),
        CheckConstraint(
            "stop_at IS NULL OR stop_at >= start_date",
            name="events_stop_after_start",
        ),
        Index("ix_events_customer_id_created_at", "customer_id", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    interval_days: Mapped[int] = mapped_column(Integer, nullable=False)
    stop_at: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    def to_definition(self) -> RecurrenceDefinition:
        return RecurrenceDefinition(
            id=EventId(self.id),
            owner_id=CustomerId(self.customer_id),
            name=self.name,
            start_date=self.start_date,
            interval_days=self.interval_days,
            stop_date=self.stop_at,
        )
