"""Domain Types — immutable value objects shared by the occurrence core.

Invariants:
    - EventId, CustomerId wrap UUIDs: never use bare UUID in domain logic
    - RecurrenceDefinition and Occurrence are frozen: the core never mutates them
    - stop_date, when set, is an EXCLUSIVE upper bound on generated dates
    - Occurrence.name is a denormalized copy taken at evaluation time

Design Decisions:
    - NewType over dataclass wrappers for ids: zero runtime cost, full type-checker support
    - Frozen dataclasses over ORM rows: workers receive snapshots, not live sessions
"""

from dataclasses import dataclass
from datetime import date
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

EventId = NewType("EventId", UUID)
CustomerId = NewType("CustomerId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class RecurrenceDefinition:
    """Snapshot of one recurring event: start, fixed day interval, optional stop."""
    id: EventId
    owner_id: CustomerId
    name: str
    start_date: date
    interval_days: int
    stop_date: date | None = None


@dataclass(frozen=True)
class Occurrence:
    """One concrete date produced by evaluating a definition against a window."""
    event_id: EventId
    name: str
    date: date


@dataclass(frozen=True)
class OccurrenceWindow:
    """Inclusive [start, end] date range. Built only via validate_window()."""
    start: date
    end: date
