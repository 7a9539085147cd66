"""Event Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Request bodies accept snake_case and camelCase keys; unknown keys are rejected
    - Dates are ISO YYYY-MM-DD (Pydantic date parsing)
    - EventUpdate distinguishes "stop_at absent" from "stop_at: null" via model_fields_set
    - Business rules (interval > 0, stop >= start) live in core/event_rules.py, not here

Design Decisions:
    - AliasChoices over alias_generator: only three fields have two spellings
    - Occurrence payloads serialize camelCase (eventId) to match existing clients
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    """Event creation — name plus recurrence rule."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    start_date: date = Field(
        validation_alias=AliasChoices("start_date", "startDate"),
    )
    interval_days: int = Field(
        validation_alias=AliasChoices("interval_days", "intervalDays"),
    )
    stop_at: date | None = Field(
        None, validation_alias=AliasChoices("stop_at", "stopAt"),
    )


class EventUpdate(BaseModel):
    """Partial update — only supplied fields change; stop_at: null clears the stop."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = None
    start_date: date | None = Field(
        None, validation_alias=AliasChoices("start_date", "startDate"),
    )
    interval_days: int | None = Field(
        None, validation_alias=AliasChoices("interval_days", "intervalDays"),
    )
    stop_at: date | None = Field(
        None, validation_alias=AliasChoices("stop_at", "stopAt"),
    )

    def to_patch(self) -> dict:
        """Supplied fields only, keyed by field name."""
        return self.model_dump(exclude_unset=True)


class EventCut(BaseModel):
    """Cut request — end the series so `from` and later dates disappear."""
    model_config = ConfigDict(extra="forbid")

    from_date: date = Field(validation_alias=AliasChoices("from", "from_date"))


class EventResponse(BaseModel):
    """Event response — public-facing event data."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    customer_id: UUID
    name: str
    start_date: date
    interval_days: int
    stop_at: date | None
    created_at: datetime
    updated_at: datetime


class EventListResponse(BaseModel):
    events: list[EventResponse]
    pagination: dict[str, int]


class EventDeleteResponse(BaseModel):
    deleted: bool


# --- Occurrences -------------------------------------------------------------

class OccurrenceResponse(BaseModel):
    """One concrete occurrence date."""
    event_id: UUID = Field(serialization_alias="eventId")
    name: str
    date: date


class OccurrencePeriod(BaseModel):
    start: date
    end: date


class OccurrencesResponse(BaseModel):
    """Occurrences in the requested period, sorted by (date, name)."""
    period: OccurrencePeriod
    occurrences: list[OccurrenceResponse]
