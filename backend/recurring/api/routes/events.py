"""Event Routes — customer-scoped CRUD, cut-from, and occurrence listing.

Invariants:
    - Every path is nested under /customers/{customer_id}: no cross-tenant access path
    - Routes never contain business logic (delegate to EventsService)
    - Invalid UUIDs / dates / bodies are rejected by FastAPI validation (400 via handler)
    - Domain errors propagate as RecurringError to the global handler

Design Decisions:
    - EventsService built per request from the request's AsyncSession
    - Occurrence query window is start..end inclusive, both ISO dates
"""

import logging
from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from recurring.config import get_settings
from recurring.core.domain_types import CustomerId, EventId
from recurring.infrastructure.database import get_db
from recurring.infrastructure.event_repository import SqlEventRepository
from recurring.schemas.event import (
    EventCreate, EventCut, EventDeleteResponse, EventListResponse,
    EventResponse, EventUpdate, OccurrencePeriod, OccurrenceResponse,
    OccurrencesResponse,
)
from recurring.services.events_service import EventsService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/customers/{customer_id}", tags=["events"])


def get_events_service(db: AsyncSession = Depends(get_db)) -> EventsService:
    return EventsService(SqlEventRepository(db), get_settings())


@router.post(
    "/events", response_model=EventResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_event(
    customer_id: UUID,
    body: EventCreate,
    service: EventsService = Depends(get_events_service),
):
    """Create a recurring event."""
    event = await service.create(
        CustomerId(customer_id), body.name, body.start_date,
        body.interval_days, body.stop_at,
    )
    return EventResponse.model_validate(event)


@router.get("/events", response_model=EventListResponse)
async def list_events(
    customer_id: UUID,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: EventsService = Depends(get_events_service),
):
    """List events, newest first."""
    events = await service.list_events(CustomerId(customer_id), limit, offset)
    return EventListResponse(
        events=[EventResponse.model_validate(e) for e in events],
        pagination={"limit": limit, "offset": offset},
    )


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(
    customer_id: UUID,
    event_id: UUID,
    service: EventsService = Depends(get_events_service),
):
    event = await service.get(CustomerId(customer_id), EventId(event_id))
    return EventResponse.model_validate(event)


@router.patch("/events/{event_id}", response_model=EventResponse)
async def update_event(
    customer_id: UUID,
    event_id: UUID,
    body: EventUpdate,
    service: EventsService = Depends(get_events_service),
):
    """Partial update. `stop_at: null` clears the stop; null elsewhere keeps the value."""
    event = await service.update(
        CustomerId(customer_id), EventId(event_id), body.to_patch(),
    )
    return EventResponse.model_validate(event)


@router.delete("/events/{event_id}", response_model=EventDeleteResponse)
async def delete_event(
    customer_id: UUID,
    event_id: UUID,
    service: EventsService = Depends(get_events_service),
):
    deleted = await service.delete(CustomerId(customer_id), EventId(event_id))
    return EventDeleteResponse(deleted=deleted)


@router.post("/events/{event_id}/cut", response_model=EventResponse)
async def cut_event_from(
    customer_id: UUID,
    event_id: UUID,
    body: EventCut,
    service: EventsService = Depends(get_events_service),
):
    """End the series: `from` and every later occurrence are dropped."""
    event = await service.cut_from(
        CustomerId(customer_id), EventId(event_id), body.from_date,
    )
    return EventResponse.model_validate(event)


@router.get("/occurrences", response_model=OccurrencesResponse)
async def list_occurrences(
    customer_id: UUID,
    start: date,
    end: date,
    name: str | None = None,
    service: EventsService = Depends(get_events_service),
):
    """Concrete occurrence dates in [start, end], sorted by date then name."""
    occurrences = await service.list_occurrences(
        CustomerId(customer_id), start, end, name,
    )
    return OccurrencesResponse(
        period=OccurrencePeriod(start=start, end=end),
        occurrences=[
            OccurrenceResponse(event_id=o.event_id, name=o.name, date=o.date)
            for o in occurrences
        ],
    )
