"""
Event endpoints for API v1.

These routes expose the ownership‑scoped event operations.  Every
route resolves the acting user from the bearer token and passes it to
the service layer; errors raised by the services are rendered by the
application's exception handler.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from event_planning_api.app.schemas.common import ApiResponse, EmptyPayload, EventPayload
from event_planning_api.app.schemas.event import EventCreate, EventDetails, EventList, EventStatus, EventUpdate
from event_planning_api.app.services.access_guard import get_current_actor
from event_planning_api.app.services.details_service import EventDetailsService
from event_planning_api.app.services.event_service import EventService


router = APIRouter()


@router.post("/", response_model=ApiResponse[EventPayload], status_code=status.HTTP_201_CREATED)
async def create_event(
    event: EventCreate,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EventPayload]:
    """Create a new event owned by the authenticated user."""
    created = await EventService.create_event(actor_id, event)
    return ApiResponse(data=EventPayload(event=created))


@router.get("/", response_model=ApiResponse[EventList])
async def list_my_events(
    status_filter: Optional[EventStatus] = Query(None, alias="status"),
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EventList]:
    """List the authenticated user's events.

    - **status** — optional filter on a single event status.
    """
    items, total = await EventService.list_events(actor_id, status_filter)
    return ApiResponse(data=EventList(items=items, total=total))


@router.get("/{event_id}", response_model=ApiResponse[EventDetails])
async def get_event_with_details(
    event_id: str,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EventDetails]:
    """Retrieve an event together with its tasks and guests."""
    details = await EventDetailsService.get_event_with_details(actor_id, event_id)
    return ApiResponse(data=details)


@router.put("/{event_id}", response_model=ApiResponse[EventPayload])
async def update_event(
    event_id: str,
    updates: EventUpdate,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EventPayload]:
    """Update an existing event.

    Partial updates are supported; any unspecified fields remain
    unchanged.  At least one field must be given.
    """
    updated = await EventService.update_event(actor_id, event_id, updates)
    return ApiResponse(data=EventPayload(event=updated))


@router.delete("/{event_id}", response_model=ApiResponse[EmptyPayload])
async def delete_event(
    event_id: str,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EmptyPayload]:
    """Delete an event together with all of its tasks and guests."""
    await EventService.delete_event(actor_id, event_id)
    return ApiResponse(data=EmptyPayload())
