"""
API endpoints for event guest lists and RSVP tracking.
"""

from fastapi import APIRouter, Depends

from event_planning_api.app.schemas.common import ApiResponse, EmptyPayload, GuestPayload
from event_planning_api.app.schemas.guest import GuestUpsert
from event_planning_api.app.services.access_guard import get_current_actor
from event_planning_api.app.services.guest_service import GuestService


router = APIRouter()


@router.post("/", response_model=ApiResponse[GuestPayload], summary="Add or update a guest")
async def upsert_event_guest(
    guest: GuestUpsert,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[GuestPayload]:
    """Add a guest to an event, or update the guest given by ``id``.

    To record an RSVP answer send only ``id`` and ``rsvp_status``
    (optionally ``responded_at``); other fields keep their values.
    """
    saved = await GuestService.upsert_guest(actor_id, guest)
    return ApiResponse(data=GuestPayload(guest=saved))


@router.delete("/{guest_id}", response_model=ApiResponse[EmptyPayload], summary="Remove a guest")
async def delete_event_guest(
    guest_id: str,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EmptyPayload]:
    await GuestService.delete_guest(actor_id, guest_id)
    return ApiResponse(data=EmptyPayload())
