"""
Aggregate read of an event with its tasks and guests.
"""

import asyncio

from event_planning_api.app.schemas.event import EventDetails
from event_planning_api.app.services.access_guard import AccessGuard
from event_planning_api.app.services.guest_service import GuestService
from event_planning_api.app.services.task_service import TaskService


class EventDetailsService:
    """Compose the detail view of a single event."""

    @classmethod
    async def get_event_with_details(cls, actor_id: str, event_id: str) -> EventDetails:
        """Return the event together with all of its tasks and guests.

        The two child queries are independent and run concurrently once
        ownership has been confirmed; if either fails, the whole read
        fails.
        """
        event = await AccessGuard.authorize_event_owner(actor_id, event_id)
        tasks, guests = await asyncio.gather(
            TaskService.list_tasks(event.id),
            GuestService.list_guests(event.id),
        )
        return EventDetails(event=event, tasks=tasks, guests=guests)
