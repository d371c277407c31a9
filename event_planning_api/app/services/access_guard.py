"""
Ownership checks shared by every service.

An event, and every task and guest attached to it, is visible only to
the user recorded as the event's ``owner_user_id``.  Services call
``AccessGuard.authorize_event_owner`` before touching any of those
records, always passing the event id stored on the record being
changed rather than one supplied by the caller.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import Depends

from event_planning_api.app.core.db import get_connection
from event_planning_api.app.core.exceptions import ForbiddenError, NotFoundError, UnauthenticatedError
from event_planning_api.app.core.security import get_current_user
from event_planning_api.app.schemas.event import EventRead

logger = logging.getLogger(__name__)


class AccessGuard:
    """Resolve the acting user and enforce event ownership."""

    @staticmethod
    def resolve_actor(current_user: Optional[Dict[str, Any]]) -> str:
        """Return the actor identifier attached to the request context.

        Raises ``UnauthenticatedError`` if there is no context or it
        carries no ``sub`` claim.
        """
        actor_id = (current_user or {}).get("sub")
        if not actor_id:
            raise UnauthenticatedError()
        return str(actor_id)

    @classmethod
    async def authorize_event_owner(cls, actor_id: str, event_id: str) -> EventRead:
        """Load an event and check that ``actor_id`` owns it.

        Raises ``NotFoundError`` if the event does not exist and
        ``ForbiddenError`` if it belongs to somebody else.
        """
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM events WHERE id = ?", (event_id,)).fetchone()
        finally:
            conn.close()
        if row is None:
            raise NotFoundError("Event not found.")
        if row["owner_user_id"] != actor_id:
            logger.warning("User %s denied access to event %s", actor_id, event_id)
            raise ForbiddenError("You do not have access to this event.")
        return EventRead.model_validate(dict(row))


def get_current_actor(current_user: Optional[Dict[str, Any]] = Depends(get_current_user)) -> str:
    """FastAPI dependency returning the authenticated actor identifier."""
    return AccessGuard.resolve_actor(current_user)
