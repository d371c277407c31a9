"""
Service layer for event guest lists.

Guests are attached to one event and carry an optional RSVP status.
Adding, changing and removing guests is restricted to the owner of
the event; a guest can never be moved to a different event.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import List, Optional

from event_planning_api.app.core.db import get_connection, to_db_value, utcnow
from event_planning_api.app.core.exceptions import ForbiddenError, InputValidationError, NotFoundError
from event_planning_api.app.schemas.guest import GuestRead, GuestUpsert
from event_planning_api.app.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)

GUEST_COLUMNS = (
    "id",
    "event_id",
    "name",
    "email",
    "phone",
    "rsvp_status",
    "notes",
    "invited_at",
    "responded_at",
    "created_at",
)

UPDATABLE_FIELDS = {"name", "email", "phone", "rsvp_status", "notes", "invited_at", "responded_at"}


class GuestService:
    """Service class for managing the guests of an event."""

    @staticmethod
    def _fetch_guest(guest_id: str) -> Optional[GuestRead]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM event_guests WHERE id = ?", (guest_id,)).fetchone()
        finally:
            conn.close()
        return GuestRead.model_validate(dict(row)) if row else None

    @staticmethod
    def _fetch_guests_for_event(event_id: str) -> List[GuestRead]:
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM event_guests WHERE event_id = ?", (event_id,)).fetchall()
        finally:
            conn.close()
        return [GuestRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def list_guests(cls, event_id: str) -> List[GuestRead]:
        """Return the guest list of an event (no ownership check)."""
        return await asyncio.to_thread(cls._fetch_guests_for_event, event_id)

    @classmethod
    async def upsert_guest(cls, actor_id: str, data: GuestUpsert) -> GuestRead:
        """Add a guest to an event, or change the guest identified by ``data.id``.

        On update only the fields present in the payload are changed,
        so recording an RSVP answer does not require resending the
        guest's name or contact details.
        """
        if data.id is None:
            return await cls._create_guest(actor_id, data)
        return await cls._update_guest(actor_id, data)

    @classmethod
    async def _create_guest(cls, actor_id: str, data: GuestUpsert) -> GuestRead:
        if not data.event_id:
            raise InputValidationError("event_id is required to add a guest.")
        if not data.name:
            raise InputValidationError("name is required to add a guest.")
        event = await AccessGuard.authorize_event_owner(actor_id, data.event_id)

        record = data.model_dump(include=UPDATABLE_FIELDS)
        record.update(id=str(uuid.uuid4()), event_id=event.id, created_at=utcnow())
        conn = get_connection()
        try:
            conn.execute(
                f"INSERT INTO event_guests ({', '.join(GUEST_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in GUEST_COLUMNS)})",
                tuple(to_db_value(record[column]) for column in GUEST_COLUMNS),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s added guest %s to event %s", actor_id, record["id"], event.id)
        return GuestRead.model_validate(record)

    @classmethod
    async def _update_guest(cls, actor_id: str, data: GuestUpsert) -> GuestRead:
        changes = data.model_dump(include=UPDATABLE_FIELDS, exclude_unset=True)
        if not changes:
            raise InputValidationError("At least one field must be provided to update the guest.")
        if "name" in changes and not changes["name"]:
            raise InputValidationError("name cannot be empty.")

        if data.event_id is not None:
            event = await AccessGuard.authorize_event_owner(actor_id, data.event_id)
        existing = cls._fetch_guest(data.id)
        if existing is None:
            raise NotFoundError("Guest not found.")
        if data.event_id is not None:
            if existing.event_id != event.id:
                logger.warning(
                    "User %s tried to move guest %s from event %s to %s",
                    actor_id,
                    existing.id,
                    existing.event_id,
                    event.id,
                )
                raise ForbiddenError("You cannot move guests to another event.")
        else:
            await AccessGuard.authorize_event_owner(actor_id, existing.event_id)

        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn = get_connection()
        try:
            conn.execute(
                f"UPDATE event_guests SET {assignments} WHERE id = ?",
                (*(to_db_value(value) for value in changes.values()), existing.id),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s updated guest %s: %s", actor_id, existing.id, sorted(changes))
        return GuestRead.model_validate({**existing.model_dump(), **changes})

    @classmethod
    async def delete_guest(cls, actor_id: str, guest_id: str) -> None:
        """Remove a guest, authorizing against the guest's own event."""
        existing = cls._fetch_guest(guest_id)
        if existing is None:
            raise NotFoundError("Guest not found.")
        await AccessGuard.authorize_event_owner(actor_id, existing.event_id)
        conn = get_connection()
        try:
            conn.execute("DELETE FROM event_guests WHERE id = ?", (guest_id,))
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s removed guest %s from event %s", actor_id, guest_id, existing.event_id)
