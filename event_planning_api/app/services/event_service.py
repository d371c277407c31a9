"""
Business logic for events.

Events are owned by the user who created them.  All reads and writes
go through ``AccessGuard`` so that only the owner can see or change
an event; deleting an event removes its tasks and guests in the same
transaction.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from event_planning_api.app.core.db import get_connection, to_db_value, transaction, utcnow
from event_planning_api.app.core.exceptions import InputValidationError
from event_planning_api.app.schemas.event import EventCreate, EventRead, EventStatus, EventUpdate
from event_planning_api.app.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)

EVENT_COLUMNS = (
    "id",
    "owner_user_id",
    "title",
    "description",
    "start_date_time",
    "end_date_time",
    "time_zone",
    "location_name",
    "location_address",
    "location_map_link",
    "status",
    "created_at",
    "updated_at",
)


class EventService:
    """Сервис для управления мероприятиями пользователя.

    Использует SQLite для хранения данных.  Каждый метод получает
    идентификатор текущего пользователя явно и проверяет права
    владельца через ``AccessGuard``.
    """

    @classmethod
    async def create_event(cls, actor_id: str, data: EventCreate) -> EventRead:
        """Создать новое мероприятие, владельцем которого становится ``actor_id``."""
        now = utcnow()
        record = data.model_dump()
        record.update(
            id=str(uuid.uuid4()),
            owner_user_id=actor_id,
            created_at=now,
            updated_at=now,
        )
        conn = get_connection()
        try:
            conn.execute(
                f"INSERT INTO events ({', '.join(EVENT_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in EVENT_COLUMNS)})",
                tuple(to_db_value(record[column]) for column in EVENT_COLUMNS),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s created event %s '%s'", actor_id, record["id"], data.title)
        return EventRead.model_validate(record)

    @classmethod
    async def update_event(cls, actor_id: str, event_id: str, updates: EventUpdate) -> EventRead:
        """Apply a partial update to an event owned by ``actor_id``.

        Only fields supplied with a value are written; ``updated_at``
        is always refreshed.  An update without any field is rejected
        before the database is touched.
        """
        changes = updates.supplied_fields()
        if not changes:
            raise InputValidationError("At least one field must be provided to update the event.")
        existing = await AccessGuard.authorize_event_owner(actor_id, event_id)

        changes["updated_at"] = utcnow()
        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn = get_connection()
        try:
            conn.execute(
                f"UPDATE events SET {assignments} WHERE id = ?",
                (*(to_db_value(value) for value in changes.values()), event_id),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s updated event %s: %s", actor_id, event_id, sorted(changes))
        return EventRead.model_validate({**existing.model_dump(), **changes})

    @classmethod
    async def delete_event(cls, actor_id: str, event_id: str) -> None:
        """Удалить мероприятие вместе со всеми задачами и гостями.

        Все три удаления выполняются в одной транзакции: при ошибке
        ни одно из них не сохраняется.
        """
        await AccessGuard.authorize_event_owner(actor_id, event_id)
        with transaction() as cursor:
            tasks_deleted = cursor.execute(
                "DELETE FROM event_tasks WHERE event_id = ?", (event_id,)
            ).rowcount
            guests_deleted = cursor.execute(
                "DELETE FROM event_guests WHERE event_id = ?", (event_id,)
            ).rowcount
            cursor.execute("DELETE FROM events WHERE id = ?", (event_id,))
        logger.info(
            "User %s deleted event %s with %s tasks and %s guests",
            actor_id,
            event_id,
            tasks_deleted,
            guests_deleted,
        )

    @classmethod
    async def list_events(
        cls,
        actor_id: str,
        status: Optional[EventStatus] = None,
    ) -> Tuple[List[EventRead], int]:
        """Вернуть все мероприятия пользователя и их количество.

        Параметр ``status`` ограничивает выборку одним статусом.
        Строки возвращаются в порядке хранения.
        """
        query = "SELECT * FROM events WHERE owner_user_id = ?"
        params: list = [actor_id]
        if status is not None:
            query += " AND status = ?"
            params.append(to_db_value(status))
        conn = get_connection()
        try:
            rows = conn.execute(query, tuple(params)).fetchall()
        finally:
            conn.close()
        events = [EventRead.model_validate(dict(row)) for row in rows]
        return events, len(events)
