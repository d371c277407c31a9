"""
Service for managing the preparation tasks of an event.

Tasks belong to exactly one event for their whole life.  A single
upsert operation creates a task (no ``id`` given) or changes an
existing one; in both cases the owner of the task's event must be the
acting user.  Moving a task to another event is refused.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import List, Optional

from event_planning_api.app.core.db import get_connection, to_db_value, utcnow
from event_planning_api.app.core.exceptions import ForbiddenError, InputValidationError, NotFoundError
from event_planning_api.app.schemas.task import TaskRead, TaskStatus, TaskUpsert
from event_planning_api.app.services.access_guard import AccessGuard

logger = logging.getLogger(__name__)

TASK_COLUMNS = (
    "id",
    "event_id",
    "user_id",
    "title",
    "description",
    "due_date",
    "status",
    "priority",
    "created_at",
    "updated_at",
)

# Fields a client may change on an existing task.
UPDATABLE_FIELDS = {"title", "description", "due_date", "status", "priority", "user_id"}


class TaskService:
    """Service for creating, updating, deleting and listing event tasks."""

    @staticmethod
    def _fetch_task(task_id: str) -> Optional[TaskRead]:
        conn = get_connection()
        try:
            row = conn.execute("SELECT * FROM event_tasks WHERE id = ?", (task_id,)).fetchone()
        finally:
            conn.close()
        return TaskRead.model_validate(dict(row)) if row else None

    @staticmethod
    def _fetch_tasks_for_event(event_id: str) -> List[TaskRead]:
        conn = get_connection()
        try:
            rows = conn.execute("SELECT * FROM event_tasks WHERE event_id = ?", (event_id,)).fetchall()
        finally:
            conn.close()
        return [TaskRead.model_validate(dict(row)) for row in rows]

    @classmethod
    async def list_tasks(cls, event_id: str) -> List[TaskRead]:
        """Return all tasks of an event.

        The query runs in a worker thread so that it can proceed
        concurrently with other queries of the same request.  No
        ownership check is made here; callers authorize the event first.
        """
        return await asyncio.to_thread(cls._fetch_tasks_for_event, event_id)

    @classmethod
    async def upsert_task(cls, actor_id: str, data: TaskUpsert) -> TaskRead:
        """Create a task, or update the task identified by ``data.id``.

        Parameters
        ----------
        actor_id : str
            Identifier of the acting user; must own the task's event.
        data : TaskUpsert
            Without ``id`` the payload must carry ``event_id`` and
            ``title``.  With ``id`` only the fields present in the
            payload are changed; an omitted ``status`` keeps the
            current one.

        Returns
        -------
        TaskRead
            The created or merged task.
        """
        if data.id is None:
            return await cls._create_task(actor_id, data)
        return await cls._update_task(actor_id, data)

    @classmethod
    async def _create_task(cls, actor_id: str, data: TaskUpsert) -> TaskRead:
        if not data.event_id:
            raise InputValidationError("event_id is required to create a task.")
        if not data.title:
            raise InputValidationError("title is required to create a task.")
        event = await AccessGuard.authorize_event_owner(actor_id, data.event_id)

        now = utcnow()
        record = data.model_dump(include=UPDATABLE_FIELDS)
        record.update(
            id=str(uuid.uuid4()),
            event_id=event.id,
            status=data.status or TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        conn = get_connection()
        try:
            conn.execute(
                f"INSERT INTO event_tasks ({', '.join(TASK_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in TASK_COLUMNS)})",
                tuple(to_db_value(record[column]) for column in TASK_COLUMNS),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s created task %s for event %s", actor_id, record["id"], event.id)
        return TaskRead.model_validate(record)

    @classmethod
    async def _update_task(cls, actor_id: str, data: TaskUpsert) -> TaskRead:
        changes = data.model_dump(include=UPDATABLE_FIELDS, exclude_unset=True)
        if "status" in changes and changes["status"] is None:
            del changes["status"]
        if not changes:
            raise InputValidationError("At least one field must be provided to update the task.")
        if "title" in changes and not changes["title"]:
            raise InputValidationError("title cannot be empty.")

        if data.event_id is not None:
            event = await AccessGuard.authorize_event_owner(actor_id, data.event_id)
        existing = cls._fetch_task(data.id)
        if existing is None:
            raise NotFoundError("Task not found.")
        if data.event_id is not None:
            if existing.event_id != event.id:
                logger.warning(
                    "User %s tried to move task %s from event %s to %s",
                    actor_id,
                    existing.id,
                    existing.event_id,
                    event.id,
                )
                raise ForbiddenError("You cannot move tasks to another event.")
        else:
            await AccessGuard.authorize_event_owner(actor_id, existing.event_id)

        changes["updated_at"] = utcnow()
        assignments = ", ".join(f"{column} = ?" for column in changes)
        conn = get_connection()
        try:
            conn.execute(
                f"UPDATE event_tasks SET {assignments} WHERE id = ?",
                (*(to_db_value(value) for value in changes.values()), existing.id),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s updated task %s: %s", actor_id, existing.id, sorted(changes))
        return TaskRead.model_validate({**existing.model_dump(), **changes})

    @classmethod
    async def delete_task(cls, actor_id: str, task_id: str) -> None:
        """Delete a task.

        Ownership is checked against the event stored on the task, never
        against an event named by the caller.  Raises ``NotFoundError``
        if the task does not exist.
        """
        existing = cls._fetch_task(task_id)
        if existing is None:
            raise NotFoundError("Task not found.")
        await AccessGuard.authorize_event_owner(actor_id, existing.event_id)
        conn = get_connection()
        try:
            conn.execute("DELETE FROM event_tasks WHERE id = ?", (task_id,))
            conn.commit()
        finally:
            conn.close()
        logger.info("User %s deleted task %s of event %s", actor_id, task_id, existing.event_id)
