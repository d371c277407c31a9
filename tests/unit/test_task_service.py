"""
Unit tests for TaskService.

Covers upsert in both directions, the rule that tasks never change
event, and deletion authorized through the task's stored event.
"""

import pytest

from event_planning_api.app.core.exceptions import ForbiddenError, InputValidationError, NotFoundError
from event_planning_api.app.schemas.event import EventCreate
from event_planning_api.app.schemas.task import TaskPriority, TaskStatus, TaskUpsert
from event_planning_api.app.services.event_service import EventService
from event_planning_api.app.services.task_service import TaskService

pytestmark = pytest.mark.asyncio


@pytest.fixture
def make_event(test_db):
    async def _make(owner="alice", title="Launch"):
        return await EventService.create_event(owner, EventCreate(title=title))
    return _make


class TestCreateTask:

    async def test_creates_task_with_defaults(self, make_event):
        event = await make_event()

        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))

        assert task.event_id == event.id
        assert task.status == TaskStatus.TODO
        assert task.priority is None
        assert task.created_at == task.updated_at

    async def test_each_create_gets_a_fresh_id(self, make_event):
        event = await make_event()
        payload = TaskUpsert(event_id=event.id, title="Same title")

        first = await TaskService.upsert_task("alice", payload)
        second = await TaskService.upsert_task("alice", payload)

        assert first.id != second.id
        assert len(await TaskService.list_tasks(event.id)) == 2

    async def test_keeps_all_supplied_fields(self, make_event):
        event = await make_event()

        task = await TaskService.upsert_task(
            "alice",
            TaskUpsert(
                event_id=event.id,
                title="Order cake",
                description="Chocolate",
                due_date="2025-08-30T12:00:00+00:00",
                status="in-progress",
                priority="high",
                user_id="bob",
            ),
        )

        [stored] = await TaskService.list_tasks(event.id)
        assert stored == task
        assert stored.status == TaskStatus.IN_PROGRESS
        assert stored.priority == TaskPriority.HIGH
        assert stored.user_id == "bob"

    async def test_requires_event_and_title(self, make_event):
        event = await make_event()

        with pytest.raises(InputValidationError):
            await TaskService.upsert_task("alice", TaskUpsert(title="No event"))
        with pytest.raises(InputValidationError):
            await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id))

    async def test_rejects_foreign_event(self, make_event):
        event = await make_event(owner="alice")

        with pytest.raises(ForbiddenError):
            await TaskService.upsert_task("mallory", TaskUpsert(event_id=event.id, title="Sneaky"))

        assert await TaskService.list_tasks(event.id) == []

    async def test_rejects_unknown_event(self, test_db):
        with pytest.raises(NotFoundError):
            await TaskService.upsert_task("alice", TaskUpsert(event_id="missing", title="x"))


class TestUpdateTask:

    async def test_updates_in_place(self, make_event):
        event = await make_event()
        task = await TaskService.upsert_task(
            "alice", TaskUpsert(event_id=event.id, title="Book venue", status="in-progress")
        )

        updated = await TaskService.upsert_task(
            "alice", TaskUpsert(id=task.id, event_id=event.id, title="Book bigger venue", priority="low")
        )

        assert updated.id == task.id
        assert updated.title == "Book bigger venue"
        assert updated.priority == TaskPriority.LOW
        # status not supplied: keeps the stored value
        assert updated.status == TaskStatus.IN_PROGRESS
        assert updated.created_at == task.created_at
        assert updated.updated_at > task.updated_at
        assert await TaskService.list_tasks(event.id) == [updated]

    async def test_update_without_event_id_uses_stored_event(self, make_event):
        event = await make_event()
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))

        updated = await TaskService.upsert_task("alice", TaskUpsert(id=task.id, status="done"))

        assert updated.status == TaskStatus.DONE
        assert updated.title == "Book venue"

    async def test_cannot_move_task_to_another_event(self, make_event):
        first = await make_event(title="First")
        second = await make_event(title="Second")
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=first.id, title="Stay here"))

        with pytest.raises(ForbiddenError):
            await TaskService.upsert_task(
                "alice", TaskUpsert(id=task.id, event_id=second.id, title="Moved")
            )

        assert await TaskService.list_tasks(first.id) == [task]
        assert await TaskService.list_tasks(second.id) == []

    async def test_other_actor_cannot_update(self, make_event):
        event = await make_event(owner="alice")
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Mine"))
        own_event = await make_event(owner="mallory")

        with pytest.raises(ForbiddenError):
            await TaskService.upsert_task("mallory", TaskUpsert(id=task.id, title="Hijacked"))
        with pytest.raises(ForbiddenError):
            await TaskService.upsert_task(
                "mallory", TaskUpsert(id=task.id, event_id=own_event.id, title="Hijacked")
            )

        assert await TaskService.list_tasks(event.id) == [task]

    async def test_unknown_task_is_not_found(self, make_event):
        event = await make_event()

        with pytest.raises(NotFoundError):
            await TaskService.upsert_task("alice", TaskUpsert(id="missing", event_id=event.id, title="x"))

    async def test_update_without_fields_is_rejected(self, make_event):
        event = await make_event()
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))

        with pytest.raises(InputValidationError):
            await TaskService.upsert_task("alice", TaskUpsert(id=task.id, event_id=event.id))

    async def test_explicit_null_title_is_rejected(self, make_event):
        event = await make_event()
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))

        with pytest.raises(InputValidationError):
            await TaskService.upsert_task("alice", TaskUpsert(id=task.id, title=None))


class TestDeleteTask:

    async def test_deletes_task(self, make_event):
        event = await make_event()
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))

        await TaskService.delete_task("alice", task.id)

        assert await TaskService.list_tasks(event.id) == []

    async def test_second_delete_is_not_found(self, make_event):
        event = await make_event()
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))
        await TaskService.delete_task("alice", task.id)

        with pytest.raises(NotFoundError):
            await TaskService.delete_task("alice", task.id)

    async def test_missing_task_is_not_found(self, test_db):
        with pytest.raises(NotFoundError):
            await TaskService.delete_task("alice", "missing")

    async def test_other_actor_cannot_delete(self, make_event):
        event = await make_event(owner="alice")
        task = await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Mine"))

        with pytest.raises(ForbiddenError):
            await TaskService.delete_task("mallory", task.id)

        assert await TaskService.list_tasks(event.id) == [task]
