"""
Unit tests for EventService.

Tests event lifecycle scoped to the owning user:
- Creation defaults and round-trip of all fields
- Partial updates and the empty-update rule
- Cascading, transactional delete
- Listing with the optional status filter
"""

import sqlite3
from datetime import datetime, timezone

import pytest

from event_planning_api.app.core.db import get_connection
from event_planning_api.app.core.exceptions import ForbiddenError, InputValidationError, NotFoundError
from event_planning_api.app.schemas.event import EventCreate, EventStatus, EventUpdate
from event_planning_api.app.schemas.guest import GuestUpsert
from event_planning_api.app.schemas.task import TaskUpsert
from event_planning_api.app.services.access_guard import AccessGuard
from event_planning_api.app.services.event_service import EventService
from event_planning_api.app.services.guest_service import GuestService
from event_planning_api.app.services.task_service import TaskService

pytestmark = pytest.mark.asyncio


async def test_create_event_defaults(test_db):
    event = await EventService.create_event("alice", EventCreate(title="Launch"))

    assert event.status == EventStatus.PLANNING
    assert event.owner_user_id == "alice"
    assert event.id
    assert event.created_at == event.updated_at


async def test_create_event_round_trip(test_db, sample_event_data):
    data = EventCreate(**sample_event_data(status="confirmed"))

    created = await EventService.create_event("alice", data)
    stored = await AccessGuard.authorize_event_owner("alice", created.id)

    assert stored == created
    assert stored.start_date_time == datetime(2025, 9, 1, 18, 0, tzinfo=timezone.utc)
    assert stored.time_zone == "Europe/Berlin"
    assert stored.location_map_link == "https://maps.example.com/?q=rooftop"
    assert stored.status == EventStatus.CONFIRMED


async def test_create_events_get_distinct_ids(test_db):
    first = await EventService.create_event("alice", EventCreate(title="One"))
    second = await EventService.create_event("alice", EventCreate(title="Two"))

    assert first.id != second.id


async def test_map_link_must_be_http_url():
    with pytest.raises(ValueError):
        EventCreate(title="Launch", location_map_link="not a url")


async def test_update_event_merges_supplied_fields(test_db, sample_event_data):
    created = await EventService.create_event("alice", EventCreate(**sample_event_data()))

    updated = await EventService.update_event(
        "alice", created.id, EventUpdate(status="confirmed")
    )

    assert updated.status == EventStatus.CONFIRMED
    assert updated.title == created.title
    assert updated.location_name == created.location_name
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.created_at
    assert await AccessGuard.authorize_event_owner("alice", created.id) == updated


async def test_update_event_without_fields_is_rejected(test_db):
    created = await EventService.create_event("alice", EventCreate(title="Launch"))

    with pytest.raises(InputValidationError):
        await EventService.update_event("alice", created.id, EventUpdate())

    stored = await AccessGuard.authorize_event_owner("alice", created.id)
    assert stored.updated_at == created.updated_at


async def test_empty_update_is_rejected_before_ownership_check(test_db):
    with pytest.raises(InputValidationError):
        await EventService.update_event("alice", "missing", EventUpdate())


async def test_update_event_by_other_actor_is_forbidden(test_db):
    created = await EventService.create_event("alice", EventCreate(title="Launch"))

    with pytest.raises(ForbiddenError):
        await EventService.update_event("mallory", created.id, EventUpdate(title="Mine"))

    stored = await AccessGuard.authorize_event_owner("alice", created.id)
    assert stored.title == "Launch"


async def test_update_missing_event_is_not_found(test_db):
    with pytest.raises(NotFoundError):
        await EventService.update_event("alice", "missing", EventUpdate(title="x"))


async def test_status_transitions_are_not_restricted(test_db):
    created = await EventService.create_event("alice", EventCreate(title="Launch", status="done"))

    updated = await EventService.update_event("alice", created.id, EventUpdate(status="planning"))

    assert updated.status == EventStatus.PLANNING


async def test_delete_event_cascades_to_children(test_db, count_rows):
    event = await EventService.create_event("alice", EventCreate(title="Launch"))
    await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))
    await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Order cake"))
    await GuestService.upsert_guest("alice", GuestUpsert(event_id=event.id, name="Ana"))

    await EventService.delete_event("alice", event.id)

    assert count_rows("event_tasks", event.id) == 0
    assert count_rows("event_guests", event.id) == 0
    with pytest.raises(NotFoundError):
        await AccessGuard.authorize_event_owner("alice", event.id)


async def test_delete_event_leaves_other_events_alone(test_db, count_rows):
    doomed = await EventService.create_event("alice", EventCreate(title="Doomed"))
    kept = await EventService.create_event("alice", EventCreate(title="Kept"))
    await TaskService.upsert_task("alice", TaskUpsert(event_id=kept.id, title="Stay"))

    await EventService.delete_event("alice", doomed.id)

    assert count_rows("event_tasks", kept.id) == 1


async def test_delete_event_is_atomic(test_db, count_rows):
    event = await EventService.create_event("alice", EventCreate(title="Launch"))
    await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))
    await GuestService.upsert_guest("alice", GuestUpsert(event_id=event.id, name="Ana"))
    conn = get_connection()
    try:
        conn.execute(
            "CREATE TRIGGER block_event_delete BEFORE DELETE ON events "
            "BEGIN SELECT RAISE(ABORT, 'event delete blocked'); END"
        )
        conn.commit()
    finally:
        conn.close()

    with pytest.raises(sqlite3.Error):
        await EventService.delete_event("alice", event.id)

    assert count_rows("event_tasks", event.id) == 1
    assert count_rows("event_guests", event.id) == 1
    assert (await AccessGuard.authorize_event_owner("alice", event.id)).id == event.id


async def test_delete_event_by_other_actor_is_forbidden(test_db, count_rows):
    event = await EventService.create_event("alice", EventCreate(title="Launch"))
    await TaskService.upsert_task("alice", TaskUpsert(event_id=event.id, title="Book venue"))

    with pytest.raises(ForbiddenError):
        await EventService.delete_event("mallory", event.id)

    assert count_rows("event_tasks", event.id) == 1


async def test_list_events_only_returns_own_events(test_db):
    await EventService.create_event("alice", EventCreate(title="A1"))
    await EventService.create_event("alice", EventCreate(title="A2"))
    await EventService.create_event("bob", EventCreate(title="B1"))

    items, total = await EventService.list_events("alice")

    assert total == 2
    assert {event.title for event in items} == {"A1", "A2"}
    assert all(event.owner_user_id == "alice" for event in items)


async def test_list_events_status_filter(test_db):
    await EventService.create_event("alice", EventCreate(title="Draft"))
    await EventService.create_event("alice", EventCreate(title="Booked", status="confirmed"))

    items, total = await EventService.list_events("alice", EventStatus.CONFIRMED)

    assert total == 1
    assert items[0].title == "Booked"


async def test_list_events_empty(test_db):
    assert await EventService.list_events("nobody") == ([], 0)
