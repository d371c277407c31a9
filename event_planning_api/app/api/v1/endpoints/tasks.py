"""
API endpoints for event preparation tasks.

A single ``POST /tasks/`` route creates a task (no ``id`` in the body)
or updates an existing one.  Tasks are deleted by their own id; the
event they belong to is looked up from the stored task.
"""

from fastapi import APIRouter, Depends

from event_planning_api.app.schemas.common import ApiResponse, EmptyPayload, TaskPayload
from event_planning_api.app.schemas.task import TaskUpsert
from event_planning_api.app.services.access_guard import get_current_actor
from event_planning_api.app.services.task_service import TaskService


router = APIRouter()


@router.post("/", response_model=ApiResponse[TaskPayload], summary="Create or update a task")
async def upsert_event_task(
    task: TaskUpsert,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[TaskPayload]:
    """Create a task for an event, or update the task given by ``id``.

    Creating requires ``event_id`` and ``title``.  Updating changes
    only the fields present in the body; passing an ``event_id`` other
    than the task's own event is refused with 403.
    """
    saved = await TaskService.upsert_task(actor_id, task)
    return ApiResponse(data=TaskPayload(task=saved))


@router.delete("/{task_id}", response_model=ApiResponse[EmptyPayload], summary="Delete a task")
async def delete_event_task(
    task_id: str,
    actor_id: str = Depends(get_current_actor),
) -> ApiResponse[EmptyPayload]:
    await TaskService.delete_task(actor_id, task_id)
    return ApiResponse(data=EmptyPayload())
