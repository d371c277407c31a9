"""
Pydantic models for event preparation tasks.

A single ``TaskUpsert`` payload serves both creation (no ``id``) and
update (``id`` given).  Validation that depends on which of the two
applies, such as ``title`` being required on creation, is done by
``TaskService``.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"


class TaskPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class TaskUpsert(BaseModel):
    """Schema for creating or updating a task."""

    id: Optional[str] = Field(None, description="Identifier of the task to update; omit to create")
    event_id: Optional[str] = Field(None, description="Event the task belongs to; required on creation")
    title: Optional[str] = Field(None, min_length=1, examples=["Book the venue"])
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    user_id: Optional[str] = Field(None, description="Assignee of the task")


class TaskRead(BaseModel):
    """Schema for a task returned by the API."""

    id: str
    event_id: str
    user_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    status: TaskStatus
    priority: Optional[TaskPriority] = None
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }
