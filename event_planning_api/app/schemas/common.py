"""
Response envelope shared by all endpoints.

Successful calls return ``{"success": true, "data": {...}}``; failures
are rendered by the exception handlers in ``main`` as
``{"success": false, "error": {...}}``.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from .event import EventRead
from .guest import GuestRead
from .task import TaskRead

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: DataT


class EventPayload(BaseModel):
    event: EventRead


class TaskPayload(BaseModel):
    task: TaskRead


class GuestPayload(BaseModel):
    guest: GuestRead


class EmptyPayload(BaseModel):
    pass
