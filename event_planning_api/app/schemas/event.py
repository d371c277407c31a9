"""
Pydantic models for event data.

``EventCreate`` validates creation payloads, ``EventUpdate`` models a
partial update as an explicit set of optional fields, and
``EventRead`` is the stored record returned to clients.  ``EventList``
and ``EventDetails`` are the response shapes of the listing and the
aggregate read.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from .guest import GuestRead
from .task import TaskRead


class EventStatus(str, Enum):
    PLANNING = "planning"
    CONFIRMED = "confirmed"
    DONE = "done"
    CANCELLED = "cancelled"


def _check_map_link(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError("location_map_link must be an http(s) URL")
    return value


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Product Launch"])
    description: Optional[str] = Field(None, examples=["Launch party for the new release"])
    start_date_time: Optional[datetime] = Field(None, examples=["2025-09-01T18:00:00Z"])
    end_date_time: Optional[datetime] = Field(None, examples=["2025-09-01T23:00:00Z"])
    time_zone: Optional[str] = Field(None, examples=["Europe/Berlin"])
    location_name: Optional[str] = None
    location_address: Optional[str] = None
    location_map_link: Optional[str] = None

    @field_validator("location_map_link")
    @classmethod
    def validate_map_link(cls, v: Optional[str]) -> Optional[str]:
        return _check_map_link(v)


class EventCreate(EventBase):
    """Schema for creating an event."""

    status: EventStatus = EventStatus.PLANNING


class EventUpdate(BaseModel):
    """Schema for updating an event.

    All fields are optional; only fields carrying a value are applied
    to the stored record.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    start_date_time: Optional[datetime] = None
    end_date_time: Optional[datetime] = None
    time_zone: Optional[str] = None
    location_name: Optional[str] = None
    location_address: Optional[str] = None
    location_map_link: Optional[str] = None
    status: Optional[EventStatus] = None

    @field_validator("location_map_link")
    @classmethod
    def validate_map_link(cls, v: Optional[str]) -> Optional[str]:
        return _check_map_link(v)

    def supplied_fields(self) -> dict:
        """Return the fields the client actually provided a value for."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class EventRead(EventBase):
    """Schema for reading an event from the API."""

    id: str
    owner_user_id: str
    status: EventStatus
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
    }


class EventList(BaseModel):
    items: List[EventRead]
    total: int


class EventDetails(BaseModel):
    """An event together with all of its tasks and guests."""

    event: EventRead
    tasks: List[TaskRead]
    guests: List[GuestRead]
