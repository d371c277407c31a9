"""
Pydantic schemas for event guests and their RSVP state.

As with tasks, ``GuestUpsert`` is used both to add a guest (no
``id``) and to change an existing one, for example to record an RSVP
answer.  Guests have no update timestamp; ``invited_at`` and
``responded_at`` describe the RSVP history instead.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RsvpStatus(str, Enum):
    INVITED = "invited"
    GOING = "going"
    MAYBE = "maybe"
    DECLINED = "declined"


class GuestUpsert(BaseModel):
    """Schema for creating or updating a guest."""

    id: Optional[str] = Field(None, description="Identifier of the guest to update; omit to create")
    event_id: Optional[str] = Field(None, description="Event the guest is invited to; required on creation")
    name: Optional[str] = Field(None, min_length=1, examples=["Ana"])
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    rsvp_status: Optional[RsvpStatus] = None
    notes: Optional[str] = None
    invited_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None


class GuestRead(BaseModel):
    """Schema for a guest returned by the API."""

    id: str
    event_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    rsvp_status: Optional[RsvpStatus] = None
    notes: Optional[str] = None
    invited_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
