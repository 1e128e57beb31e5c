"""Pydantic schemas for Guests / RSVPs."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from sparkbytes.models.guest import GuestStatus
from sparkbytes.schemas.common import Envelope


class GuestRSVPCreate(BaseModel):
    # Presence is checked by the service so a missing field gets the
    # "Name and email are required" message rather than a schema error.
    name: Optional[str] = None
    email: Optional[str] = None


class GuestStatusUpdate(BaseModel):
    status: GuestStatus


class GuestOut(BaseModel):
    id: str
    event_id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    status: GuestStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class GuestResponse(Envelope):
    guest: GuestOut


class GuestListResponse(Envelope):
    guests: list[GuestOut] = []
