"""Pydantic schemas for Alerts."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from sparkbytes.schemas.common import Envelope


class AlertOut(BaseModel):
    id: str
    event_id: Optional[str] = None
    message: str
    is_read: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class AlertListResponse(Envelope):
    alerts: list[AlertOut] = []


class AlertCountResponse(Envelope):
    count: int
