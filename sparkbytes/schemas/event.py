"""Pydantic schemas for Events."""
import datetime as dt
from typing import Optional
from pydantic import BaseModel, Field

from sparkbytes.schemas.common import Envelope, Pagination


class EventCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    location: Optional[str] = None
    address: Optional[str] = None
    room: Optional[str] = None
    food: Optional[str] = None
    dietary: list[str] = []
    dietary_comment: Optional[str] = None
    image_url: Optional[str] = None
    tags: list[str] = []
    capacity: int = Field(0, ge=0)
    is_public: bool = True


class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    date: Optional[dt.date] = None
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    location: Optional[str] = None
    address: Optional[str] = None
    room: Optional[str] = None
    food: Optional[str] = None
    dietary: Optional[list[str]] = None
    dietary_comment: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[list[str]] = None
    capacity: Optional[int] = Field(None, ge=0)
    is_public: Optional[bool] = None
    ended: Optional[bool] = None


class EventOut(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    date: dt.date
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    location: Optional[str] = None
    address: Optional[str] = None
    room: Optional[str] = None
    food: Optional[str] = None
    dietary: Optional[list[str]] = None
    dietary_comment: Optional[str] = None
    image_url: Optional[str] = None
    tags: Optional[list[str]] = None
    capacity: int
    reserved_count: int
    is_public: bool
    ended: bool
    created_at: dt.datetime
    updated_at: dt.datetime

    model_config = {"from_attributes": True}


class EventDetailOut(EventOut):
    guest_count: int = 0


class EventResponse(Envelope):
    event: EventOut


class EventDetailResponse(Envelope):
    event: EventDetailOut


class EventListResponse(Envelope):
    events: list[EventOut] = []


class PaginatedEventListResponse(EventListResponse):
    pagination: Pagination
