"""Event API routes: delegates to event_service for organizer checks and cascades."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser, get_current_user
from sparkbytes.config import settings
from sparkbytes.database import get_db
from sparkbytes.schemas.common import Envelope
from sparkbytes.schemas.event import (
    EventCreate,
    EventUpdate,
    EventResponse,
    EventDetailResponse,
    EventDetailOut,
    EventListResponse,
    PaginatedEventListResponse,
)
from sparkbytes.services import event_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=PaginatedEventListResponse)
def list_events(
    limit: int = Query(settings.EVENTS_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    page: int = Query(1, ge=1),
    tag: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    upcoming: bool = Query(False),
    include_ended: bool = Query(True),
    db: Session = Depends(get_db),
):
    """List public events with pagination, tag and text search."""
    events, pagination = event_service.list_public_events(
        db,
        limit=limit,
        page=page,
        tag=tag,
        search=search,
        upcoming=upcoming,
        include_ended=include_ended,
    )
    return {"events": events, "pagination": pagination}


@router.post("/", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create an event; the caller becomes its organizer."""
    event = event_service.create_event(db, user, payload.model_dump())
    return {"event": event}


@router.get("/my/events", response_model=EventListResponse)
def my_events(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Events organized by the caller."""
    return {"events": event_service.list_organizer_events(db, user.user_id)}


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(event_id: str, db: Session = Depends(get_db)):
    """Fetch a single event with its guest count."""
    event = event_service.get_event(db, event_id)
    detail = EventDetailOut.model_validate(event)
    detail.guest_count = event_service.count_guests(db, event_id)
    return {"event": detail}


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: str,
    payload: EventUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update an event (organizer only)."""
    updates = payload.model_dump(exclude_unset=True)
    return {"event": event_service.update_event(db, event_id, user, updates)}


@router.delete("/{event_id}", response_model=Envelope)
def delete_event(
    event_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete an event and everything attached to it (organizer only)."""
    event_service.delete_event(db, event_id, user)
    return {"message": "Event deleted successfully"}
