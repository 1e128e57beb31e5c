"""Guest / RSVP API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser, get_current_user
from sparkbytes.database import get_db
from sparkbytes.schemas.common import Envelope
from sparkbytes.schemas.event import EventListResponse
from sparkbytes.schemas.guest import (
    GuestRSVPCreate,
    GuestStatusUpdate,
    GuestResponse,
    GuestListResponse,
)
from sparkbytes.services import guest_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/event/{event_id}", response_model=GuestListResponse)
def list_guests(
    event_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Guest list of an event, newest first (organizer only)."""
    return {"guests": guest_service.list_event_guests(db, event_id, user)}


@router.post("/rsvp/{event_id}", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def rsvp(
    event_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """RSVP the authenticated caller to an event."""
    guest = guest_service.rsvp_authenticated(db, event_id, user)
    return {"message": "Successfully RSVP'd to event", "guest": guest}


@router.post("/rsvp-guest/{event_id}", response_model=GuestResponse, status_code=status.HTTP_201_CREATED)
def rsvp_guest(event_id: str, payload: GuestRSVPCreate, db: Session = Depends(get_db)):
    """RSVP without an account. Public events only, identified by email."""
    guest = guest_service.rsvp_anonymous(db, event_id, payload.name, payload.email)
    return {"message": "Successfully RSVP'd to event", "guest": guest}


@router.put("/{guest_id}", response_model=GuestResponse)
def update_guest(
    guest_id: str,
    payload: GuestStatusUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Set a guest's status (organizer only)."""
    return {"guest": guest_service.update_guest_status(db, guest_id, payload.status, user)}


@router.delete("/{guest_id}", response_model=Envelope)
def remove_guest(
    guest_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Remove a guest (organizer or the guest themselves)."""
    guest_service.remove_guest(db, guest_id, user)
    return {"message": "Guest removed successfully"}


@router.get("/my/events", response_model=EventListResponse)
def attending_events(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Events the caller holds a pending or confirmed RSVP for."""
    return {"events": guest_service.list_attending_events(db, user.user_id)}
