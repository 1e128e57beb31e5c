"""Guest / RSVP service: the capacity-guarded reservation flow.

Seats are counted in ``events.reserved_count`` and taken with a single
conditional UPDATE, so two concurrent RSVPs cannot both pass the capacity
check. Each guest row carries an ``identity_key`` (user id or lower-cased
email) that is unique per event; the insert is flushed inside the same
transaction as the seat increment, so a duplicate rolls the seat back too.

Error precedence for a new RSVP:
1. event missing → NotFound
2. (anonymous only) event private → Forbidden
3. no seat left → CapacityExceeded
4. identity already registered → DuplicateRSVP
"""
import logging
from typing import Optional

from sqlalchemy import delete, or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser
from sparkbytes.errors import (
    CapacityExceededError,
    ConflictError,
    DuplicateRSVPError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from sparkbytes.models.event import Event
from sparkbytes.models.guest import Guest, GuestStatus, ACTIVE_STATUSES, identity_key_for
from sparkbytes.models.profile import Profile
from sparkbytes.services import alert_service
from sparkbytes.services.event_service import check_organizer, get_event

logger = logging.getLogger(__name__)

# Re-reads allowed when a guest changes between our read and our write.
STALE_RETRIES = 3


def _reserve_seat(db: Session, event_id: str) -> None:
    """Atomically take one seat, or raise CapacityExceeded when none is left."""
    result = db.execute(
        update(Event)
        .where(
            Event.id == event_id,
            or_(Event.capacity == 0, Event.reserved_count < Event.capacity),
        )
        .values(reserved_count=Event.reserved_count + 1)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        raise CapacityExceededError()


def _release_seat(db: Session, event_id: str) -> None:
    db.execute(
        update(Event)
        .where(Event.id == event_id, Event.reserved_count > 0)
        .values(reserved_count=Event.reserved_count - 1)
        .execution_options(synchronize_session=False)
    )


def _find_existing(db: Session, event_id: str, identity_key: str) -> Optional[str]:
    row = (
        db.query(Guest.id)
        .filter(Guest.event_id == event_id, Guest.identity_key == identity_key)
        .first()
    )
    return row.id if row else None


def _discard_stale(db: Session, guest_id: str) -> None:
    db.rollback()
    logger.info("Guest %s changed concurrently, re-reading", guest_id)


def _get_guest(db: Session, guest_id: str) -> Guest:
    guest = db.query(Guest).filter(Guest.id == guest_id).first()
    if not guest:
        raise NotFoundError("Guest not found")
    return guest


def _book(
    db: Session,
    event: Event,
    identity_key: str,
    duplicate_message: str,
    build_guest,
) -> Guest:
    """Take a seat and insert the guest in one transaction.

    ``build_guest`` is called only once the seat is held and no duplicate was
    found, so it may do further reads (e.g. the caller's profile).
    """
    event_id = event.id
    try:
        _reserve_seat(db, event_id)
        if _find_existing(db, event_id, identity_key):
            raise DuplicateRSVPError(duplicate_message)
        guest = build_guest()
        db.add(guest)
        db.flush()
    except (CapacityExceededError, DuplicateRSVPError) as exc:
        db.rollback()
        logger.info("RSVP to event %s refused: %s", event_id, exc.message)
        raise
    except IntegrityError:
        # Lost a race with a concurrent RSVP for the same identity.
        db.rollback()
        logger.warning("Concurrent duplicate RSVP to event %s (%s)", event_id, identity_key)
        raise DuplicateRSVPError(duplicate_message)
    return guest


def rsvp_authenticated(db: Session, event_id: str, user: CurrentUser) -> Guest:
    """RSVP the caller to an event; account RSVPs are confirmed immediately."""
    event = get_event(db, event_id)
    organizer_id = event.user_id
    title = event.title

    def build_guest() -> Guest:
        profile = db.query(Profile).filter(Profile.user_id == user.user_id).first()
        name = (profile.name if profile else None) or user.name or user.email
        email = (profile.email if profile else None) or user.email
        return Guest(
            event_id=event_id,
            user_id=user.user_id,
            name=name,
            email=email.lower() if email else None,
            status=GuestStatus.confirmed,
            identity_key=identity_key_for(user.user_id, None),
        )

    guest = _book(
        db,
        event,
        identity_key_for(user.user_id, None),
        "You have already RSVP'd to this event",
        build_guest,
    )
    if organizer_id != user.user_id:
        alert_service.notify(db, organizer_id, f"{guest.name or 'Someone'} RSVP'd to '{title}'", event_id)
    db.commit()
    db.refresh(guest)
    logger.info("User %s RSVP'd to event %s (guest %s)", user.user_id, event_id, guest.id)
    return guest


def rsvp_anonymous(db: Session, event_id: str, name: Optional[str], email: Optional[str]) -> Guest:
    """RSVP someone without an account; these wait in ``pending`` for the organizer."""
    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name or not email:
        raise ValidationError("Name and email are required")
    if "@" not in email:
        raise ValidationError("Please provide a valid email address")

    event = get_event(db, event_id)
    if not event.is_public:
        raise ForbiddenError("This event is private")
    organizer_id = event.user_id
    title = event.title

    key = identity_key_for(None, email)
    guest = _book(
        db,
        event,
        key,
        "This email has already RSVP'd to this event",
        lambda: Guest(
            event_id=event_id,
            user_id=None,
            name=name,
            email=email,
            status=GuestStatus.pending,
            identity_key=key,
        ),
    )
    alert_service.notify(db, organizer_id, f"{name} (guest) RSVP'd to '{title}'", event_id)
    db.commit()
    db.refresh(guest)
    logger.info("Anonymous guest %s RSVP'd to event %s", guest.id, event_id)
    return guest


def list_event_guests(db: Session, event_id: str, actor: CurrentUser) -> list[Guest]:
    event = get_event(db, event_id)
    check_organizer(event, actor.user_id, "Not authorized to view guest list")
    return (
        db.query(Guest)
        .filter(Guest.event_id == event_id)
        .order_by(Guest.created_at.desc())
        .all()
    )


def update_guest_status(db: Session, guest_id: str, new_status: GuestStatus, actor: CurrentUser) -> Guest:
    """Overwrite a guest's status (organizer only); any status may follow any other.

    The seat counter follows the guest in and out of the active set, and
    re-activating a guest on a full event is refused.
    """
    for _ in range(STALE_RETRIES):
        guest = _get_guest(db, guest_id)
        event = guest.event
        check_organizer(event, actor.user_id, "Not authorized to update guest status")

        old_status = guest.status
        # Only the request that still sees old_status may move the seat counter.
        changed = db.execute(
            update(Guest)
            .where(Guest.id == guest_id, Guest.status == old_status)
            .values(status=new_status)
            .execution_options(synchronize_session=False)
        ).rowcount
        if not changed:
            _discard_stale(db, guest_id)
            continue

        was_active = old_status in ACTIVE_STATUSES
        now_active = new_status in ACTIVE_STATUSES
        try:
            if now_active and not was_active:
                _reserve_seat(db, event.id)
            elif was_active and not now_active:
                _release_seat(db, event.id)
        except CapacityExceededError:
            db.rollback()
            raise

        if guest.user_id and guest.user_id != actor.user_id:
            alert_service.notify(
                db, guest.user_id, f"Your RSVP to '{event.title}' is now {new_status.value}", event.id
            )
        db.commit()
        db.refresh(guest)
        logger.info("Guest %s status %s -> %s", guest_id, old_status.value, new_status.value)
        return guest
    raise ConflictError("Guest was changed by another request, please retry")


def remove_guest(db: Session, guest_id: str, actor: CurrentUser) -> None:
    """Delete a guest row; allowed for the organizer or the guest's own user."""
    for _ in range(STALE_RETRIES):
        guest = _get_guest(db, guest_id)
        event = guest.event
        is_organizer = event.user_id == actor.user_id
        is_owner = guest.user_id is not None and guest.user_id == actor.user_id
        if not (is_organizer or is_owner):
            raise ForbiddenError("Not authorized to remove this guest")

        event_id = event.id
        was_active = guest.is_active
        removed = db.execute(
            delete(Guest)
            .where(Guest.id == guest_id, Guest.status == guest.status)
            .execution_options(synchronize_session=False)
        ).rowcount
        if not removed:
            _discard_stale(db, guest_id)
            continue

        if was_active:
            _release_seat(db, event_id)
        db.expunge(guest)
        db.commit()
        logger.info("Removed guest %s from event %s by user %s", guest_id, event_id, actor.user_id)
        return
    raise ConflictError("Guest was changed by another request, please retry")


def list_attending_events(db: Session, user_id: str) -> list[Event]:
    """Events the user holds an active RSVP for."""
    return (
        db.query(Event)
        .join(Guest, Guest.event_id == Event.id)
        .filter(Guest.user_id == user_id, Guest.status.in_(ACTIVE_STATUSES))
        .order_by(Event.date)
        .all()
    )
