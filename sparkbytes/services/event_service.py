"""Event service: organizer authorization, listing filters and event lifecycle.

Deleting an event removes its guests, favorites and comments; guests that
have accounts are told through an alert.
"""
import logging
import math
from datetime import datetime
from typing import Any, Optional

import pytz
from sqlalchemy import String, cast, func, or_
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser
from sparkbytes.config import settings
from sparkbytes.errors import ForbiddenError, NotFoundError, ValidationError
from sparkbytes.models.event import Event
from sparkbytes.models.guest import Guest
from sparkbytes.services import alert_service

logger = logging.getLogger(__name__)

# Fields an organizer may never overwrite through an update.
PROTECTED_FIELDS = ("id", "user_id", "reserved_count", "created_at", "updated_at")
# Columns that are NOT NULL in the store; an explicit null for them is a client error.
REQUIRED_FIELDS = ("title", "date", "capacity", "is_public", "ended")


def campus_today():
    """Today's date on campus, independent of the server's timezone."""
    return datetime.now(pytz.timezone(settings.CAMPUS_TIMEZONE)).date()


def check_organizer(event: Event, actor_user_id: str, message: str) -> None:
    if event.user_id != actor_user_id:
        raise ForbiddenError(message)


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def count_guests(db: Session, event_id: str) -> int:
    return db.query(func.count(Guest.id)).filter(Guest.event_id == event_id).scalar() or 0


def create_event(db: Session, organizer: CurrentUser, fields: dict[str, Any]) -> Event:
    event = Event(user_id=organizer.user_id, reserved_count=0, **fields)
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by organizer %s", event.title, event.id, organizer.user_id)
    return event


def list_public_events(
    db: Session,
    limit: int,
    page: int,
    tag: Optional[str] = None,
    search: Optional[str] = None,
    upcoming: bool = False,
    include_ended: bool = True,
) -> tuple[list[Event], dict[str, int]]:
    """Return one page of public events plus pagination metadata."""
    query = db.query(Event).filter(Event.is_public.is_(True))
    if tag:
        # tags is a JSON list; matching its quoted text form works on SQLite and PostgreSQL
        query = query.filter(cast(Event.tags, String).like(f'%"{tag}"%'))
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Event.title.ilike(pattern), Event.description.ilike(pattern)))
    if upcoming:
        query = query.filter(Event.date >= campus_today())
    if not include_ended:
        query = query.filter(Event.ended.is_(False))

    total = query.count()
    events = (
        query.order_by(Event.date, Event.start_time, Event.created_at)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    pagination = {"total": total, "page": page, "pages": math.ceil(total / limit) if total else 0}
    return events, pagination


def list_organizer_events(db: Session, user_id: str) -> list[Event]:
    return db.query(Event).filter(Event.user_id == user_id).order_by(Event.date).all()


def update_event(db: Session, event_id: str, actor: CurrentUser, updates: dict[str, Any]) -> Event:
    """Apply a partial update (organizer only) and alert active guests."""
    event = get_event(db, event_id)
    check_organizer(event, actor.user_id, "Not authorized to update this event")

    nulled = sorted(f for f in REQUIRED_FIELDS if f in updates and updates[f] is None)
    if nulled:
        raise ValidationError(f"{', '.join(nulled)} cannot be null")

    for field, value in updates.items():
        if hasattr(event, field) and field not in PROTECTED_FIELDS:
            setattr(event, field, value)

    guest_user_ids = [
        g.user_id for g in event.guests if g.user_id and g.is_active
    ]
    alert_service.notify_many(
        db, guest_user_ids, f"Event '{event.title}' was updated", event.id, skip_user_id=actor.user_id
    )
    db.commit()
    db.refresh(event)
    logger.info("Updated event %s (fields: %s)", event_id, ", ".join(sorted(updates)) or "none")
    return event


def delete_event(db: Session, event_id: str, actor: CurrentUser) -> None:
    """Delete an event (organizer only); guests, favorites and comments go with it."""
    event = get_event(db, event_id)
    check_organizer(event, actor.user_id, "Not authorized to delete this event")

    title = event.title
    guest_total = len(event.guests)
    guest_user_ids = [g.user_id for g in event.guests if g.user_id]
    db.delete(event)
    alert_service.notify_many(
        db, guest_user_ids, f"Event '{title}' was cancelled by the organizer", event_id,
        skip_user_id=actor.user_id,
    )
    db.commit()
    logger.info("Deleted event %s and %d guest records", event_id, guest_total)
