"""Favorite API routes."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser, get_current_user
from sparkbytes.database import get_db
from sparkbytes.errors import DuplicateError, NotFoundError
from sparkbytes.models.event import Event
from sparkbytes.models.favorite import Favorite
from sparkbytes.schemas.common import Envelope
from sparkbytes.schemas.event import EventListResponse
from sparkbytes.schemas.favorite import FavoriteIdsResponse
from sparkbytes.services.event_service import get_event

logger = logging.getLogger(__name__)
router = APIRouter()


def _find_favorite(db: Session, user_id: str, event_id: str):
    return db.get(Favorite, (user_id, event_id))


@router.get("/", response_model=EventListResponse)
def list_favorite_events(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    events = (
        db.query(Event)
        .join(Favorite, Favorite.event_id == Event.id)
        .filter(Favorite.user_id == user.user_id)
        .order_by(Event.date)
        .all()
    )
    return {"events": events}


@router.get("/ids", response_model=FavoriteIdsResponse)
def list_favorite_ids(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    rows = db.query(Favorite.event_id).filter(Favorite.user_id == user.user_id).all()
    return {"event_ids": [row.event_id for row in rows]}


@router.post("/{event_id}", response_model=Envelope, status_code=status.HTTP_201_CREATED)
def add_favorite(
    event_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_event(db, event_id)
    existing = _find_favorite(db, user.user_id, event_id)
    if existing:
        raise DuplicateError("Event is already in your favorites")
    db.add(Favorite(user_id=user.user_id, event_id=event_id))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request saved the same favorite first.
        db.rollback()
        raise DuplicateError("Event is already in your favorites")
    logger.info("User %s favorited event %s", user.user_id, event_id)
    return {"message": "Event added to favorites"}


@router.delete("/{event_id}", response_model=Envelope)
def remove_favorite(
    event_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    favorite = _find_favorite(db, user.user_id, event_id)
    if not favorite:
        raise NotFoundError("Favorite not found")
    db.delete(favorite)
    db.commit()
    logger.info("User %s unfavorited event %s", user.user_id, event_id)
    return {"message": "Event removed from favorites"}
