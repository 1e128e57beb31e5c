"""Comment API routes, mounted under /api/events/{event_id}/comments."""
import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser, get_current_user
from sparkbytes.database import get_db
from sparkbytes.errors import NotFoundError, ValidationError
from sparkbytes.models.comment import Comment
from sparkbytes.models.profile import Profile
from sparkbytes.schemas.comment import CommentCreate, CommentOut, CommentResponse, CommentListResponse
from sparkbytes.services.event_service import get_event

logger = logging.getLogger(__name__)
router = APIRouter()


def _with_user_names(db: Session, comments: list[Comment]) -> list[CommentOut]:
    """Attach each author's profile name; authors without a profile show as Anonymous."""
    user_ids = {c.user_id for c in comments}
    names = {}
    if user_ids:
        rows = db.query(Profile.user_id, Profile.name).filter(Profile.user_id.in_(user_ids)).all()
        names = {row.user_id: row.name for row in rows if row.name}
    out = []
    for c in comments:
        item = CommentOut.model_validate(c)
        item.user_name = names.get(c.user_id, "Anonymous")
        out.append(item)
    return out


@router.get("/{event_id}/comments", response_model=CommentListResponse)
def list_comments(
    event_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Comments of an event, oldest first."""
    get_event(db, event_id)
    comments = (
        db.query(Comment)
        .filter(Comment.event_id == event_id)
        .order_by(Comment.created_at.asc())
        .all()
    )
    return {"comments": _with_user_names(db, comments)}


@router.post("/{event_id}/comments", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def post_comment(
    event_id: str,
    payload: CommentCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Post a comment, optionally as a reply to another comment on the same event."""
    get_event(db, event_id)
    content = payload.content.strip()
    if not content:
        raise ValidationError("Comment cannot be empty")

    if payload.parent_id:
        parent = (
            db.query(Comment)
            .filter(Comment.id == payload.parent_id, Comment.event_id == event_id)
            .first()
        )
        if not parent:
            raise NotFoundError("Parent comment not found")

    comment = Comment(event_id=event_id, user_id=user.user_id, content=content, parent_id=payload.parent_id)
    db.add(comment)
    db.commit()
    db.refresh(comment)
    logger.info("User %s commented on event %s", user.user_id, event_id)
    return {"comment": _with_user_names(db, [comment])[0]}
