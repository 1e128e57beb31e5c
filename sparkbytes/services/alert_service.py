"""Alert fan-out for the notification panel.

Helpers here only stage rows on the caller's session; the calling service
commits them together with the change that triggered the alert.
"""
import logging
from typing import Iterable, Optional

from sqlalchemy.orm import Session

from sparkbytes.models.alert import Alert

logger = logging.getLogger(__name__)


def notify(db: Session, user_id: str, message: str, event_id: Optional[str] = None) -> Alert:
    alert = Alert(user_id=user_id, event_id=event_id, message=message[:500])
    db.add(alert)
    return alert


def notify_many(
    db: Session,
    user_ids: Iterable[str],
    message: str,
    event_id: Optional[str] = None,
    skip_user_id: Optional[str] = None,
) -> int:
    """Alert each distinct user once; ``skip_user_id`` (usually the actor) is left out."""
    sent = 0
    for uid in sorted(set(user_ids)):
        if not uid or uid == skip_user_id:
            continue
        notify(db, uid, message, event_id)
        sent += 1
    if sent:
        logger.debug("Queued %d alerts for event %s", sent, event_id)
    return sent
