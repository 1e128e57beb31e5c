"""Alert API routes: the notification panel."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy import func
from sqlalchemy.orm import Session

from sparkbytes.auth import CurrentUser, get_current_user
from sparkbytes.database import get_db
from sparkbytes.errors import NotFoundError
from sparkbytes.models.alert import Alert
from sparkbytes.schemas.alert import AlertListResponse, AlertCountResponse
from sparkbytes.schemas.common import Envelope

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_own_alert(db: Session, alert_id: str, user_id: str) -> Alert:
    # Someone else's alert is reported as missing, not forbidden.
    alert = db.query(Alert).filter(Alert.id == alert_id, Alert.user_id == user_id).first()
    if not alert:
        raise NotFoundError("Alert not found")
    return alert


@router.get("/", response_model=AlertListResponse)
def list_alerts(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    alerts = (
        db.query(Alert)
        .filter(Alert.user_id == user.user_id)
        .order_by(Alert.created_at.desc())
        .all()
    )
    return {"alerts": alerts}


@router.get("/unread-count", response_model=AlertCountResponse)
def unread_count(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    count = (
        db.query(func.count(Alert.id))
        .filter(Alert.user_id == user.user_id, Alert.is_read.is_(False))
        .scalar()
    )
    return {"count": count or 0}


@router.put("/{alert_id}/read", response_model=Envelope)
def mark_read(alert_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    alert = _get_own_alert(db, alert_id, user.user_id)
    alert.is_read = True
    db.commit()
    return {"message": "Alert marked as read"}


@router.delete("/{alert_id}", response_model=Envelope)
def delete_alert(alert_id: str, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    alert = _get_own_alert(db, alert_id, user.user_id)
    db.delete(alert)
    db.commit()
    logger.info("User %s deleted alert %s", user.user_id, alert_id)
    return {"message": "Alert deleted"}
