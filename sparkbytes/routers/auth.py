"""Email verification routes. Token issuance itself belongs to the auth provider."""
import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sparkbytes.database import get_db
from sparkbytes.schemas.auth import VerificationRequest, VerificationConfirm
from sparkbytes.schemas.common import Envelope
from sparkbytes.services import verification_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/request-verification", response_model=Envelope)
def request_verification(payload: VerificationRequest, db: Session = Depends(get_db)):
    """Issue a verification code and send it to the campus email address."""
    verification_service.issue_code(db, payload.email)
    return {"message": "Verification code sent to your email"}


@router.post("/verify-email", response_model=Envelope)
def verify_email(payload: VerificationConfirm, db: Session = Depends(get_db)):
    verification_service.verify_code(db, payload.email, payload.code)
    return {"message": "Email verified successfully"}
