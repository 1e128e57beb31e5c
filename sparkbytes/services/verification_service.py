"""Email verification codes stored as expiring rows, one per address."""
import logging
import secrets
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from sparkbytes.config import settings
from sparkbytes.errors import DuplicateError, ValidationError
from sparkbytes.models.profile import Profile
from sparkbytes.models.verification_code import VerificationCode
from sparkbytes.services import email_service

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands DateTime(timezone=True) columns back naive
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _normalize_campus_email(email: str | None) -> str:
    email = (email or "").strip().lower()
    domain = settings.ALLOWED_EMAIL_DOMAIN.lower()
    if not email or not email.endswith(f"@{domain}"):
        raise ValidationError(f"Please provide a valid {domain} email address")
    return email


def generate_code() -> str:
    return str(100000 + secrets.randbelow(900000))


def issue_code(db: Session, email: str | None) -> str:
    """Store a fresh code for ``email`` (replacing any previous one) and send it."""
    email = _normalize_campus_email(email)
    verified = (
        db.query(Profile)
        .filter(Profile.email == email, Profile.is_verified.is_(True))
        .first()
    )
    if verified:
        raise DuplicateError("An account with this email already exists")

    now = datetime.now(timezone.utc)
    purged = (
        db.query(VerificationCode)
        .filter(VerificationCode.expires_at < now)
        .delete(synchronize_session=False)
    )
    if purged:
        logger.debug("Purged %d expired verification codes", purged)

    code = generate_code()
    ttl = settings.VERIFICATION_CODE_TTL_MINUTES
    entry = db.get(VerificationCode, email)
    if entry is None:
        entry = VerificationCode(email=email)
        db.add(entry)
    entry.code = code
    entry.expires_at = now + timedelta(minutes=ttl)
    db.commit()

    email_service.send_verification_code(email, code, ttl)
    logger.info("Issued verification code for %s (expires in %d min)", email, ttl)
    return code


def verify_code(db: Session, email: str | None, code: str | None) -> None:
    """Consume a code; raise ValidationError when it is missing, expired or wrong."""
    if not email or not code:
        raise ValidationError("Email and verification code are required")
    email = email.strip().lower()

    entry = db.get(VerificationCode, email)
    if entry is None:
        raise ValidationError("No verification code found for this email")

    if datetime.now(timezone.utc) > _as_utc(entry.expires_at):
        db.delete(entry)
        db.commit()
        raise ValidationError("Verification code has expired")

    if not secrets.compare_digest(entry.code, code.strip()):
        raise ValidationError("Invalid verification code")

    db.delete(entry)
    updated = (
        db.query(Profile)
        .filter(Profile.email == email)
        .update({Profile.is_verified: True}, synchronize_session=False)
    )
    db.commit()
    logger.info("Verified email %s (%d profiles marked verified)", email, updated)
