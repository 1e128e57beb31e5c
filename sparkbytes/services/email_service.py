"""Console email transport: messages are written to the log, never delivered."""
import logging
import uuid
from dataclasses import dataclass

from sparkbytes.config import settings

logger = logging.getLogger(__name__)


@dataclass
class EmailMessage:
    to: str
    subject: str
    text: str
    sender: str = ""


def send_email(message: EmailMessage) -> str:
    """Log the message and return a synthetic message id."""
    message_id = f"console-{uuid.uuid4().hex[:12]}"
    logger.info(
        "EMAIL %s from=%s to=%s subject=%r\n%s",
        message_id,
        message.sender or settings.EMAIL_FROM,
        message.to,
        message.subject,
        message.text,
    )
    return message_id


def send_verification_code(email: str, code: str, ttl_minutes: int) -> str:
    return send_email(
        EmailMessage(
            to=email,
            subject="Verification Code for Spark! Bytes",
            text=f"Your verification code is: {code}. This code will expire in {ttl_minutes} minutes.",
        )
    )
