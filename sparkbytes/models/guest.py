"""Guest (RSVP) ORM model."""
import uuid
import enum
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sparkbytes.database import Base


class GuestStatus(str, enum.Enum):
    pending = "pending"
    confirmed = "confirmed"
    declined = "declined"
    attended = "attended"


# Guests in these states hold a seat against the event's capacity.
ACTIVE_STATUSES = (GuestStatus.pending, GuestStatus.confirmed)


def identity_key_for(user_id: str | None, email: str | None) -> str:
    """User id for account RSVPs, lower-cased email for anonymous ones."""
    if user_id:
        return f"user:{user_id}"
    return f"email:{(email or '').strip().lower()}"


class Guest(Base):
    __tablename__ = "guests"
    __table_args__ = (
        UniqueConstraint("event_id", "identity_key", name="uq_guests_event_identity"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), nullable=True, index=True)
    name = Column(String(150), nullable=True)
    email = Column(String(255), nullable=True)
    status = Column(SAEnum(GuestStatus), nullable=False, default=GuestStatus.pending)
    identity_key = Column(String(300), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="guests")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES
