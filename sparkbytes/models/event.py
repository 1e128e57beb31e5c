"""Event ORM model."""
import uuid
from sqlalchemy import Column, String, Text, Date, Time, DateTime, Integer, Boolean, JSON, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sparkbytes.database import Base


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("capacity >= 0", name="ck_events_capacity_non_negative"),
        CheckConstraint("reserved_count >= 0", name="ck_events_reserved_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), nullable=False, index=True)  # organizer
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    end_time = Column(Time, nullable=True)
    location = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)
    room = Column(String(100), nullable=True)
    food = Column(String(500), nullable=True)
    dietary = Column(JSON, nullable=True, default=list)
    dietary_comment = Column(String(500), nullable=True)
    image_url = Column(String(500), nullable=True)
    tags = Column(JSON, nullable=True, default=list)
    capacity = Column(Integer, nullable=False, default=0)  # 0 = unlimited
    reserved_count = Column(Integer, nullable=False, default=0)  # pending + confirmed guests
    is_public = Column(Boolean, nullable=False, default=True)
    ended = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    guests = relationship(
        "Guest",
        back_populates="event",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="desc(Guest.created_at)",
    )
    favorites = relationship("Favorite", back_populates="event", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship("Comment", cascade="all, delete-orphan", passive_deletes=True)
