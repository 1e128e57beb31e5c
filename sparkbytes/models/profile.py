"""Profile ORM model: keyed by the auth provider's user id."""
from sqlalchemy import Column, String, Text, Integer, Boolean, DateTime, JSON
from sqlalchemy.sql import func
from sparkbytes.database import Base


class Profile(Base):
    __tablename__ = "profiles"

    user_id = Column(String(36), primary_key=True)
    name = Column(String(150), nullable=True)
    email = Column(String(255), nullable=True, index=True)
    bio = Column(Text, nullable=True, default="")
    avatar = Column(String(500), nullable=True, default="")
    major = Column(String(150), nullable=True, default="")
    graduation_year = Column(Integer, nullable=True)
    interests = Column(JSON, nullable=True, default=list)
    social_links = Column(JSON, nullable=True, default=dict)
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
