"""Pending email verification codes, one per address."""
from sqlalchemy import Column, String, DateTime
from sparkbytes.database import Base


class VerificationCode(Base):
    __tablename__ = "verification_codes"

    email = Column(String(255), primary_key=True)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
