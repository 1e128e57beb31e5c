"""Pydantic schemas for email verification."""
from typing import Optional
from pydantic import BaseModel


class VerificationRequest(BaseModel):
    email: Optional[str] = None


class VerificationConfirm(BaseModel):
    email: Optional[str] = None
    code: Optional[str] = None
