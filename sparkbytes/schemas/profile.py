"""Pydantic schemas for Profiles."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from sparkbytes.schemas.common import Envelope


class ProfileUpsert(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[int] = None
    interests: Optional[list[str]] = None
    social_links: Optional[dict[str, str]] = None


class ProfileOut(BaseModel):
    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    major: Optional[str] = None
    graduation_year: Optional[int] = None
    interests: Optional[list[str]] = None
    social_links: Optional[dict[str, str]] = None
    is_verified: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProfileResponse(Envelope):
    profile: ProfileOut
