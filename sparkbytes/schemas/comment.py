"""Pydantic schemas for Comments."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from sparkbytes.schemas.common import Envelope


class CommentCreate(BaseModel):
    content: str
    parent_id: Optional[str] = None


class CommentOut(BaseModel):
    id: str
    event_id: str
    user_id: str
    user_name: str = "Anonymous"
    content: str
    parent_id: Optional[str] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class CommentResponse(Envelope):
    comment: CommentOut


class CommentListResponse(Envelope):
    comments: list[CommentOut] = []
