"""Response envelope shared by every endpoint."""
from typing import Optional
from pydantic import BaseModel


class Envelope(BaseModel):
    success: bool = True
    message: Optional[str] = None


class Pagination(BaseModel):
    total: int
    page: int
    pages: int
