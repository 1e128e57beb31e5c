"""Pydantic schemas for Favorites."""
from sparkbytes.schemas.common import Envelope


class FavoriteIdsResponse(Envelope):
    event_ids: list[str] = []
