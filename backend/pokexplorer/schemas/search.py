"""Search and search-history schemas."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SearchRequest(BaseModel):
    """Body of ``POST /api/search``."""

    term: Optional[str] = Field(None, description="Pokémon name or national dex ID")


class SearchHistoryRead(BaseModel):
    """A stored search as returned by ``GET /api/search/history``."""

    model_config = ConfigDict(from_attributes=True)

    term: str = Field(..., description="Lowercased search term")
    user: int = Field(
        ...,
        validation_alias=AliasChoices("user_id", "user"),
        description="ID of the user who searched",
    )
    timestamp: datetime = Field(..., description="When the search was made (UTC)")

    @field_validator("timestamp")
    @classmethod
    def ensure_aware(cls, value: datetime) -> datetime:
        # SQLite drops tzinfo on the way back out
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value
