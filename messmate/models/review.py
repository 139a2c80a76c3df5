"""Review domain models."""

from datetime import datetime
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000


class Review(BaseModel):
    """A user's rating of a listing. One per (user, listing)."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    listing_id: str
    user_id: str
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)


class ReviewInput(BaseModel):
    """Input model for review submission."""

    listing_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING)
    comment: Optional[str] = Field(default=None, max_length=MAX_COMMENT_LENGTH)

    @field_validator("comment")
    @classmethod
    def normalize_comment(cls, v: Optional[str]) -> Optional[str]:
        """Trim the comment; blank comments are stored as None."""
        if v is None:
            return None
        v = v.strip()
        return v or None
