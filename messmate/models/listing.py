"""Listing (mess service) domain models."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class Listing(BaseModel):
    """A mess provider's published meal-subscription listing."""

    id: str = Field(default_factory=lambda: str(uuid4()))
    owner_id: Optional[str] = None
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(max_length=500)
    description: Optional[str] = None
    price_monthly: Decimal = Field(gt=0, description="Monthly base price")
    is_vegetarian: bool = False
    is_non_vegetarian: bool = False
    # 0.0 for both means the listing was never geocoded
    latitude: float = 0.0
    longitude: float = 0.0
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    @property
    def offers_vegetarian(self) -> bool:
        return self.is_vegetarian

    @property
    def offers_non_vegetarian(self) -> bool:
        return self.is_non_vegetarian

    @property
    def is_geocoded(self) -> bool:
        """Check if the listing has real coordinates."""
        return not (self.latitude == 0 and self.longitude == 0)


class ListingInput(BaseModel):
    """Input model for listing creation by a provider."""

    owner_id: Optional[str] = None
    name: str = Field(min_length=1, max_length=200)
    address: str = Field(max_length=500)
    description: Optional[str] = None
    price_monthly: Decimal = Field(gt=0)
    is_vegetarian: bool = False
    is_non_vegetarian: bool = False
    latitude: float = Field(default=0.0, ge=-90, le=90)
    longitude: float = Field(default=0.0, ge=-180, le=180)
