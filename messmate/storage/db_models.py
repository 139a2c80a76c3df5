"""SQLAlchemy database models.

Maps domain models to the hosted ``mess_services`` and ``reviews`` tables.
IDs are stored as UUID strings, matching the hosted schema's text ids.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


class MessServiceTable(Base):
    """Listing entity table."""

    __tablename__ = "mess_services"

    id = Column(String(36), primary_key=True, default=_new_id)
    owner_id = Column(String(36), nullable=True, index=True)
    name = Column(String(200), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    price_monthly = Column(Numeric(10, 2), nullable=False)
    is_vegetarian = Column(Boolean, nullable=False, default=False)
    is_non_vegetarian = Column(Boolean, nullable=False, default=False)
    latitude = Column(Float, nullable=False, default=0.0)
    longitude = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    reviews = relationship("ReviewTable", back_populates="mess_service")

    __table_args__ = (
        CheckConstraint("price_monthly > 0", name="check_price_positive"),
    )


class ReviewTable(Base):
    """Review entity table."""

    __tablename__ = "reviews"

    id = Column(String(36), primary_key=True, default=_new_id)
    mess_id = Column(String(36), ForeignKey("mess_services.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(36), nullable=False)
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    mess_service = relationship("MessServiceTable", back_populates="reviews")

    __table_args__ = (
        UniqueConstraint("user_id", "mess_id", name="uq_reviews_user_mess"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="check_rating_range"),
        Index("ix_reviews_mess_id", mess_id),
    )
