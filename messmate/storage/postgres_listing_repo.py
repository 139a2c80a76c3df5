"""PostgreSQL repository for Listing entities."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from messmate.logging import get_logger
from messmate.models.listing import Listing, ListingInput
from messmate.storage.db_models import MessServiceTable
from messmate.storage.repository_base import RepositoryBase

logger = get_logger(__name__)


class PostgresListingRepository(RepositoryBase[Listing]):
    """Listing repository over the ``mess_services`` table."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, id: str) -> Optional[MessServiceTable]:
        stmt = select(MessServiceTable).where(MessServiceTable.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, id: str) -> Optional[Listing]:
        """Retrieve listing by ID."""
        db_listing = await self._get_row(id)
        if not db_listing:
            return None
        return self._to_domain_model(db_listing)

    async def create(self, entity: ListingInput) -> Listing:
        """Create new listing."""
        db_listing = MessServiceTable(
            owner_id=entity.owner_id,
            name=entity.name,
            address=entity.address,
            description=entity.description,
            price_monthly=entity.price_monthly,
            is_vegetarian=entity.is_vegetarian,
            is_non_vegetarian=entity.is_non_vegetarian,
            latitude=entity.latitude,
            longitude=entity.longitude,
        )

        self.session.add(db_listing)
        await self.session.flush()

        logger.info("listing_created", listing_id=db_listing.id, owner_id=entity.owner_id)

        return self._to_domain_model(db_listing)

    async def update(self, entity: Listing) -> Listing:
        """Update existing listing."""
        db_listing = await self._get_row(entity.id)

        if not db_listing:
            raise ValueError(f"Listing not found: {entity.id}")

        db_listing.name = entity.name
        db_listing.address = entity.address
        db_listing.description = entity.description
        db_listing.price_monthly = entity.price_monthly
        db_listing.is_vegetarian = entity.is_vegetarian
        db_listing.is_non_vegetarian = entity.is_non_vegetarian
        db_listing.latitude = entity.latitude
        db_listing.longitude = entity.longitude
        db_listing.updated_at = datetime.utcnow()

        await self.session.flush()

        logger.info("listing_updated", listing_id=entity.id)

        return self._to_domain_model(db_listing)

    async def list_all(self) -> list[Listing]:
        """Get every listing, oldest first."""
        stmt = select(MessServiceTable).order_by(
            MessServiceTable.created_at, MessServiceTable.id
        )
        result = await self.session.execute(stmt)
        return [self._to_domain_model(row) for row in result.scalars().all()]

    def _to_domain_model(self, db_listing: MessServiceTable) -> Listing:
        """Convert database model to domain model."""
        return Listing(
            id=db_listing.id,
            owner_id=db_listing.owner_id,
            name=db_listing.name,
            address=db_listing.address,
            description=db_listing.description,
            price_monthly=Decimal(str(db_listing.price_monthly)),
            is_vegetarian=bool(db_listing.is_vegetarian),
            is_non_vegetarian=bool(db_listing.is_non_vegetarian),
            latitude=db_listing.latitude or 0.0,
            longitude=db_listing.longitude or 0.0,
            created_at=db_listing.created_at,
            updated_at=db_listing.updated_at,
        )
