"""PostgreSQL repository for Review entities."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from messmate.logging import get_logger
from messmate.models.review import Review, ReviewInput
from messmate.storage.db_models import ReviewTable
from messmate.storage.repository_base import RepositoryBase

logger = get_logger(__name__)


class PostgresReviewRepository(RepositoryBase[Review]):
    """Review repository over the ``reviews`` table."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def _get_row(self, id: str) -> Optional[ReviewTable]:
        stmt = select(ReviewTable).where(ReviewTable.id == id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_id(self, id: str) -> Optional[Review]:
        """Retrieve review by ID."""
        db_review = await self._get_row(id)
        if not db_review:
            return None
        return self._to_domain_model(db_review)

    async def get_by_user_and_listing(
        self, user_id: str, listing_id: str
    ) -> Optional[Review]:
        """Retrieve the single review a user left on a listing, if any."""
        stmt = (
            select(ReviewTable)
            .where(ReviewTable.user_id == user_id)
            .where(ReviewTable.mess_id == listing_id)
        )
        result = await self.session.execute(stmt)
        db_review = result.scalar_one_or_none()
        if not db_review:
            return None
        return self._to_domain_model(db_review)

    async def create(self, entity: ReviewInput) -> Review:
        """
        Create new review.

        The insert runs in a savepoint, so a duplicate (user, listing) pair
        raises IntegrityError without spoiling the caller's session.
        """
        db_review = ReviewTable(
            mess_id=entity.listing_id,
            user_id=entity.user_id,
            rating=entity.rating,
            comment=entity.comment,
        )

        async with self.session.begin_nested():
            self.session.add(db_review)
            await self.session.flush()

        logger.info(
            "review_created",
            review_id=db_review.id,
            listing_id=entity.listing_id,
            rating=entity.rating,
        )

        return self._to_domain_model(db_review)

    async def update(self, entity: Review) -> Review:
        """Update rating and comment of an existing review."""
        db_review = await self._get_row(entity.id)

        if not db_review:
            raise ValueError(f"Review not found: {entity.id}")

        db_review.rating = entity.rating
        db_review.comment = entity.comment
        db_review.updated_at = datetime.utcnow()

        await self.session.flush()

        logger.info("review_updated", review_id=entity.id, rating=entity.rating)

        return self._to_domain_model(db_review)

    async def list_all(self) -> list[Review]:
        """Get every review."""
        stmt = select(ReviewTable).order_by(ReviewTable.created_at, ReviewTable.id)
        result = await self.session.execute(stmt)
        return [self._to_domain_model(row) for row in result.scalars().all()]

    async def list_for_listing(self, listing_id: str) -> list[Review]:
        """Get a listing's reviews, newest first."""
        stmt = (
            select(ReviewTable)
            .where(ReviewTable.mess_id == listing_id)
            .order_by(ReviewTable.created_at.desc(), ReviewTable.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain_model(row) for row in result.scalars().all()]

    def _to_domain_model(self, db_review: ReviewTable) -> Review:
        """Convert database model to domain model."""
        return Review(
            id=db_review.id,
            listing_id=db_review.mess_id,
            user_id=db_review.user_id,
            rating=db_review.rating,
            comment=db_review.comment,
            created_at=db_review.created_at,
            updated_at=db_review.updated_at,
        )
