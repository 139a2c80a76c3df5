"""Review submission service.

A user holds at most one review per listing: a second submission
rewrites the first in place instead of adding a row.
"""

from typing import Optional

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from messmate.logging import get_logger
from messmate.logging.audit import AuditLogger
from messmate.models.review import Review, ReviewInput
from messmate.storage.postgres_listing_repo import PostgresListingRepository
from messmate.storage.postgres_review_repo import PostgresReviewRepository

logger = get_logger(__name__)


class ListingNotFoundError(ValueError):
    """Raised when a review targets a listing that does not exist."""

    def __init__(self, listing_id: str):
        super().__init__(f"Listing not found: {listing_id}")
        self.listing_id = listing_id


class ReviewSubmissionService:
    """Validates and saves reviews with insert-or-update semantics."""

    def __init__(
        self,
        review_repo: PostgresReviewRepository,
        listing_repo: PostgresListingRepository,
    ):
        self.review_repo = review_repo
        self.listing_repo = listing_repo

    async def submit(
        self,
        user_id: str,
        listing_id: str,
        rating: int,
        comment: Optional[str] = None,
    ) -> tuple[Review, bool]:
        """
        Submit a review, updating the user's earlier review if one exists.

        Args:
            user_id: Reviewing user
            listing_id: Listing being reviewed
            rating: Integer rating from 1 to 5
            comment: Optional free text; blank becomes None

        Returns:
            Tuple of (saved review, True if a new review was created)

        Raises:
            ValidationError: If the rating or comment is invalid
            ListingNotFoundError: If the listing does not exist
        """
        try:
            review_input = ReviewInput(
                listing_id=listing_id,
                user_id=user_id,
                rating=rating,
                comment=comment,
            )
        except ValidationError as e:
            AuditLogger.log_review_rejected(user_id, listing_id, reason=str(e))
            raise

        listing = await self.listing_repo.get_by_id(listing_id)
        if listing is None:
            AuditLogger.log_review_rejected(user_id, listing_id, reason="listing_not_found")
            raise ListingNotFoundError(listing_id)

        existing = await self.review_repo.get_by_user_and_listing(user_id, listing_id)

        if existing is None:
            try:
                review = await self.review_repo.create(review_input)
                created = True
            except IntegrityError:
                # Lost a race with a concurrent submission for the same pair
                logger.info("review_create_conflict", user_id=user_id, listing_id=listing_id)
                existing = await self.review_repo.get_by_user_and_listing(user_id, listing_id)
                if existing is None:
                    raise

        if existing is not None:
            review = await self.review_repo.update(
                existing.model_copy(
                    update={"rating": review_input.rating, "comment": review_input.comment}
                )
            )
            created = False

        AuditLogger.log_review_saved(
            actor_id=user_id,
            review_id=review.id,
            listing_id=listing_id,
            rating=review.rating,
            created=created,
        )

        return review, created
