"""Structured audit logging for review activity.

Every review write is recorded with the acting user and the listing it
targets so moderation can reconstruct who rated what and when.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from messmate.logging import get_logger

logger = get_logger(__name__)


class AuditEventType(str, Enum):
    """Types of auditable events."""

    REVIEW_SUBMITTED = "review_submitted"
    REVIEW_UPDATED = "review_updated"
    REVIEW_REJECTED = "review_rejected"


class AuditLogger:
    """Centralized audit logging service."""

    @staticmethod
    def log_event(
        event_type: AuditEventType,
        actor_id: str,
        resource_type: str,
        resource_id: str,
        action: str,
        success: bool = True,
        metadata: Optional[dict[str, Any]] = None,
        error: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Log an auditable event with structured context.

        Args:
            event_type: Type of audit event
            actor_id: ID of the user performing the action
            resource_type: Type of resource (review, listing)
            resource_id: ID of the affected resource
            action: Human-readable action description
            success: Whether the action succeeded
            metadata: Additional context (ratings, listing ids)
            error: Error message if action failed

        Returns:
            The audit entry that was logged
        """
        audit_entry = {
            "event_type": event_type.value,
            "actor_id": actor_id,
            "resource_type": resource_type,
            "resource_id": resource_id,
            "action": action,
            "success": success,
            "timestamp": datetime.utcnow().isoformat(),
            "metadata": metadata or {},
        }

        if error:
            audit_entry["error"] = error

        logger.info("audit_event", **audit_entry)
        return audit_entry

    @staticmethod
    def log_review_saved(
        actor_id: str,
        review_id: str,
        listing_id: str,
        rating: int,
        created: bool,
    ) -> dict[str, Any]:
        """Log a review insert or in-place update."""
        event_type = (
            AuditEventType.REVIEW_SUBMITTED if created else AuditEventType.REVIEW_UPDATED
        )
        return AuditLogger.log_event(
            event_type=event_type,
            actor_id=actor_id,
            resource_type="review",
            resource_id=review_id,
            action=f"{'Submitted' if created else 'Updated'} review for listing {listing_id}",
            metadata={"listing_id": listing_id, "rating": rating},
        )

    @staticmethod
    def log_review_rejected(
        actor_id: str,
        listing_id: str,
        reason: str,
    ) -> dict[str, Any]:
        """Log a review that could not be saved."""
        return AuditLogger.log_event(
            event_type=AuditEventType.REVIEW_REJECTED,
            actor_id=actor_id,
            resource_type="listing",
            resource_id=listing_id,
            action="Review rejected",
            success=False,
            metadata={"listing_id": listing_id},
            error=reason,
        )
