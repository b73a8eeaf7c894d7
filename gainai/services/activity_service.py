"""Activity log writer for audit records."""

import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gainai.models import ActivityLog

logger = logging.getLogger(__name__)


class ActivityService:
    """Records operator actions in the activity log."""

    async def log_activity(
        self,
        db: AsyncSession,
        action: str,
        description: str,
        actor_id: uuid.UUID | None = None,
        client_id: uuid.UUID | None = None,
        details: dict | None = None,
        actor_type: str = "user",
    ) -> ActivityLog | None:
        """Write one activity record.

        Audit writes never fail the caller: a database error is logged and
        rolled back to a savepoint, and None is returned.
        """
        entry = ActivityLog(
            client_id=client_id,
            actor_type=actor_type,
            actor_id=actor_id,
            action=action,
            description=description,
            details=details or {},
        )
        try:
            async with db.begin_nested():
                db.add(entry)
            await db.commit()
        except SQLAlchemyError:
            logger.exception(f"Failed to record activity '{action}'")
            await db.rollback()
            return None
        return entry


# Singleton instance
_activity_service: ActivityService | None = None


def get_activity_service() -> ActivityService:
    """Get the activity service singleton."""
    global _activity_service
    if _activity_service is None:
        _activity_service = ActivityService()
    return _activity_service
