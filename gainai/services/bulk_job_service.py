"""Bulk job ledger: creation, lookup and lifecycle transitions.

The ``bulk_jobs`` row is the single source of truth for import progress.
Updates overwrite the row (last write wins); callers must not process the
same job from two requests at once.
"""

import logging
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gainai.exceptions import InvalidStateError, NotFoundException
from gainai.models import BulkJob, BulkJobStatus, ImportType

logger = logging.getLogger(__name__)


def parse_job_id(value: str | uuid.UUID) -> uuid.UUID:
    """Parse a job id from request input.

    Raises:
        NotFoundException: If the value is not a UUID (no such job can exist)
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except ValueError:
        raise NotFoundException("Bulk job") from None


class BulkJobService:
    """Service for reading and updating bulk jobs."""

    async def create_job(
        self,
        db: AsyncSession,
        import_type: ImportType,
        total_items: int,
        created_by_id: uuid.UUID | None,
        metadata: dict | None = None,
    ) -> BulkJob:
        """Create a pending job for a validated upload."""
        job = BulkJob(
            import_type=import_type.value,
            status=BulkJobStatus.PENDING.value,
            total_items=total_items,
            processed_items=0,
            failed_items=0,
            errors=[],
            job_metadata=metadata or {},
            created_by_id=created_by_id,
        )

        db.add(job)
        await db.commit()
        await db.refresh(job)

        logger.info(f"Created bulk {import_type.value} job {job.id} with {total_items} rows")
        return job

    async def get_job(self, db: AsyncSession, job_id: uuid.UUID) -> BulkJob | None:
        """Get a bulk job by ID."""
        result = await db.execute(select(BulkJob).where(BulkJob.id == job_id))
        return result.scalar_one_or_none()

    async def require_job(self, db: AsyncSession, job_id: str | uuid.UUID) -> BulkJob:
        """Get a bulk job by ID or raise NotFoundException."""
        job = await self.get_job(db, parse_job_id(job_id))
        if not job:
            raise NotFoundException("Bulk job")
        return job

    async def list_jobs(
        self,
        db: AsyncSession,
        page: int = 1,
        page_size: int = 20,
        status: str | None = None,
        import_type: str | None = None,
    ) -> tuple[list[BulkJob], int]:
        """List bulk jobs, newest first."""
        query = select(BulkJob)
        if status:
            query = query.where(BulkJob.status == status.upper())
        if import_type:
            query = query.where(BulkJob.import_type == import_type.lower())

        count_query = select(func.count()).select_from(query.subquery())
        total = (await db.execute(count_query)).scalar() or 0

        query = query.order_by(BulkJob.created_at.desc(), BulkJob.id.desc())
        query = query.offset((page - 1) * page_size).limit(page_size)

        result = await db.execute(query)
        jobs = list(result.scalars().all())

        return jobs, total

    def ensure_processable(self, job: BulkJob) -> None:
        """Refuse to resume a job that has reached a terminal state."""
        if job.is_terminal:
            raise InvalidStateError(f"Job is already {job.status.lower()}")

    async def start_processing(self, db: AsyncSession, job: BulkJob) -> None:
        """Move a job to PROCESSING, stamping started_at on the first call."""
        self.ensure_processable(job)
        job.mark_processing()
        await db.commit()

    async def checkpoint(
        self,
        db: AsyncSession,
        job: BulkJob,
        processed_items: int,
        failed_items: int,
        errors: list[dict],
    ) -> None:
        """Persist running counters and the most recent row errors."""
        job.apply_progress(processed_items, failed_items, errors)
        await db.commit()

    async def complete(self, db: AsyncSession, job: BulkJob) -> None:
        """Mark a fully processed job as completed."""
        job.mark_completed()
        await db.commit()
        logger.info(
            f"Bulk job {job.id} completed: {job.processed_items} processed, {job.failed_items} failed"
        )

    async def mark_failed(self, db: AsyncSession, job: BulkJob, reason: str) -> None:
        """Fail a job after an aborted processing call.

        Pending changes are discarded first, so the job keeps the counters of
        its last checkpoint.
        """
        await db.rollback()
        await db.refresh(job)
        if job.is_terminal:
            return
        job.mark_failed(reason)
        await db.commit()
        logger.error(f"Bulk job {job.id} failed after {job.processed_items} rows: {reason}")

    async def cancel_job(self, db: AsyncSession, job_id: str | uuid.UUID) -> BulkJob:
        """Cancel a job that has not finished."""
        job = await self.require_job(db, job_id)
        if job.is_terminal:
            raise InvalidStateError(f"Job is already {job.status.lower()}")

        job.mark_cancelled()
        await db.commit()

        logger.info(f"Cancelled bulk job {job.id} at {job.processed_items}/{job.total_items}")
        return job


# Singleton instance
_bulk_job_service: BulkJobService | None = None


def get_bulk_job_service() -> BulkJobService:
    """Get the bulk job service singleton."""
    global _bulk_job_service
    if _bulk_job_service is None:
        _bulk_job_service = BulkJobService()
    return _bulk_job_service
