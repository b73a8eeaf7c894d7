"""Batch processor: inserts validated rows into their target tables.

Clients upload once and then submit rows in slices; each call resumes the
job's counters from the ledger, inserts every row in its own savepoint and
checkpoints progress every ``CHECKPOINT_INTERVAL`` rows.
"""

import logging
import uuid
from collections.abc import Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from gainai.exceptions import InvalidInputError
from gainai.models import CHECKPOINT_INTERVAL, MAX_STORED_ERRORS, BulkJob
from gainai.schemas.bulk import BatchResult, ProcessRowInput, RowResult
from gainai.schemas.import_records import format_validation_error
from gainai.services.activity_service import ActivityService, get_activity_service
from gainai.services.bulk_job_service import BulkJobService, get_bulk_job_service
from gainai.services.import_types import ImportSpec, get_import_spec

logger = logging.getLogger(__name__)


def describe_row_error(exc: Exception) -> str:
    """Turn an insert failure into the message stored on the job."""
    if isinstance(exc, ValidationError):
        return format_validation_error(exc)
    if isinstance(exc, SQLAlchemyError):
        orig = getattr(exc, "orig", None)
        return str(orig) if orig is not None else str(exc)
    return str(exc) or type(exc).__name__


class BatchProcessor:
    """Processes slices of rows for a bulk job."""

    def __init__(
        self,
        job_service: BulkJobService | None = None,
        activity_service: ActivityService | None = None,
    ):
        self.job_service = job_service or get_bulk_job_service()
        self.activity_service = activity_service or get_activity_service()

    async def process(
        self,
        db: AsyncSession,
        job_id: str | uuid.UUID,
        rows: Sequence[ProcessRowInput],
        actor_id: uuid.UUID | None = None,
    ) -> BatchResult:
        """Insert one slice of rows and advance the job.

        Row failures are recorded on the job and never abort the batch. Any
        other failure marks the job FAILED, keeping the counters of its last
        checkpoint, and is re-raised.

        Raises:
            InvalidInputError: If no rows are given or the slice is larger
                than the rows the job has left
            NotFoundException: If the job does not exist
            InvalidStateError: If the job is completed, failed or cancelled
        """
        if not rows:
            raise InvalidInputError("rows array is required and must not be empty")

        job = await self.job_service.require_job(db, job_id)
        self.job_service.ensure_processable(job)

        remaining = job.remaining_items
        if len(rows) > remaining:
            raise InvalidInputError(
                f"Batch of {len(rows)} rows exceeds the {remaining} rows remaining on this job"
            )

        try:
            await self.job_service.start_processing(db, job)
            result = await self._run(db, job, rows, actor_id)
        except Exception as e:
            logger.error(f"Bulk job {job.id} aborted: {e}")
            await self.job_service.mark_failed(db, job, str(e) or type(e).__name__)
            raise

        await self._record_activity(db, job, result, actor_id)
        return result

    async def _run(
        self,
        db: AsyncSession,
        job: BulkJob,
        rows: Sequence[ProcessRowInput],
        actor_id: uuid.UUID | None,
    ) -> BatchResult:
        spec = get_import_spec(job.import_type)
        processed = job.processed_items
        failed = job.failed_items
        errors = list(job.errors or [])
        results: list[RowResult] = []

        for row in rows:
            outcome = await self._process_row(db, spec, job.import_type, row, actor_id)
            results.append(outcome)
            processed += 1

            if outcome.status == "error":
                failed += 1
                errors.append({"item_index": row.row_index, "message": outcome.error})
                errors = errors[-MAX_STORED_ERRORS:]

            if processed % CHECKPOINT_INTERVAL == 0:
                await self.job_service.checkpoint(db, job, processed, failed, errors)

        await self.job_service.checkpoint(db, job, processed, failed, errors)

        is_complete = processed >= job.total_items
        if is_complete:
            await self.job_service.complete(db, job)

        return BatchResult(
            job_id=job.id,
            processed_in_batch=len(rows),
            total_processed=processed,
            total_failed=failed,
            is_complete=is_complete,
            results=results,
        )

    async def _process_row(
        self,
        db: AsyncSession,
        spec: ImportSpec | None,
        import_type: str,
        row: ProcessRowInput,
        actor_id: uuid.UUID | None,
    ) -> RowResult:
        if spec is None:
            return RowResult(
                row_index=row.row_index,
                status="error",
                error=f"Unknown job type: {import_type}",
            )

        try:
            async with db.begin_nested():
                record_id = await spec.inserter(db, row.data, actor_id)
        except Exception as e:
            message = describe_row_error(e)
            logger.warning(f"Row {row.row_index} of {import_type} import failed: {message}")
            return RowResult(row_index=row.row_index, status="error", error=message)

        return RowResult(row_index=row.row_index, status="success", id=record_id)

    async def _record_activity(
        self,
        db: AsyncSession,
        job: BulkJob,
        result: BatchResult,
        actor_id: uuid.UUID | None,
    ) -> None:
        success_count = sum(1 for r in result.results if r.status == "success")
        error_count = result.processed_in_batch - success_count

        await self.activity_service.log_activity(
            db,
            action="bulk_process_batch",
            description=(
                f"Processed {result.processed_in_batch} {job.import_type} rows "
                f"({success_count} created, {error_count} failed)"
            ),
            actor_id=actor_id,
            details={
                "job_id": str(job.id),
                "job_type": job.import_type,
                "batch_size": result.processed_in_batch,
                "success_count": success_count,
                "error_count": error_count,
            },
        )


# Singleton instance
_batch_processor: BatchProcessor | None = None


def get_batch_processor() -> BatchProcessor:
    """Get the batch processor singleton."""
    global _batch_processor
    if _batch_processor is None:
        _batch_processor = BatchProcessor()
    return _batch_processor
