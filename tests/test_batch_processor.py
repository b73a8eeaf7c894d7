"""Tests for batch processing of bulk jobs."""

import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gainai.exceptions import InvalidInputError, InvalidStateError
from gainai.models import (
    ActivityLog,
    BulkJob,
    BulkJobStatus,
    Client,
    ImportType,
    Location,
    Post,
    PostStatus,
)
from gainai.schemas.bulk import ProcessRowInput
from gainai.services.activity_service import ActivityService
from gainai.services.batch_processor import BatchProcessor
from gainai.services.bulk_job_service import BulkJobService


class RecordingJobService(BulkJobService):
    """Ledger that remembers the processed count at every checkpoint."""

    def __init__(self, fail_at: int | None = None):
        self.checkpoints: list[int] = []
        self.fail_at = fail_at

    async def checkpoint(self, db, job, processed_items, failed_items, errors):
        if processed_items == self.fail_at:
            raise RuntimeError("disk full")
        self.checkpoints.append(processed_items)
        await super().checkpoint(db, job, processed_items, failed_items, errors)


def client_rows(start: int, stop: int) -> list[ProcessRowInput]:
    return [
        ProcessRowInput(
            row_index=i,
            data={"name": f"Client {i}", "contact_email": f"owner{i}@example.com"},
        )
        for i in range(start, stop + 1)
    ]


async def create_job(db: AsyncSession, total: int, import_type: ImportType = ImportType.CLIENT) -> BulkJob:
    return await BulkJobService().create_job(
        db, import_type=import_type, total_items=total, created_by_id=None
    )


async def count(db: AsyncSession, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


@pytest.mark.asyncio
async def test_checkpoints_every_ten_rows(db: AsyncSession) -> None:
    ledger = RecordingJobService()
    processor = BatchProcessor(job_service=ledger, activity_service=ActivityService())
    job = await create_job(db, 25)

    result = await processor.process(db, job.id, client_rows(1, 25))

    assert ledger.checkpoints == [10, 20, 25]
    assert result.processed_in_batch == 25
    assert result.total_processed == 25
    assert result.total_failed == 0
    assert result.is_complete
    assert all(r.status == "success" and r.id is not None for r in result.results)
    assert job.status == BulkJobStatus.COMPLETED.value
    assert job.completed_at is not None
    assert await count(db, Client) == 25


@pytest.mark.asyncio
async def test_resumes_across_calls(db: AsyncSession) -> None:
    ledger = RecordingJobService()
    processor = BatchProcessor(job_service=ledger, activity_service=ActivityService())
    job = await create_job(db, 25)

    first = await processor.process(db, str(job.id), client_rows(1, 7))
    second = await processor.process(db, str(job.id), client_rows(8, 14))
    third = await processor.process(db, str(job.id), client_rows(15, 25))

    assert ledger.checkpoints == [7, 10, 14, 20, 25]
    assert [r.total_processed for r in (first, second, third)] == [7, 14, 25]
    assert [r.is_complete for r in (first, second, third)] == [False, False, True]
    assert job.status == BulkJobStatus.COMPLETED.value


@pytest.mark.asyncio
async def test_row_failures_do_not_abort_the_batch(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 4)
    rows = [
        ProcessRowInput(row_index=1, data={"name": "Acme", "contact_email": "a@acme.com"}),
        ProcessRowInput(row_index=2, data={"name": "No Email"}),
        ProcessRowInput(row_index=3, data={"name": "Acme", "contact_email": "b@acme.com"}),
        ProcessRowInput(row_index=4, data={"name": "Beta", "contact_email": "b@beta.com"}),
    ]

    result = await processor.process(db, job.id, rows)

    assert [r.status for r in result.results] == ["success", "error", "error", "success"]
    assert result.results[1].error == "Missing required field: contact_email"
    # Same derived slug as row 1
    assert "UNIQUE" in result.results[2].error
    assert result.total_failed == 2
    assert result.is_complete
    assert job.failed_items == 2
    assert [e["item_index"] for e in job.errors] == [2, 3]
    assert await count(db, Client) == 2


@pytest.mark.asyncio
async def test_location_with_unknown_client_fails(db: AsyncSession, existing_client: Client) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 2, ImportType.LOCATION)
    rows = [
        ProcessRowInput(
            row_index=1,
            data={"client_id": str(existing_client.id), "name": "London", "address": "1 High St", "latitude": "51.5"},
        ),
        ProcessRowInput(
            row_index=2,
            data={"client_id": str(uuid.uuid4()), "name": "Leeds", "address": "2 Low St"},
        ),
    ]

    result = await processor.process(db, job.id, rows)

    assert [r.status for r in result.results] == ["success", "error"]
    assert "FOREIGN KEY" in result.results[1].error
    location = await db.get(Location, result.results[0].id)
    assert location.latitude == 51.5
    assert location.status == "PENDING_VERIFICATION"


@pytest.mark.asyncio
async def test_posts_record_the_actor(db: AsyncSession, existing_location: Location) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    actor_id = uuid.uuid4()
    job = await create_job(db, 2, ImportType.POST)
    rows = [
        ProcessRowInput(
            row_index=1,
            data={
                "location_id": str(existing_location.id),
                "summary": "Spring menu",
                "content_type": "standard",
                "scheduled_at": "2026-03-01T10:00:00Z",
                "call_to_action_type": "learn_more",
                "call_to_action_url": "https://acme.com/menu",
                "media_urls": "https://example.com/1.jpg | https://example.com/2.jpg",
            },
        ),
        ProcessRowInput(
            row_index=2,
            data={"location_id": str(existing_location.id), "summary": "Draft", "content_type": "OFFER"},
        ),
    ]

    result = await processor.process(db, job.id, rows, actor_id=actor_id)

    scheduled = await db.get(Post, result.results[0].id)
    draft = await db.get(Post, result.results[1].id)
    assert scheduled.status == PostStatus.SCHEDULED.value
    assert scheduled.call_to_action == {"type": "LEARN_MORE", "url": "https://acme.com/menu"}
    assert scheduled.media_urls == ["https://example.com/1.jpg", "https://example.com/2.jpg"]
    assert scheduled.created_by_id == actor_id
    assert draft.status == PostStatus.DRAFT.value
    assert draft.content_type == "OFFER"


@pytest.mark.asyncio
async def test_error_list_keeps_the_most_recent_hundred(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 105)
    rows = [ProcessRowInput(row_index=i, data={"name": f"Client {i}"}) for i in range(1, 106)]

    result = await processor.process(db, job.id, rows)

    assert result.total_failed == 105
    assert job.failed_items == 105
    assert len(job.errors) == 100
    assert job.errors[0]["item_index"] == 6
    assert job.errors[-1]["item_index"] == 105


@pytest.mark.asyncio
async def test_unknown_job_type_fails_every_row(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 2)
    job.import_type = "widget"
    await db.commit()

    result = await processor.process(db, job.id, client_rows(1, 2))

    assert [r.error for r in result.results] == ["Unknown job type: widget"] * 2
    assert result.total_failed == 2
    assert result.is_complete


@pytest.mark.asyncio
async def test_completed_job_cannot_be_resumed(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 2)
    await processor.process(db, job.id, client_rows(1, 2))

    with pytest.raises(InvalidStateError, match="Job is already completed"):
        await processor.process(db, job.id, client_rows(3, 3))

    assert job.processed_items == 2
    assert await count(db, Client) == 2


@pytest.mark.asyncio
async def test_rejects_more_rows_than_remain(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 3)
    await processor.process(db, job.id, client_rows(1, 2))

    with pytest.raises(InvalidInputError, match="exceeds the 1 rows remaining"):
        await processor.process(db, job.id, client_rows(3, 4))

    assert job.status == BulkJobStatus.PROCESSING.value
    assert job.processed_items == 2


@pytest.mark.asyncio
async def test_rejects_empty_batches(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    job = await create_job(db, 3)

    with pytest.raises(InvalidInputError, match="rows array is required"):
        await processor.process(db, job.id, [])

    assert job.status == BulkJobStatus.PENDING.value


@pytest.mark.asyncio
async def test_unexpected_failure_marks_job_failed(db: AsyncSession) -> None:
    ledger = RecordingJobService(fail_at=20)
    processor = BatchProcessor(job_service=ledger, activity_service=ActivityService())
    job = await create_job(db, 25)

    with pytest.raises(RuntimeError, match="disk full"):
        await processor.process(db, job.id, client_rows(1, 25))

    stored = await BulkJobService().require_job(db, job.id)
    assert stored.status == BulkJobStatus.FAILED.value
    assert stored.processed_items == 10
    assert stored.job_metadata["failure_reason"] == "disk full"
    # Rows after the last checkpoint are rolled back with it
    assert await count(db, Client) == 10

    with pytest.raises(InvalidStateError, match="Job is already failed"):
        await processor.process(db, job.id, client_rows(11, 11))


@pytest.mark.asyncio
async def test_each_batch_is_logged(db: AsyncSession) -> None:
    processor = BatchProcessor(activity_service=ActivityService())
    actor_id = uuid.uuid4()
    job = await create_job(db, 3)
    rows = client_rows(1, 2) + [ProcessRowInput(row_index=3, data={"name": "No Email"})]

    await processor.process(db, job.id, rows, actor_id=actor_id)

    entries = (await db.execute(select(ActivityLog))).scalars().all()
    assert len(entries) == 1
    entry = entries[0]
    assert entry.action == "bulk_process_batch"
    assert entry.actor_id == actor_id
    assert entry.details == {
        "job_id": str(job.id),
        "job_type": "client",
        "batch_size": 3,
        "success_count": 2,
        "error_count": 1,
    }
