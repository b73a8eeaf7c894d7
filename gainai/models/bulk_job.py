"""Bulk job model for CSV imports."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gainai.models.base import BaseModel, JSONType, utcnow

# Progress is persisted every CHECKPOINT_INTERVAL processed rows
CHECKPOINT_INTERVAL = 10
# Only the most recent MAX_STORED_ERRORS row errors are kept on a job
MAX_STORED_ERRORS = 100


class ImportType(str, Enum):
    """Entity kinds that can be bulk imported from CSV."""

    CLIENT = "client"
    LOCATION = "location"
    POST = "post"
    MEDIA = "media"
    COMPETITOR = "competitor"


class BulkJobStatus(str, Enum):
    """Status of a bulk job."""

    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = frozenset(
    {
        BulkJobStatus.COMPLETED.value,
        BulkJobStatus.FAILED.value,
        BulkJobStatus.CANCELLED.value,
    }
)


class BulkJob(BaseModel):
    """Tracks one bulk CSV import from upload to completion."""

    __tablename__ = "bulk_jobs"
    __table_args__ = (Index("idx_bulk_jobs_status", "status"),)

    import_type: Mapped[str] = mapped_column("type", String(30), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BulkJobStatus.PENDING.value,
    )
    total_items: Mapped[int] = mapped_column(Integer, nullable=False)
    processed_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    failed_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    errors: Mapped[list] = mapped_column(JSONType, nullable=False, default=list)
    # "metadata" is reserved on declarative classes
    job_metadata: Mapped[dict] = mapped_column(
        "metadata",
        JSONType,
        nullable=False,
        default=dict,
    )
    created_by_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    @property
    def is_pending(self) -> bool:
        """Check if the job is waiting for its first batch."""
        return self.status == BulkJobStatus.PENDING.value

    @property
    def is_processing(self) -> bool:
        """Check if the job is being processed."""
        return self.status == BulkJobStatus.PROCESSING.value

    @property
    def is_completed(self) -> bool:
        """Check if the job has completed."""
        return self.status == BulkJobStatus.COMPLETED.value

    @property
    def is_terminal(self) -> bool:
        """Check if the job can no longer be processed."""
        return self.status in TERMINAL_STATUSES

    @property
    def remaining_items(self) -> int:
        """Rows that can still be processed."""
        return max(self.total_items - self.processed_items, 0)

    @property
    def progress_percent(self) -> int:
        """Get the job progress as a whole percentage, rounded half up."""
        if not self.total_items:
            return 0
        return (self.processed_items * 200 + self.total_items) // (self.total_items * 2)

    def mark_processing(self) -> None:
        """Mark the job as processing, keeping the first start time."""
        self.status = BulkJobStatus.PROCESSING.value
        if self.started_at is None:
            self.started_at = utcnow()

    def apply_progress(self, processed_items: int, failed_items: int, errors: list[dict]) -> None:
        """Store running counters and the most recent row errors."""
        self.processed_items = processed_items
        self.failed_items = failed_items
        self.errors = list(errors[-MAX_STORED_ERRORS:])

    def mark_completed(self) -> None:
        """Mark the job as completed."""
        self.status = BulkJobStatus.COMPLETED.value
        self.completed_at = utcnow()

    def mark_failed(self, error_message: str | None = None) -> None:
        """Mark the job as failed."""
        self.status = BulkJobStatus.FAILED.value
        if error_message:
            self.job_metadata = {**(self.job_metadata or {}), "failure_reason": error_message}

    def mark_cancelled(self) -> None:
        """Mark the job as cancelled."""
        self.status = BulkJobStatus.CANCELLED.value
