"""Bulk import request and response schemas."""

from datetime import datetime
from typing import Any, Literal
from uuid import UUID

from pydantic import Field, field_validator

from gainai.models import BulkJob
from gainai.schemas.common import CamelModel


class ValidationOutcomeResponse(CamelModel):
    """Validation result for one uploaded row."""

    row_index: int
    data: dict[str, str]
    status: Literal["valid", "warning", "error"]
    errors: list[str] = []
    warnings: list[str] = []


class UploadResponse(CamelModel):
    """Response for a CSV upload: the new job plus per-row validation."""

    job_id: UUID
    import_type: str
    total_rows: int
    valid_count: int
    warning_count: int
    error_count: int
    rows: list[ValidationOutcomeResponse]
    parse_warnings: list[str] = []


class ProcessRowInput(CamelModel):
    """One row submitted for processing."""

    row_index: int
    data: dict[str, str]

    @field_validator("data", mode="before")
    @classmethod
    def stringify_values(cls, value: Any) -> Any:
        # JSON clients may send numbers or nulls for spreadsheet cells
        if isinstance(value, dict):
            return {
                str(key): "" if cell is None else str(cell)
                for key, cell in value.items()
            }
        return value


class ProcessRequest(CamelModel):
    """Request to process a slice of an uploaded job's rows."""

    job_id: str = Field(min_length=1)
    rows: list[ProcessRowInput]


class RowResult(CamelModel):
    """Outcome of inserting one row."""

    row_index: int
    status: Literal["success", "error"]
    id: UUID | None = None
    error: str | None = None


class BatchResult(CamelModel):
    """Outcome of one processing call."""

    job_id: UUID
    processed_in_batch: int
    total_processed: int
    total_failed: int
    is_complete: bool
    results: list[RowResult]


class BulkJobError(CamelModel):
    """A row error retained on a job."""

    item_index: int
    message: str


class BulkJobResponse(CamelModel):
    """Bulk job status, including computed progress."""

    id: UUID
    type: str
    status: str
    total_items: int
    processed_items: int
    failed_items: int
    progress: int
    errors: list[BulkJobError] = []
    metadata: dict[str, Any] = {}
    created_by_id: UUID | None = None
    started_at: datetime | None = None
    completed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_job(cls, job: BulkJob, include_errors: bool = True) -> "BulkJobResponse":
        return cls(
            id=job.id,
            type=job.import_type,
            status=job.status,
            total_items=job.total_items,
            processed_items=job.processed_items,
            failed_items=job.failed_items,
            progress=job.progress_percent,
            errors=(job.errors or []) if include_errors else [],
            metadata=job.job_metadata or {},
            created_by_id=job.created_by_id,
            started_at=job.started_at,
            completed_at=job.completed_at,
            created_at=job.created_at,
            updated_at=job.updated_at,
        )


class ImportFieldInfo(CamelModel):
    """A column accepted by an import type."""

    name: str
    required: bool = False
