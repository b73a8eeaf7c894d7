"""CSV upload: parse, validate and register a bulk job."""

import logging
import uuid

from fastapi import UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from gainai.config import settings
from gainai.exceptions import InvalidInputError, ParseError
from gainai.schemas.bulk import UploadResponse, ValidationOutcomeResponse
from gainai.services.bulk_job_service import BulkJobService, get_bulk_job_service
from gainai.services.import_types import ImportSpec
from gainai.services.validation_service import RowStatus, validate_rows
from gainai.utils.csv_parser import MAX_PARSE_MESSAGES, parse_csv

logger = logging.getLogger(__name__)

# Bytes read per chunk when streaming an upload into memory
UPLOAD_CHUNK_SIZE = 64 * 1024


def decode_csv(content: bytes) -> str:
    """Decode uploaded bytes as UTF-8, dropping a leading byte order mark."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError("CSV file must be UTF-8 encoded", details=[str(e)]) from e


def _too_large() -> InvalidInputError:
    return InvalidInputError(f"File exceeds the {settings.max_upload_size_mb}MB upload limit")


class BulkImportService:
    """Turns an uploaded CSV into a pending bulk job."""

    def __init__(self, job_service: BulkJobService | None = None):
        self.job_service = job_service or get_bulk_job_service()

    def check_file_name(self, file_name: str | None) -> None:
        """Reject files that are not CSV."""
        if not file_name or not file_name.lower().endswith(".csv"):
            raise InvalidInputError("File must be a CSV")

    def check_file(self, file_name: str | None, content: bytes) -> None:
        """Reject files that are not CSV or exceed the upload limit."""
        self.check_file_name(file_name)
        if len(content) > settings.max_upload_size_bytes:
            raise _too_large()

    async def read_upload(self, file: UploadFile, chunk_size: int = UPLOAD_CHUNK_SIZE) -> bytes:
        """Read an uploaded file, stopping as soon as it passes the upload limit.

        Raises:
            InvalidInputError: If the file is not a CSV or exceeds the limit
        """
        self.check_file_name(file.filename)

        limit = settings.max_upload_size_bytes
        if file.size is not None and file.size > limit:
            raise _too_large()

        chunks: list[bytes] = []
        total = 0
        while True:
            chunk = await file.read(chunk_size)
            if not chunk:
                break
            total += len(chunk)
            if total > limit:
                raise _too_large()
            chunks.append(chunk)

        return b"".join(chunks)

    async def upload(
        self,
        db: AsyncSession,
        spec: ImportSpec,
        file_name: str,
        content: bytes,
        created_by_id: uuid.UUID | None = None,
    ) -> UploadResponse:
        """Parse and validate a CSV upload, then create its job.

        The job is created even when rows fail validation: the client decides
        which rows to submit for processing.

        Raises:
            InvalidInputError: If the file is empty or has no data rows
            ParseError: If the content cannot be decoded or parsed
        """
        self.check_file(file_name, content)

        text = decode_csv(content)
        if not text.strip():
            raise InvalidInputError("CSV file is empty")

        parsed = parse_csv(text)
        if not parsed.rows:
            raise InvalidInputError("CSV file contains no data rows")

        outcomes = validate_rows(parsed.rows, spec.import_type)
        valid_count = sum(1 for o in outcomes if o.status == RowStatus.VALID)
        warning_count = sum(1 for o in outcomes if o.status == RowStatus.WARNING)
        error_count = sum(1 for o in outcomes if o.status == RowStatus.ERROR)

        job = await self.job_service.create_job(
            db,
            import_type=spec.import_type,
            total_items=len(outcomes),
            created_by_id=created_by_id,
            metadata={
                "file_name": file_name,
                "file_size": len(content),
                "valid_count": valid_count,
                "warning_count": warning_count,
                "error_count": error_count,
            },
        )

        logger.info(
            f"Uploaded {file_name} as {spec.import_type.value} job {job.id}: "
            f"{valid_count} valid, {warning_count} warnings, {error_count} errors"
        )

        return UploadResponse(
            job_id=job.id,
            import_type=spec.import_type.value,
            total_rows=len(outcomes),
            valid_count=valid_count,
            warning_count=warning_count,
            error_count=error_count,
            rows=[
                ValidationOutcomeResponse(
                    row_index=o.row_index,
                    data=o.data,
                    status=o.status.value,
                    errors=o.errors,
                    warnings=o.warnings,
                )
                for o in outcomes
            ],
            parse_warnings=parsed.errors[:MAX_PARSE_MESSAGES],
        )


# Singleton instance
_bulk_import_service: BulkImportService | None = None


def get_bulk_import_service() -> BulkImportService:
    """Get the bulk import service singleton."""
    global _bulk_import_service
    if _bulk_import_service is None:
        _bulk_import_service = BulkImportService()
    return _bulk_import_service
