"""Bulk import API endpoints."""

import logging

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from gainai.database import get_db
from gainai.exceptions import InvalidInputError
from gainai.models import BulkJobStatus, ImportType
from gainai.schemas.bulk import BulkJobResponse, ImportFieldInfo, ProcessRequest
from gainai.schemas.common import APIResponse, PaginationMeta
from gainai.services.batch_processor import get_batch_processor
from gainai.services.bulk_import_service import get_bulk_import_service
from gainai.services.bulk_job_service import get_bulk_job_service
from gainai.services.import_types import IMPORT_SPECS, require_import_spec
from gainai.services.template_service import build_template
from gainai.utils.permissions import require_operator, require_team_member
from gainai.utils.request_context import get_current_user_id_or_none

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=APIResponse)
@require_operator()
async def upload_csv(
    file: UploadFile | None = File(None),
    import_type: str | None = Form(None),
    db: AsyncSession = Depends(get_db),
):
    """Upload a CSV file, validate every row and create a pending job."""
    spec = require_import_spec(import_type)
    if file is None:
        raise InvalidInputError("file is required")

    service = get_bulk_import_service()
    content = await service.read_upload(file)
    result = await service.upload(
        db,
        spec,
        file_name=file.filename or "",
        content=content,
        created_by_id=get_current_user_id_or_none(),
    )

    return APIResponse(
        status="success",
        data=result,
        message=(
            f"Validated {result.total_rows} rows: {result.valid_count} valid, "
            f"{result.warning_count} with warnings, {result.error_count} with errors"
        ),
    )


@router.post("/process", response_model=APIResponse)
@require_operator()
async def process_batch(
    data: ProcessRequest,
    db: AsyncSession = Depends(get_db),
):
    """Insert a slice of an uploaded job's rows."""
    result = await get_batch_processor().process(
        db,
        data.job_id,
        data.rows,
        actor_id=get_current_user_id_or_none(),
    )

    return APIResponse(
        status="success",
        data=result,
        message=f"Processed {result.processed_in_batch} rows",
    )


@router.get("/status/{job_id}", response_model=APIResponse)
@require_team_member()
async def get_job_status(
    job_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Get a bulk job with its progress."""
    job = await get_bulk_job_service().require_job(db, job_id)

    return APIResponse(
        status="success",
        data=BulkJobResponse.from_job(job),
    )


@router.get("/templates/{import_type}")
@require_team_member()
async def download_template(import_type: str):
    """Download the CSV template for an import type."""
    spec = require_import_spec(import_type)
    filename, content = build_template(spec.import_type)

    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/fields", response_model=APIResponse)
@require_team_member()
async def get_import_fields():
    """Get the accepted columns for each import type."""
    fields = {
        import_type.value: [
            ImportFieldInfo(name=name, required=True) for name in spec.required
        ]
        + [ImportFieldInfo(name=name) for name in spec.optional]
        for import_type, spec in IMPORT_SPECS.items()
    }

    return APIResponse(
        status="success",
        data=fields,
    )


@router.get("/jobs", response_model=APIResponse)
@require_team_member()
async def list_jobs(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    status: BulkJobStatus | None = None,
    import_type: ImportType | None = None,
    db: AsyncSession = Depends(get_db),
):
    """List bulk jobs, newest first."""
    jobs, total = await get_bulk_job_service().list_jobs(
        db,
        page=page,
        page_size=page_size,
        status=status.value if status else None,
        import_type=import_type.value if import_type else None,
    )

    return APIResponse(
        status="success",
        data=[BulkJobResponse.from_job(job, include_errors=False) for job in jobs],
        pagination=PaginationMeta.build(page, page_size, total),
    )


@router.post("/jobs/{job_id}/cancel", response_model=APIResponse)
@require_operator()
async def cancel_job(
    job_id: str,
    db: AsyncSession = Depends(get_db),
):
    """Cancel a job that has not finished processing."""
    job = await get_bulk_job_service().cancel_job(db, job_id)

    return APIResponse(
        status="success",
        data=BulkJobResponse.from_job(job),
        message="Bulk job cancelled",
    )
