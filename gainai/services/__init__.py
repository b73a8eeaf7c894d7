"""Service layer for business logic."""

from gainai.services.activity_service import ActivityService, get_activity_service
from gainai.services.batch_processor import BatchProcessor, get_batch_processor
from gainai.services.bulk_import_service import BulkImportService, get_bulk_import_service
from gainai.services.bulk_job_service import BulkJobService, get_bulk_job_service

__all__ = [
    "ActivityService",
    "get_activity_service",
    "BatchProcessor",
    "get_batch_processor",
    "BulkImportService",
    "get_bulk_import_service",
    "BulkJobService",
    "get_bulk_job_service",
]
