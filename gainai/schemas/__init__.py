"""Pydantic schemas for request/response validation."""

from gainai.schemas.bulk import (
    BatchResult,
    BulkJobError,
    BulkJobResponse,
    ImportFieldInfo,
    ProcessRequest,
    ProcessRowInput,
    RowResult,
    UploadResponse,
    ValidationOutcomeResponse,
)
from gainai.schemas.common import APIResponse, CamelModel, PaginationMeta

__all__ = [
    # Common
    "APIResponse",
    "CamelModel",
    "PaginationMeta",
    # Bulk import
    "UploadResponse",
    "ValidationOutcomeResponse",
    "ProcessRequest",
    "ProcessRowInput",
    "RowResult",
    "BatchResult",
    "BulkJobError",
    "BulkJobResponse",
    "ImportFieldInfo",
]
