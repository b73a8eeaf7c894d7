"""SQLAlchemy models for the GainAI platform."""

from gainai.models.base import Base, BaseModel, JSONType, TimestampMixin
from gainai.models.client import Client, ClientStatus, PackageType
from gainai.models.location import Location, LocationStatus
from gainai.models.post import CallToActionType, ContentType, Post, PostStatus
from gainai.models.media import Media, MediaCategory, MediaType
from gainai.models.competitor import Competitor
from gainai.models.activity_log import ActivityLog
from gainai.models.bulk_job import (
    CHECKPOINT_INTERVAL,
    MAX_STORED_ERRORS,
    BulkJob,
    BulkJobStatus,
    ImportType,
)

__all__ = [
    # Base
    "Base",
    "BaseModel",
    "JSONType",
    "TimestampMixin",
    # Client
    "Client",
    "ClientStatus",
    "PackageType",
    # Location
    "Location",
    "LocationStatus",
    # Post
    "Post",
    "PostStatus",
    "ContentType",
    "CallToActionType",
    # Media
    "Media",
    "MediaType",
    "MediaCategory",
    # Competitor
    "Competitor",
    # Activity
    "ActivityLog",
    # Bulk jobs
    "BulkJob",
    "BulkJobStatus",
    "ImportType",
    "CHECKPOINT_INTERVAL",
    "MAX_STORED_ERRORS",
]
