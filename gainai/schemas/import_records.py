"""Typed records built from validated CSV rows, one model per import type."""

import re
import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from gainai.models.client import PackageType
from gainai.models.media import MediaCategory, MediaType
from gainai.models.post import CallToActionType, ContentType, PostStatus
from gainai.utils.dates import parse_datetime

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """Lowercase and replace runs of non-alphanumerics with hyphens."""
    return _SLUG_RE.sub("-", value.lower()).strip("-")


def format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into one line suitable for a row result."""
    messages = []
    for error in exc.errors():
        field_name = ".".join(str(part) for part in error["loc"]) or "row"
        if error["type"] == "missing":
            messages.append(f"Missing required field: {field_name}")
        else:
            messages.append(f"{field_name}: {error['msg']}")
    return "; ".join(messages)


class ImportRecord(BaseModel):
    """Base for typed import records.

    Blank cells are treated as absent so optional fields fall back to their
    defaults and required fields report as missing.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_row(cls, data: dict[str, Any]) -> "ImportRecord":
        """Build a record from a raw row, trimming every string value."""
        cleaned = {}
        for key, value in data.items():
            if value is None:
                continue
            if isinstance(value, str):
                value = value.strip()
                if not value:
                    continue
            cleaned[key] = value
        return cls.model_validate(cleaned)


def _upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


class ClientRecord(ImportRecord):
    """A client row."""

    name: str
    contact_email: str
    slug: str | None = None
    contact_name: str | None = None
    contact_phone: str | None = None
    website_url: str | None = None
    package_type: PackageType = PackageType.STARTER
    notes: str | None = None

    @field_validator("package_type", mode="before")
    @classmethod
    def normalize_package(cls, value: Any) -> Any:
        return _upper(value)

    @property
    def resolved_slug(self) -> str:
        """Explicit slug, or one derived from the client name."""
        return self.slug or slugify(self.name)


class LocationRecord(ImportRecord):
    """A GBP location row."""

    client_id: uuid.UUID
    name: str
    address: str
    phone: str | None = None
    website_url: str | None = None
    primary_category: str | None = None
    timezone: str | None = None
    latitude: float | None = None
    longitude: float | None = None


class PostRecord(ImportRecord):
    """A GBP post row."""

    location_id: uuid.UUID
    summary: str
    content_type: ContentType = ContentType.STANDARD
    title: str | None = None
    scheduled_at: datetime | None = None
    call_to_action_type: CallToActionType | None = None
    call_to_action_url: str | None = None
    media_urls: list[str] | None = None

    @field_validator("content_type", "call_to_action_type", mode="before")
    @classmethod
    def normalize_enums(cls, value: Any) -> Any:
        return _upper(value)

    @field_validator("scheduled_at", mode="before")
    @classmethod
    def parse_schedule(cls, value: Any) -> Any:
        if isinstance(value, str):
            parsed = parse_datetime(value)
            if parsed is None:
                raise ValueError("must be a valid date/time string")
            return parsed
        return value

    @field_validator("media_urls", mode="before")
    @classmethod
    def split_media_urls(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [url.strip() for url in value.split("|") if url.strip()] or None
        return value

    @property
    def status(self) -> PostStatus:
        """Scheduled posts go straight to the schedule, others start as drafts."""
        return PostStatus.SCHEDULED if self.scheduled_at else PostStatus.DRAFT

    @property
    def call_to_action(self) -> dict | None:
        if self.call_to_action_type is None:
            return None
        return {"type": self.call_to_action_type.value, "url": self.call_to_action_url}


class MediaRecord(ImportRecord):
    """A GBP media row."""

    location_id: uuid.UUID
    url: str
    media_type: MediaType = MediaType.PHOTO
    category: MediaCategory = MediaCategory.ADDITIONAL
    file_name: str | None = None
    description: str | None = None

    @field_validator("media_type", "category", mode="before")
    @classmethod
    def normalize_enums(cls, value: Any) -> Any:
        return _upper(value)


class CompetitorRecord(ImportRecord):
    """A competitor row."""

    client_id: uuid.UUID
    name: str
    place_id: str
    address: str | None = None
    phone: str | None = None
    website_url: str | None = None
    primary_category: str | None = None
    notes: str | None = None
