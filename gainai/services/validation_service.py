"""Row validation for bulk imports.

Validation is a pure function of the row and its import type: it never
touches the database and returns the same outcome for the same input.
"""

import math
import re
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import ValidationError

from gainai.models import CallToActionType, ContentType, ImportType, MediaCategory, MediaType, PackageType
from gainai.schemas.import_records import format_validation_error
from gainai.services.import_types import IMPORT_SPECS
from gainai.utils.dates import parse_datetime

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Google silently truncates longer post summaries
SUMMARY_MAX_LENGTH = 1500


class RowStatus(str, Enum):
    """Overall severity of a validated row."""

    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of validating one CSV row."""

    row_index: int
    data: dict[str, str]
    status: RowStatus
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.status != RowStatus.ERROR


def _value(row: dict[str, str], column: str) -> str:
    value = row.get(column)
    return value.strip() if isinstance(value, str) else ""


def _check_enum(row: dict[str, str], column: str, allowed: type[Enum], errors: list[str]) -> None:
    value = _value(row, column)
    choices = [member.value for member in allowed]
    if value and value.upper() not in choices:
        errors.append(f"Invalid {column}: {value}. Must be one of: {', '.join(choices)}")


def _check_uuid(row: dict[str, str], column: str, errors: list[str]) -> None:
    value = _value(row, column)
    if not value:
        return
    try:
        uuid.UUID(value)
    except ValueError:
        errors.append(f"{column} must be a valid UUID")


def _check_number(row: dict[str, str], column: str, errors: list[str]) -> None:
    value = _value(row, column)
    if not value:
        return
    try:
        number = float(value)
    except ValueError:
        errors.append(f"{column} must be a valid number")
        return
    if not math.isfinite(number):
        errors.append(f"{column} must be a valid number")


def _starts_with_http(row: dict[str, str], column: str) -> bool:
    value = _value(row, column)
    return not value or value.startswith("http")


def _check_client(row: dict[str, str], errors: list[str], warnings: list[str]) -> None:
    email = _value(row, "contact_email")
    if email and not EMAIL_RE.match(email):
        errors.append("Invalid email format for contact_email")
    _check_enum(row, "package_type", PackageType, errors)
    if not _starts_with_http(row, "website_url"):
        warnings.append("website_url should start with http:// or https://")


def _check_location(row: dict[str, str], errors: list[str], warnings: list[str]) -> None:
    _check_uuid(row, "client_id", errors)
    _check_number(row, "latitude", errors)
    _check_number(row, "longitude", errors)
    if not _starts_with_http(row, "website_url"):
        warnings.append("website_url should start with http:// or https://")


def _check_post(row: dict[str, str], errors: list[str], warnings: list[str]) -> None:
    _check_uuid(row, "location_id", errors)
    _check_enum(row, "content_type", ContentType, errors)
    _check_enum(row, "call_to_action_type", CallToActionType, errors)
    if len(_value(row, "summary")) > SUMMARY_MAX_LENGTH:
        warnings.append(
            f"summary exceeds {SUMMARY_MAX_LENGTH} characters and may be truncated by Google"
        )
    scheduled_at = _value(row, "scheduled_at")
    if scheduled_at and parse_datetime(scheduled_at) is None:
        errors.append("scheduled_at must be a valid date/time string")
    if not _starts_with_http(row, "call_to_action_url"):
        warnings.append("call_to_action_url should start with http:// or https://")


def _check_media(row: dict[str, str], errors: list[str], warnings: list[str]) -> None:
    _check_uuid(row, "location_id", errors)
    _check_enum(row, "media_type", MediaType, errors)
    _check_enum(row, "category", MediaCategory, errors)
    if not _starts_with_http(row, "url"):
        errors.append("url must be a valid HTTP(S) URL")


def _check_competitor(row: dict[str, str], errors: list[str], warnings: list[str]) -> None:
    _check_uuid(row, "client_id", errors)
    if not _starts_with_http(row, "website_url"):
        warnings.append("website_url should start with http:// or https://")


TYPE_CHECKS: dict[ImportType, Callable[[dict[str, str], list[str], list[str]], None]] = {
    ImportType.CLIENT: _check_client,
    ImportType.LOCATION: _check_location,
    ImportType.POST: _check_post,
    ImportType.MEDIA: _check_media,
    ImportType.COMPETITOR: _check_competitor,
}


def validate_row(row: dict[str, str], row_index: int, import_type: ImportType) -> ValidationOutcome:
    """Validate one row against its import type's schema and rules."""
    spec = IMPORT_SPECS[import_type]
    errors: list[str] = []
    warnings: list[str] = []

    for column in spec.required:
        if not _value(row, column):
            errors.append(f"Missing required field: {column}")

    TYPE_CHECKS[import_type](row, errors, warnings)

    # Anything the rules above let through must still convert cleanly
    if not errors:
        try:
            spec.record_model.from_row(row)
        except ValidationError as exc:
            errors.append(format_validation_error(exc))

    for column in row:
        if column.strip() and column not in spec.known_columns:
            warnings.append(f'Unknown column "{column}" will be ignored')

    if errors:
        status = RowStatus.ERROR
    elif warnings:
        status = RowStatus.WARNING
    else:
        status = RowStatus.VALID

    return ValidationOutcome(
        row_index=row_index,
        data=dict(row),
        status=status,
        errors=errors,
        warnings=warnings,
    )


def validate_rows(rows: list[dict[str, str]], import_type: ImportType) -> list[ValidationOutcome]:
    """Validate parsed rows, numbering them from 1."""
    return [validate_row(row, index, import_type) for index, row in enumerate(rows, start=1)]
