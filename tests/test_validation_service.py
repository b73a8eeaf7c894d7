"""Tests for row validation."""

import pytest

from gainai.models import ImportType
from gainai.services.validation_service import RowStatus, validate_row, validate_rows
from gainai.utils.csv_parser import parse_csv
from gainai.services.template_service import build_template

LOCATION_ID = "0190f5d3-1e4b-7c52-8d6f-5a7b9c0d2e13"
CLIENT_ID = "0190f5d2-7c3a-7b21-9a4e-3f6d8c2b1a05"


def test_valid_client_row() -> None:
    outcome = validate_row(
        {"name": "Acme", "contact_email": "john@acme.com", "package_type": "growth"},
        1,
        ImportType.CLIENT,
    )

    assert outcome.status == RowStatus.VALID
    assert outcome.errors == []
    assert outcome.warnings == []
    assert outcome.is_valid


def test_missing_required_fields_are_errors() -> None:
    outcome = validate_row({"name": "  ", "notes": "x"}, 3, ImportType.CLIENT)

    assert outcome.status == RowStatus.ERROR
    assert outcome.row_index == 3
    assert "Missing required field: name" in outcome.errors
    assert "Missing required field: contact_email" in outcome.errors
    assert not outcome.is_valid


def test_invalid_email_is_an_error() -> None:
    outcome = validate_row({"name": "Acme", "contact_email": "not-an-email"}, 1, ImportType.CLIENT)

    assert outcome.errors == ["Invalid email format for contact_email"]


def test_unknown_package_type_is_an_error() -> None:
    outcome = validate_row(
        {"name": "Acme", "contact_email": "a@acme.com", "package_type": "platinum"},
        1,
        ImportType.CLIENT,
    )

    assert outcome.status == RowStatus.ERROR
    assert outcome.errors[0].startswith("Invalid package_type: platinum")


def test_website_without_scheme_is_a_warning() -> None:
    outcome = validate_row(
        {"name": "Acme", "contact_email": "a@acme.com", "website_url": "acme.com"},
        1,
        ImportType.CLIENT,
    )

    assert outcome.status == RowStatus.WARNING
    assert outcome.warnings == ["website_url should start with http:// or https://"]
    assert outcome.is_valid


def test_unknown_columns_are_warnings() -> None:
    outcome = validate_row(
        {"name": "Acme", "contact_email": "a@acme.com", "favourite_colour": "blue", "": ""},
        1,
        ImportType.CLIENT,
    )

    assert outcome.status == RowStatus.WARNING
    assert outcome.warnings == ['Unknown column "favourite_colour" will be ignored']


def test_location_checks_uuid_and_coordinates() -> None:
    outcome = validate_row(
        {
            "client_id": "client-1",
            "name": "Acme London",
            "address": "1 High St",
            "latitude": "north",
            "longitude": "-0.12",
        },
        1,
        ImportType.LOCATION,
    )

    assert outcome.errors == [
        "client_id must be a valid UUID",
        "latitude must be a valid number",
    ]


def test_post_rules() -> None:
    outcome = validate_row(
        {
            "location_id": LOCATION_ID,
            "summary": "x" * 1501,
            "content_type": "story",
            "scheduled_at": "next tuesday",
            "call_to_action_type": "LEARN_MORE",
            "call_to_action_url": "acme.com/menu",
        },
        1,
        ImportType.POST,
    )

    assert outcome.status == RowStatus.ERROR
    assert outcome.errors[0].startswith("Invalid content_type: story")
    assert "scheduled_at must be a valid date/time string" in outcome.errors
    assert "summary exceeds 1500 characters and may be truncated by Google" in outcome.warnings
    assert "call_to_action_url should start with http:// or https://" in outcome.warnings


@pytest.mark.parametrize("scheduled_at", ["2026-03-01T10:00:00Z", "2026-03-01 10:00", "01/03/2026"])
def test_post_accepts_common_date_formats(scheduled_at: str) -> None:
    outcome = validate_row(
        {
            "location_id": LOCATION_ID,
            "summary": "Spring menu",
            "content_type": "event",
            "scheduled_at": scheduled_at,
        },
        1,
        ImportType.POST,
    )

    assert outcome.status == RowStatus.VALID


def test_media_url_must_be_http() -> None:
    outcome = validate_row(
        {
            "location_id": LOCATION_ID,
            "url": "ftp://example.com/photo.jpg",
            "media_type": "PHOTO",
            "category": "COVER",
        },
        1,
        ImportType.MEDIA,
    )

    assert outcome.errors == ["url must be a valid HTTP(S) URL"]


def test_competitor_row() -> None:
    outcome = validate_row(
        {"client_id": CLIENT_ID, "name": "Rival", "place_id": "ChIJ123"},
        1,
        ImportType.COMPETITOR,
    )

    assert outcome.status == RowStatus.VALID


def test_validation_is_idempotent() -> None:
    row = {"name": "Acme", "contact_email": "bad", "website_url": "acme.com", "extra": "1"}

    first = validate_row(row, 7, ImportType.CLIENT)
    second = validate_row(dict(row), 7, ImportType.CLIENT)

    assert first == second
    assert first.data == row


def test_validate_rows_numbers_from_one() -> None:
    outcomes = validate_rows(
        [
            {"name": "Acme", "contact_email": "a@acme.com"},
            {"name": "Beta"},
            {"name": "Gamma", "contact_email": "g@gamma.com", "website_url": "gamma.com"},
        ],
        ImportType.CLIENT,
    )

    assert [o.row_index for o in outcomes] == [1, 2, 3]
    assert [o.status for o in outcomes] == [RowStatus.VALID, RowStatus.ERROR, RowStatus.WARNING]


@pytest.mark.parametrize("import_type", list(ImportType))
def test_template_sample_row_is_valid(import_type: ImportType) -> None:
    _, text = build_template(import_type)

    parsed = parse_csv(text)
    outcomes = validate_rows(parsed.rows, import_type)

    assert len(outcomes) == 1
    assert outcomes[0].status == RowStatus.VALID, outcomes[0].errors + outcomes[0].warnings
