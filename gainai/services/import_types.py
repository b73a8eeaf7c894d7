"""Registry of bulk import types.

Every ``ImportType`` maps to one ``ImportSpec`` carrying its column schema,
downloadable template, typed record model and inserter.
"""

from dataclasses import dataclass

from gainai.exceptions import InvalidInputError
from gainai.models.bulk_job import ImportType
from gainai.schemas.import_records import (
    ClientRecord,
    CompetitorRecord,
    ImportRecord,
    LocationRecord,
    MediaRecord,
    PostRecord,
)
from gainai.services.row_inserters import (
    RowInserter,
    insert_client,
    insert_competitor,
    insert_location,
    insert_media,
    insert_post,
)


@dataclass(frozen=True)
class ImportTemplate:
    """Static CSV template offered for download."""

    filename: str
    headers: tuple[str, ...]
    sample_row: tuple[str, ...]


@dataclass(frozen=True)
class ImportSpec:
    """Everything the pipeline needs to know about one import type."""

    import_type: ImportType
    required: tuple[str, ...]
    optional: tuple[str, ...]
    record_model: type[ImportRecord]
    inserter: RowInserter
    template: ImportTemplate

    @property
    def known_columns(self) -> frozenset[str]:
        return frozenset(self.required) | frozenset(self.optional)


IMPORT_SPECS: dict[ImportType, ImportSpec] = {
    ImportType.CLIENT: ImportSpec(
        import_type=ImportType.CLIENT,
        required=("name", "contact_email"),
        optional=("slug", "contact_name", "contact_phone", "website_url", "package_type", "notes"),
        record_model=ClientRecord,
        inserter=insert_client,
        template=ImportTemplate(
            filename="client_import_template.csv",
            headers=(
                "name", "contact_email", "slug", "contact_name", "contact_phone",
                "website_url", "package_type", "notes",
            ),
            sample_row=(
                "Acme Corp", "john@acme.com", "acme-corp", "John Smith", "+44 7700 900000",
                "https://acme.com", "GROWTH", "New client onboarding",
            ),
        ),
    ),
    ImportType.LOCATION: ImportSpec(
        import_type=ImportType.LOCATION,
        required=("client_id", "name", "address"),
        optional=("phone", "website_url", "primary_category", "timezone", "latitude", "longitude"),
        record_model=LocationRecord,
        inserter=insert_location,
        template=ImportTemplate(
            filename="location_import_template.csv",
            headers=(
                "client_id", "name", "address", "phone", "website_url",
                "primary_category", "timezone", "latitude", "longitude",
            ),
            sample_row=(
                "0190f5d2-7c3a-7b21-9a4e-3f6d8c2b1a05", "Acme Corp - London",
                "123 High Street, London, SW1A 1AA", "+44 20 7946 0958", "https://acme.com/london",
                "restaurant", "Europe/London", "51.5074", "-0.1278",
            ),
        ),
    ),
    ImportType.POST: ImportSpec(
        import_type=ImportType.POST,
        required=("location_id", "summary", "content_type"),
        optional=(
            "title", "scheduled_at", "call_to_action_type", "call_to_action_url", "media_urls",
        ),
        record_model=PostRecord,
        inserter=insert_post,
        template=ImportTemplate(
            filename="post_import_template.csv",
            headers=(
                "location_id", "summary", "content_type", "title", "scheduled_at",
                "call_to_action_type", "call_to_action_url", "media_urls",
            ),
            sample_row=(
                "0190f5d3-1e4b-7c52-8d6f-5a7b9c0d2e13", "Check out our new spring menu!", "STANDARD",
                "Spring Menu Launch", "2026-03-01T10:00:00Z", "LEARN_MORE",
                "https://acme.com/spring-menu",
                "https://example.com/img1.jpg|https://example.com/img2.jpg",
            ),
        ),
    ),
    ImportType.MEDIA: ImportSpec(
        import_type=ImportType.MEDIA,
        required=("location_id", "url", "media_type", "category"),
        optional=("file_name", "description"),
        record_model=MediaRecord,
        inserter=insert_media,
        template=ImportTemplate(
            filename="media_import_template.csv",
            headers=("location_id", "url", "media_type", "category", "file_name", "description"),
            sample_row=(
                "0190f5d3-1e4b-7c52-8d6f-5a7b9c0d2e13", "https://example.com/photo.jpg", "PHOTO",
                "ADDITIONAL", "storefront.jpg", "Front view of the store",
            ),
        ),
    ),
    ImportType.COMPETITOR: ImportSpec(
        import_type=ImportType.COMPETITOR,
        required=("client_id", "name", "place_id"),
        optional=("address", "phone", "website_url", "primary_category", "notes"),
        record_model=CompetitorRecord,
        inserter=insert_competitor,
        template=ImportTemplate(
            filename="competitor_import_template.csv",
            headers=(
                "client_id", "name", "place_id", "address", "phone",
                "website_url", "primary_category", "notes",
            ),
            sample_row=(
                "0190f5d2-7c3a-7b21-9a4e-3f6d8c2b1a05", "Rival Corp", "ChIJN1t_tDeuEmsRUsoyG83frY4",
                "456 Main Road, London", "+44 20 7946 0959", "https://rival.com", "restaurant",
                "Main competitor in area",
            ),
        ),
    ),
}


def get_import_spec(value: str | ImportType) -> ImportSpec | None:
    """Look up the spec for an import type value, case-insensitively."""
    if isinstance(value, ImportType):
        return IMPORT_SPECS[value]
    try:
        return IMPORT_SPECS[ImportType(value.strip().lower())]
    except (ValueError, AttributeError):
        return None


def require_import_spec(value: str | None, label: str = "import_type") -> ImportSpec:
    """Resolve an import type from request input.

    Raises:
        InvalidInputError: If the value is missing or not a known type
    """
    if not value or not value.strip():
        raise InvalidInputError(f"{label} is required")

    spec = get_import_spec(value)
    if spec is None:
        allowed = ", ".join(t.value for t in ImportType)
        raise InvalidInputError(f"Invalid {label}: {value}. Must be one of: {allowed}")
    return spec
