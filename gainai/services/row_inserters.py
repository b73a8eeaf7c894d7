"""Per-type row inserters used by the batch processor.

Each inserter turns a raw row into its typed record, issues exactly one
insert and returns the new record's id. Errors propagate to the caller.
"""

import uuid
from collections.abc import Awaitable, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from gainai.models import Client, ClientStatus, Competitor, Location, LocationStatus, Media, Post
from gainai.schemas.import_records import (
    ClientRecord,
    CompetitorRecord,
    LocationRecord,
    MediaRecord,
    PostRecord,
)

RowInserter = Callable[[AsyncSession, dict[str, str], uuid.UUID | None], Awaitable[uuid.UUID]]


async def _insert(db: AsyncSession, entity) -> uuid.UUID:
    db.add(entity)
    await db.flush()
    return entity.id


async def insert_client(db: AsyncSession, data: dict[str, str], actor_id: uuid.UUID | None) -> uuid.UUID:
    """Create a client in onboarding status."""
    record = ClientRecord.from_row(data)
    return await _insert(
        db,
        Client(
            name=record.name,
            slug=record.resolved_slug,
            contact_name=record.contact_name,
            contact_email=record.contact_email,
            contact_phone=record.contact_phone,
            website_url=record.website_url,
            package_type=record.package_type.value,
            status=ClientStatus.ONBOARDING.value,
            notes=record.notes,
        ),
    )


async def insert_location(db: AsyncSession, data: dict[str, str], actor_id: uuid.UUID | None) -> uuid.UUID:
    """Create a GBP location awaiting verification."""
    record = LocationRecord.from_row(data)
    return await _insert(
        db,
        Location(
            client_id=record.client_id,
            name=record.name,
            address=record.address,
            phone=record.phone,
            website_url=record.website_url,
            primary_category=record.primary_category,
            timezone=record.timezone,
            latitude=record.latitude,
            longitude=record.longitude,
            status=LocationStatus.PENDING_VERIFICATION.value,
        ),
    )


async def insert_post(db: AsyncSession, data: dict[str, str], actor_id: uuid.UUID | None) -> uuid.UUID:
    """Create a draft or scheduled post."""
    record = PostRecord.from_row(data)
    return await _insert(
        db,
        Post(
            location_id=record.location_id,
            summary=record.summary,
            content_type=record.content_type.value,
            title=record.title,
            status=record.status.value,
            scheduled_at=record.scheduled_at,
            call_to_action=record.call_to_action,
            media_urls=record.media_urls,
            created_by_id=actor_id,
        ),
    )


async def insert_media(db: AsyncSession, data: dict[str, str], actor_id: uuid.UUID | None) -> uuid.UUID:
    """Create a media item for a location."""
    record = MediaRecord.from_row(data)
    return await _insert(
        db,
        Media(
            location_id=record.location_id,
            storage_url=record.url,
            media_type=record.media_type.value,
            category=record.category.value,
            file_name=record.file_name,
            description=record.description,
        ),
    )


async def insert_competitor(db: AsyncSession, data: dict[str, str], actor_id: uuid.UUID | None) -> uuid.UUID:
    """Create a tracked competitor for a client."""
    record = CompetitorRecord.from_row(data)
    return await _insert(
        db,
        Competitor(
            client_id=record.client_id,
            name=record.name,
            place_id=record.place_id,
            address=record.address,
            phone=record.phone,
            website_url=record.website_url,
            primary_category=record.primary_category,
            notes=record.notes,
        ),
    )
