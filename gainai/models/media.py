"""Google Business Profile media model."""

import uuid
from enum import Enum

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gainai.models.base import BaseModel


class MediaType(str, Enum):
    """Kinds of media Google accepts."""

    PHOTO = "PHOTO"
    VIDEO = "VIDEO"


class MediaCategory(str, Enum):
    """Where a media item appears on the profile."""

    COVER = "COVER"
    PROFILE = "PROFILE"
    ADDITIONAL = "ADDITIONAL"
    POST = "POST"


class Media(BaseModel):
    """A photo or video attached to a GBP location."""

    __tablename__ = "gbp_media"

    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("gbp_locations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    storage_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    media_type: Mapped[str] = mapped_column(
        String(10),
        nullable=False,
        default=MediaType.PHOTO.value,
    )
    category: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=MediaCategory.ADDITIONAL.value,
    )
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
