"""Google Business Profile post model."""

import uuid
from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from gainai.models.base import BaseModel, JSONType


class ContentType(str, Enum):
    """GBP post content types."""

    STANDARD = "STANDARD"
    EVENT = "EVENT"
    OFFER = "OFFER"
    PRODUCT = "PRODUCT"
    ALERT = "ALERT"


class PostStatus(str, Enum):
    """Publishing status of a post."""

    DRAFT = "DRAFT"
    SCHEDULED = "SCHEDULED"
    PUBLISHED = "PUBLISHED"
    FAILED = "FAILED"
    DELETED = "DELETED"


class CallToActionType(str, Enum):
    """Button types Google accepts on a post."""

    BOOK = "BOOK"
    ORDER = "ORDER"
    SHOP = "SHOP"
    LEARN_MORE = "LEARN_MORE"
    SIGN_UP = "SIGN_UP"
    CALL = "CALL"


class Post(BaseModel):
    """A post drafted for, scheduled on or published to a GBP location."""

    __tablename__ = "posts"
    __table_args__ = (Index("idx_posts_location_status", "location_id", "status"),)

    location_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("gbp_locations.id", ondelete="CASCADE"),
        nullable=False,
    )
    content_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ContentType.STANDARD.value,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PostStatus.DRAFT.value,
    )
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    call_to_action: Mapped[dict | None] = mapped_column(JSONType, nullable=True)
    media_urls: Mapped[list | None] = mapped_column(JSONType, nullable=True)
    scheduled_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    published_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_by_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
