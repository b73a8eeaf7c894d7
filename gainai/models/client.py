"""Agency client model."""

from enum import Enum

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from gainai.models.base import BaseModel


class ClientStatus(str, Enum):
    """Lifecycle status of an agency client."""

    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    CHURNED = "CHURNED"
    ONBOARDING = "ONBOARDING"


class PackageType(str, Enum):
    """Service package tiers, cheapest first."""

    STARTER = "STARTER"
    GROWTH = "GROWTH"
    PREMIUM = "PREMIUM"
    ENTERPRISE = "ENTERPRISE"


class Client(BaseModel):
    """A business whose Google Business Profiles the agency manages."""

    __tablename__ = "clients"
    __table_args__ = (Index("idx_clients_slug", "slug", unique=True),)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ClientStatus.ONBOARDING.value,
    )
    package_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PackageType.STARTER.value,
    )
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
