"""Custom invoice item type model."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.db.base import Base
from frontdesk.models.mixins import TimestampMixin


class CustomItemType(TimestampMixin, Base):
    """Hotel-defined billable category with its own default GST rate."""

    __tablename__ = "custom_item_types"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    icon: Mapped[str] = mapped_column(String(16), default="📋", nullable=False)
    default_gst_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("12"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
