"""Custom item type schemas."""

from __future__ import annotations

import uuid
from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ItemTypeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str | None = None
    icon: str = "📋"
    default_gst_rate: Decimal = Field(
        default=Decimal("12"), ge=Decimal("0"), le=Decimal("100")
    )
    sort_order: int = 0


class ItemTypeUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    icon: str | None = None
    default_gst_rate: Decimal | None = Field(
        default=None, ge=Decimal("0"), le=Decimal("100")
    )
    sort_order: int | None = None
    is_active: bool | None = None


class ItemTypeRead(BaseModel):
    """Serialized custom item type."""

    id: uuid.UUID
    name: str
    description: str | None = None
    icon: str
    default_gst_rate: Decimal
    is_active: bool
    sort_order: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
