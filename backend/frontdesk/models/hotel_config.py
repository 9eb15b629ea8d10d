"""Hotel configuration model."""

from __future__ import annotations

import uuid
from decimal import Decimal

from sqlalchemy import Boolean, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from frontdesk.db.base import Base
from frontdesk.models.mixins import TimestampMixin


class HotelConfig(TimestampMixin, Base):
    """Singleton row holding hotel identity, bank, and invoice settings."""

    __tablename__ = "hotel_config"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    hotel_name: Mapped[str] = mapped_column(String(255), default="", nullable=False)
    address_line1: Mapped[str | None] = mapped_column(Text)
    city: Mapped[str | None] = mapped_column(String(100))
    state: Mapped[str | None] = mapped_column(String(100))
    pin_code: Mapped[str | None] = mapped_column(String(10))
    country: Mapped[str] = mapped_column(String(100), default="India", nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32))
    email: Mapped[str | None] = mapped_column(String(255))
    website: Mapped[str | None] = mapped_column(String(255))
    gst_number: Mapped[str | None] = mapped_column(String(15))
    pan_number: Mapped[str | None] = mapped_column(String(10))
    logo_url: Mapped[str | None] = mapped_column(String(500))

    bank_name: Mapped[str | None] = mapped_column(String(255))
    bank_account_number: Mapped[str | None] = mapped_column(String(34))
    bank_ifsc_code: Mapped[str | None] = mapped_column(String(11))
    bank_branch: Mapped[str | None] = mapped_column(String(255))
    bank_account_holder_name: Mapped[str | None] = mapped_column(String(255))

    invoice_prefix: Mapped[str] = mapped_column(String(10), default="INV", nullable=False)
    proforma_prefix: Mapped[str] = mapped_column(String(10), default="PI", nullable=False)
    default_currency: Mapped[str] = mapped_column(
        String(3), default="INR", nullable=False
    )
    gst_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("12"), nullable=False
    )
    show_bank_details_default: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    email_enabled_default: Mapped[bool] = mapped_column(
        Boolean, default=True, nullable=False
    )
    default_terms_and_conditions: Mapped[str | None] = mapped_column(Text)
    invoice_footer_text: Mapped[str | None] = mapped_column(Text)

    buffet_breakfast_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("250"), nullable=False
    )
    buffet_lunch_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("350"), nullable=False
    )
    buffet_dinner_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), default=Decimal("400"), nullable=False
    )
