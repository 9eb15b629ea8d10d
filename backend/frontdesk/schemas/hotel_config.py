"""Hotel configuration schemas."""

from __future__ import annotations

import uuid
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from frontdesk.services.validation import (
    optional_gst_number,
    optional_pan_number,
    optional_pincode,
)


class HotelConfigRead(BaseModel):
    """Hotel settings in the shape used by invoice forms."""

    id: uuid.UUID | None = None
    hotel_name: str = ""
    hotel_address: str = ""
    hotel_city: str = ""
    hotel_state: str = ""
    hotel_pincode: str = ""
    hotel_country: str = "India"
    hotel_phone: str = ""
    hotel_email: str = ""
    hotel_website: str = ""
    hotel_gst_number: str = ""
    hotel_pan_number: str = ""
    logo_url: str = ""

    bank_name: str = ""
    bank_account_number: str = ""
    bank_ifsc_code: str = ""
    bank_branch: str = ""
    bank_account_holder_name: str = ""

    invoice_prefix: str = "INV"
    proforma_prefix: str = "PI"
    default_currency: str = "INR"
    default_gst_rate: Decimal = Decimal("12")
    show_bank_details_default: bool = True
    email_enabled_default: bool = True

    default_buffet_breakfast_price: Decimal = Decimal("250")
    default_buffet_lunch_price: Decimal = Decimal("350")
    default_buffet_dinner_price: Decimal = Decimal("400")

    invoice_terms_and_conditions: str = ""
    invoice_footer_text: str = ""


class HotelConfigUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    hotel_name: str | None = None
    hotel_address: str | None = None
    hotel_city: str | None = None
    hotel_state: str | None = None
    hotel_pincode: str | None = None
    hotel_country: str | None = None
    hotel_phone: str | None = None
    hotel_email: str | None = None
    hotel_website: str | None = None
    hotel_gst_number: str | None = None
    hotel_pan_number: str | None = None
    logo_url: str | None = None

    bank_name: str | None = None
    bank_account_number: str | None = None
    bank_ifsc_code: str | None = None
    bank_branch: str | None = None
    bank_account_holder_name: str | None = None

    invoice_prefix: str | None = Field(default=None, min_length=1, max_length=10)
    proforma_prefix: str | None = Field(default=None, min_length=1, max_length=10)
    default_currency: str | None = Field(default=None, min_length=3, max_length=3)
    default_gst_rate: Decimal | None = Field(
        default=None, ge=Decimal("0"), le=Decimal("100")
    )
    show_bank_details_default: bool | None = None
    email_enabled_default: bool | None = None

    default_buffet_breakfast_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    default_buffet_lunch_price: Decimal | None = Field(default=None, ge=Decimal("0"))
    default_buffet_dinner_price: Decimal | None = Field(default=None, ge=Decimal("0"))

    invoice_terms_and_conditions: str | None = None
    invoice_footer_text: str | None = None

    @field_validator("hotel_gst_number")
    @classmethod
    def _check_gst_number(cls, value: str | None) -> str | None:
        return optional_gst_number(value)

    @field_validator("hotel_pan_number")
    @classmethod
    def _check_pan_number(cls, value: str | None) -> str | None:
        return optional_pan_number(value)

    @field_validator("hotel_pincode")
    @classmethod
    def _check_pincode(cls, value: str | None) -> str | None:
        return optional_pincode(value)
