"""Hotel configuration lookups and updates."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.core.settings import get_invoice_defaults
from frontdesk.models import HotelConfig
from frontdesk.schemas.hotel_config import HotelConfigRead, HotelConfigUpdate

logger = logging.getLogger(__name__)

# API field name -> HotelConfig column
_FIELD_MAP: dict[str, str] = {
    "hotel_name": "hotel_name",
    "hotel_address": "address_line1",
    "hotel_city": "city",
    "hotel_state": "state",
    "hotel_pincode": "pin_code",
    "hotel_country": "country",
    "hotel_phone": "phone",
    "hotel_email": "email",
    "hotel_website": "website",
    "hotel_gst_number": "gst_number",
    "hotel_pan_number": "pan_number",
    "logo_url": "logo_url",
    "bank_name": "bank_name",
    "bank_account_number": "bank_account_number",
    "bank_ifsc_code": "bank_ifsc_code",
    "bank_branch": "bank_branch",
    "bank_account_holder_name": "bank_account_holder_name",
    "invoice_prefix": "invoice_prefix",
    "proforma_prefix": "proforma_prefix",
    "default_currency": "default_currency",
    "default_gst_rate": "gst_rate",
    "show_bank_details_default": "show_bank_details_default",
    "email_enabled_default": "email_enabled_default",
    "default_buffet_breakfast_price": "buffet_breakfast_price",
    "default_buffet_lunch_price": "buffet_lunch_price",
    "default_buffet_dinner_price": "buffet_dinner_price",
    "invoice_terms_and_conditions": "default_terms_and_conditions",
    "invoice_footer_text": "invoice_footer_text",
}

_REQUIRED_COLUMNS = frozenset(
    {
        "hotel_name",
        "country",
        "invoice_prefix",
        "proforma_prefix",
        "default_currency",
        "gst_rate",
        "show_bank_details_default",
        "email_enabled_default",
        "buffet_breakfast_price",
        "buffet_lunch_price",
        "buffet_dinner_price",
    }
)


async def get_config(session: AsyncSession) -> HotelConfig | None:
    """Return the single hotel configuration row, if one exists."""

    result = await session.execute(
        select(HotelConfig).order_by(HotelConfig.created_at).limit(1)
    )
    return result.scalars().first()


def to_read(config: HotelConfig | None) -> HotelConfigRead:
    """Project the stored row (or defaults when unset) into the API shape."""

    if config is None:
        defaults = get_invoice_defaults()
        return HotelConfigRead(
            hotel_country=defaults.default_country,
            invoice_prefix=defaults.invoice_prefix,
            proforma_prefix=defaults.proforma_prefix,
            default_currency=defaults.default_currency,
            default_gst_rate=defaults.default_gst_rate,
        )

    values: dict[str, object] = {"id": config.id}
    for api_field, column in _FIELD_MAP.items():
        value = getattr(config, column)
        if value is not None:
            values[api_field] = value
    return HotelConfigRead.model_validate(values)


async def update_config(
    session: AsyncSession, payload: HotelConfigUpdate
) -> HotelConfig:
    """Apply a partial update, creating the configuration row on first use."""

    config = await get_config(session)
    if config is None:
        defaults = get_invoice_defaults()
        config = HotelConfig(
            hotel_name="",
            country=defaults.default_country,
            invoice_prefix=defaults.invoice_prefix,
            proforma_prefix=defaults.proforma_prefix,
            default_currency=defaults.default_currency,
            gst_rate=defaults.default_gst_rate,
        )
        session.add(config)

    changes = payload.model_dump(exclude_unset=True)
    for api_field, value in changes.items():
        column = _FIELD_MAP[api_field]
        if value is None and column in _REQUIRED_COLUMNS:
            continue
        setattr(config, column, value)

    await session.commit()
    await session.refresh(config)
    logger.info("Hotel configuration updated: %s", ", ".join(sorted(changes)) or "-")
    return config

