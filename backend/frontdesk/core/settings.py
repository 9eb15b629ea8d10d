"""Specialized settings adapters for billing."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel

from frontdesk.core.config import get_settings


class InvoiceDefaults(BaseModel):
    """Slim view of invoice-related configuration."""

    default_gst_rate: Decimal = Decimal("12")
    default_currency: str = "INR"
    default_country: str = "India"
    invoice_prefix: str = "INV"
    proforma_prefix: str = "PI"
    payment_terms_days: int = 30


def get_invoice_defaults() -> InvoiceDefaults:
    """Return invoice-specific configuration."""

    settings = get_settings()
    return InvoiceDefaults(
        default_gst_rate=settings.default_gst_rate,
        default_currency=settings.default_currency,
        default_country=settings.default_country,
        invoice_prefix=settings.invoice_prefix,
        proforma_prefix=settings.proforma_prefix,
        payment_terms_days=settings.payment_terms_days,
    )
