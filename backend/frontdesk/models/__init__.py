"""ORM models package export."""

from frontdesk.models.hotel_config import HotelConfig
from frontdesk.models.invoice import (
    BuffetType,
    CustomerType,
    Invoice,
    InvoiceLineItem,
    InvoicePayment,
    InvoiceStatus,
    InvoiceType,
    ItemType,
    PaymentMethod,
    PaymentStatus,
)
from frontdesk.models.item_type import CustomItemType

__all__ = [
    "BuffetType",
    "CustomItemType",
    "CustomerType",
    "HotelConfig",
    "Invoice",
    "InvoiceLineItem",
    "InvoicePayment",
    "InvoiceStatus",
    "InvoiceType",
    "ItemType",
    "PaymentMethod",
    "PaymentStatus",
]
