"""Schema exports."""

from frontdesk.schemas.hotel_config import HotelConfigRead, HotelConfigUpdate
from frontdesk.schemas.invoice import (
    GSTBucketRead,
    InvoiceCalculationRead,
    InvoiceCreate,
    InvoiceDraft,
    InvoiceListResponse,
    InvoiceRead,
    InvoiceSummaryRead,
    LineCalculationRead,
    LineItemInput,
    LineItemRead,
    PaymentCreate,
    PaymentRead,
    PaymentRecorded,
)
from frontdesk.schemas.item_type import ItemTypeCreate, ItemTypeRead, ItemTypeUpdate

__all__ = [
    "GSTBucketRead",
    "HotelConfigRead",
    "HotelConfigUpdate",
    "InvoiceCalculationRead",
    "InvoiceCreate",
    "InvoiceDraft",
    "InvoiceListResponse",
    "InvoiceRead",
    "InvoiceSummaryRead",
    "ItemTypeCreate",
    "ItemTypeRead",
    "ItemTypeUpdate",
    "LineCalculationRead",
    "LineItemInput",
    "LineItemRead",
    "PaymentCreate",
    "PaymentRead",
    "PaymentRecorded",
]
