"""Invoice schemas."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from frontdesk.models.invoice import (
    BuffetType,
    CustomerType,
    InvoiceStatus,
    InvoiceType,
    ItemType,
    PaymentMethod,
    PaymentStatus,
)
from frontdesk.services.validation import (
    optional_gst_number,
    optional_pan_number,
    optional_pincode,
)


class LineItemInput(BaseModel):
    """Line item as typed into a form.

    Numeric ranges are deliberately unconstrained here; the advisory
    validator reports them so previews keep working on half-typed input.
    A missing ``tax_rate`` picks up the configured default GST rate.
    """

    id: uuid.UUID | None = None
    item_type: ItemType = ItemType.OTHER
    custom_item_type_id: uuid.UUID | None = None
    description: str = ""
    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    tax_rate: Decimal | None = Field(
        default=None, validation_alias=AliasChoices("tax_rate", "gst_rate")
    )
    tax_inclusive: bool = Field(
        default=False, validation_alias=AliasChoices("tax_inclusive", "gst_inclusive")
    )
    tax_name: str = Field(
        default="GST", validation_alias=AliasChoices("tax_name", "gst_name")
    )
    discount_rate: Decimal | None = None
    is_buffet_item: bool = False
    buffet_type: BuffetType | None = None
    persons_count: int = 1
    price_per_person: Decimal = Decimal("0")
    item_date: date | None = None
    sort_order: int | None = None


class InvoiceDraft(BaseModel):
    """Partial invoice sent by the live preview."""

    customer_name: str | None = None
    invoice_date: date | None = None
    currency: str | None = None
    line_items: list[LineItemInput] = Field(default_factory=list)


class InvoiceCreate(BaseModel):
    """Payload to create or fully replace an invoice."""

    invoice_number: str | None = None
    invoice_type: InvoiceType = InvoiceType.INVOICE
    invoice_date: date | None = None
    due_date: date | None = None

    customer_type: CustomerType = CustomerType.INDIVIDUAL
    customer_id: uuid.UUID | None = None
    customer_name: str | None = None
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    customer_city: str | None = None
    customer_state: str | None = None
    customer_pincode: str | None = None
    customer_country: str | None = None
    customer_gst_number: str | None = None
    company_name: str | None = None
    company_gst_number: str | None = None
    company_pan_number: str | None = None
    company_contact_person: str | None = None

    hotel_name: str | None = None
    hotel_address: str | None = None
    hotel_city: str | None = None
    hotel_state: str | None = None
    hotel_pincode: str | None = None
    hotel_country: str | None = None
    hotel_phone: str | None = None
    hotel_email: str | None = None
    hotel_gst_number: str | None = None
    hotel_website: str | None = None

    currency: str | None = None
    show_bank_details: bool | None = None
    is_email_enabled: bool | None = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    notes: str | None = None
    terms_and_conditions: str | None = None
    booking_id: uuid.UUID | None = None

    line_items: list[LineItemInput] = Field(default_factory=list)

    @field_validator("customer_gst_number", "company_gst_number", "hotel_gst_number")
    @classmethod
    def _check_gst_number(cls, value: str | None) -> str | None:
        return optional_gst_number(value)

    @field_validator("company_pan_number")
    @classmethod
    def _check_pan_number(cls, value: str | None) -> str | None:
        return optional_pan_number(value)

    @field_validator("customer_pincode", "hotel_pincode")
    @classmethod
    def _check_pincode(cls, value: str | None) -> str | None:
        return optional_pincode(value)


class LineItemRead(BaseModel):
    """Persisted line item with its calculation."""

    id: uuid.UUID
    item_type: ItemType
    custom_item_type_id: uuid.UUID | None = None
    description: str
    quantity: Decimal
    unit_price: Decimal
    tax_rate: Decimal
    tax_inclusive: bool
    tax_name: str
    discount_rate: Decimal
    line_total: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    is_buffet_item: bool
    buffet_type: BuffetType | None = None
    persons_count: int
    price_per_person: Decimal
    item_date: date | None = None
    sort_order: int

    model_config = ConfigDict(from_attributes=True)


class PaymentCreate(BaseModel):
    """Payment received against an invoice."""

    payment_date: date = Field(default_factory=date.today)
    amount: Decimal = Field(gt=Decimal("0"))
    payment_method: PaymentMethod = PaymentMethod.CASH
    reference_number: str | None = None
    notes: str | None = None


class PaymentRead(BaseModel):
    id: uuid.UUID
    invoice_id: uuid.UUID
    payment_date: date
    amount: Decimal
    payment_method: PaymentMethod
    reference_number: str | None = None
    notes: str | None = None
    created_by: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PaymentRecorded(BaseModel):
    """Payment plus the invoice settlement state after applying it."""

    payment: PaymentRead
    paid_amount: Decimal
    balance_amount: Decimal
    payment_status: PaymentStatus


class GSTBucketRead(BaseModel):
    tax_rate: Decimal
    taxable_amount: Decimal
    tax_amount: Decimal


class LineCalculationRead(BaseModel):
    line_total: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class InvoiceCalculationRead(BaseModel):
    """Live preview of invoice totals."""

    subtotal: Decimal
    total_tax: Decimal
    total_discount: Decimal
    total_amount: Decimal
    line_items: list[LineCalculationRead]
    gst_breakdown: list[GSTBucketRead]
    amount_in_words: str
    formatted_total: str
    errors: list[str] = Field(default_factory=list)


class InvoiceRead(BaseModel):
    """Serialized invoice."""

    id: uuid.UUID
    invoice_number: str
    invoice_type: InvoiceType
    invoice_date: date
    due_date: date | None = None

    customer_type: CustomerType
    customer_id: uuid.UUID | None = None
    customer_name: str
    customer_email: str | None = None
    customer_phone: str | None = None
    customer_address: str | None = None
    customer_city: str | None = None
    customer_state: str | None = None
    customer_pincode: str | None = None
    customer_country: str | None = None
    customer_gst_number: str | None = None
    company_name: str | None = None
    company_gst_number: str | None = None
    company_pan_number: str | None = None
    company_contact_person: str | None = None

    hotel_name: str | None = None
    hotel_address: str | None = None
    hotel_city: str | None = None
    hotel_state: str | None = None
    hotel_pincode: str | None = None
    hotel_country: str | None = None
    hotel_phone: str | None = None
    hotel_email: str | None = None
    hotel_gst_number: str | None = None
    hotel_website: str | None = None

    currency: str
    show_bank_details: bool
    is_email_enabled: bool
    status: InvoiceStatus
    payment_status: PaymentStatus
    notes: str | None = None
    terms_and_conditions: str | None = None
    booking_id: uuid.UUID | None = None

    subtotal: Decimal
    total_tax: Decimal
    total_discount: Decimal
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal

    created_by: str | None = None
    created_at: datetime
    updated_at: datetime

    line_items: list[LineItemRead] = Field(default_factory=list)
    payments: list[PaymentRead] = Field(default_factory=list)
    gst_breakdown: list[GSTBucketRead] = Field(default_factory=list)
    amount_in_words: str = ""
    is_overdue: bool = False

    model_config = ConfigDict(from_attributes=True)


class InvoiceSummaryRead(BaseModel):
    """Lightweight representation for invoice listing."""

    id: uuid.UUID
    invoice_number: str
    invoice_date: date
    customer_id: uuid.UUID | None = None
    customer_name: str
    customer_email: str | None = None
    total_amount: Decimal
    paid_amount: Decimal
    balance_amount: Decimal
    status: InvoiceStatus
    payment_status: PaymentStatus
    booking_id: uuid.UUID | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class InvoiceListResponse(BaseModel):
    """Paginated invoice listing payload."""

    items: list[InvoiceSummaryRead]
    total: int
    limit: int
    offset: int
