"""Invoice, line item, and payment models."""

from __future__ import annotations

import enum
import uuid
from datetime import date
from decimal import Decimal

from sqlalchemy import (
    Boolean,
    Date,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from frontdesk.db.base import Base
from frontdesk.models.mixins import CreatedByMixin, TimestampMixin


class InvoiceType(str, enum.Enum):
    """Kinds of billing documents."""

    INVOICE = "invoice"
    PROFORMA = "proforma"
    ESTIMATE = "estimate"
    QUOTE = "quote"


class InvoiceStatus(str, enum.Enum):
    """Invoice lifecycle states."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class PaymentStatus(str, enum.Enum):
    """Settlement state derived from recorded payments."""

    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"
    REFUNDED = "refunded"


class CustomerType(str, enum.Enum):
    INDIVIDUAL = "individual"
    COMPANY = "company"


class ItemType(str, enum.Enum):
    """Billable line categories."""

    ROOM = "room"
    FOOD = "food"
    SERVICE = "service"
    EXTRA = "extra"
    DISCOUNT = "discount"
    OTHER = "other"
    CUSTOM = "custom"


class BuffetType(str, enum.Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class PaymentMethod(str, enum.Enum):
    """Ways a guest can settle an invoice."""

    CASH = "cash"
    CARD = "card"
    UPI = "upi"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
    OTHER = "other"


def _enum(enum_cls: type[enum.Enum]) -> Enum:
    return Enum(enum_cls, values_callable=lambda members: [m.value for m in members])


class Invoice(TimestampMixin, CreatedByMixin, Base):
    """Billing document with customer and hotel snapshots."""

    __tablename__ = "invoices"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    invoice_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    invoice_type: Mapped[InvoiceType] = mapped_column(
        _enum(InvoiceType), default=InvoiceType.INVOICE, nullable=False
    )
    invoice_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date | None] = mapped_column(Date)

    customer_id: Mapped[uuid.UUID | None] = mapped_column()
    customer_type: Mapped[CustomerType] = mapped_column(
        _enum(CustomerType), default=CustomerType.INDIVIDUAL, nullable=False
    )
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str | None] = mapped_column(String(255))
    customer_phone: Mapped[str | None] = mapped_column(String(32))
    customer_address: Mapped[str | None] = mapped_column(Text)
    customer_city: Mapped[str | None] = mapped_column(String(100))
    customer_state: Mapped[str | None] = mapped_column(String(100))
    customer_pincode: Mapped[str | None] = mapped_column(String(10))
    customer_country: Mapped[str | None] = mapped_column(String(100))
    customer_gst_number: Mapped[str | None] = mapped_column(String(15))
    company_name: Mapped[str | None] = mapped_column(String(255))
    company_gst_number: Mapped[str | None] = mapped_column(String(15))
    company_pan_number: Mapped[str | None] = mapped_column(String(10))
    company_contact_person: Mapped[str | None] = mapped_column(String(255))

    hotel_name: Mapped[str | None] = mapped_column(String(255))
    hotel_address: Mapped[str | None] = mapped_column(Text)
    hotel_city: Mapped[str | None] = mapped_column(String(100))
    hotel_state: Mapped[str | None] = mapped_column(String(100))
    hotel_pincode: Mapped[str | None] = mapped_column(String(10))
    hotel_country: Mapped[str | None] = mapped_column(String(100))
    hotel_phone: Mapped[str | None] = mapped_column(String(32))
    hotel_email: Mapped[str | None] = mapped_column(String(255))
    hotel_gst_number: Mapped[str | None] = mapped_column(String(15))
    hotel_website: Mapped[str | None] = mapped_column(String(255))

    currency: Mapped[str] = mapped_column(String(3), default="INR", nullable=False)
    show_bank_details: Mapped[bool] = mapped_column(Boolean, default=True)
    is_email_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    status: Mapped[InvoiceStatus] = mapped_column(
        _enum(InvoiceStatus), default=InvoiceStatus.DRAFT, nullable=False
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        _enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False
    )
    notes: Mapped[str | None] = mapped_column(Text)
    terms_and_conditions: Mapped[str | None] = mapped_column(Text)
    booking_id: Mapped[uuid.UUID | None] = mapped_column()

    subtotal: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    total_tax: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    total_discount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    paid_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    balance_amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )

    line_items: Mapped[list["InvoiceLineItem"]] = relationship(
        "InvoiceLineItem",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoiceLineItem.sort_order",
    )
    payments: Mapped[list["InvoicePayment"]] = relationship(
        "InvoicePayment",
        back_populates="invoice",
        cascade="all, delete-orphan",
        order_by="InvoicePayment.payment_date.desc()",
    )


class InvoiceLineItem(TimestampMixin, Base):
    """Billable row on an invoice along with its persisted calculation."""

    __tablename__ = "invoice_line_items"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False
    )
    item_type: Mapped[ItemType] = mapped_column(
        _enum(ItemType), default=ItemType.OTHER, nullable=False
    )
    custom_item_type_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("custom_item_types.id", ondelete="SET NULL")
    )
    description: Mapped[str] = mapped_column(String(1000), nullable=False)
    quantity: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("0"), nullable=False
    )
    tax_inclusive: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    tax_name: Mapped[str] = mapped_column(String(32), default="GST", nullable=False)
    discount_rate: Mapped[Decimal] = mapped_column(
        Numeric(5, 2), default=Decimal("0"), nullable=False
    )

    line_total: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    tax_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    discount_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    final_amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)

    is_buffet_item: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    buffet_type: Mapped[BuffetType | None] = mapped_column(_enum(BuffetType))
    persons_count: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    price_per_person: Mapped[Decimal] = mapped_column(
        Numeric(12, 2), default=Decimal("0"), nullable=False
    )
    item_date: Mapped[date | None] = mapped_column(Date)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    invoice: Mapped[Invoice] = relationship("Invoice", back_populates="line_items")


class InvoicePayment(TimestampMixin, CreatedByMixin, Base):
    """Payment received against an invoice."""

    __tablename__ = "invoice_payments"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4, unique=True
    )
    invoice_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False
    )
    payment_date: Mapped[date] = mapped_column(Date, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        _enum(PaymentMethod), default=PaymentMethod.CASH, nullable=False
    )
    reference_number: Mapped[str | None] = mapped_column(String(100))
    notes: Mapped[str | None] = mapped_column(Text)

    invoice: Mapped[Invoice] = relationship("Invoice", back_populates="payments")
