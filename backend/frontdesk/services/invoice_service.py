"""Invoice creation, totals, and payment utilities."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from frontdesk.core.settings import get_invoice_defaults
from frontdesk.models import (
    HotelConfig,
    Invoice,
    InvoiceLineItem,
    InvoicePayment,
    InvoiceStatus,
    InvoiceType,
    PaymentStatus,
)
from frontdesk.schemas.invoice import InvoiceCreate, LineItemInput, PaymentCreate
from frontdesk.services import hotel_config_service
from frontdesk.services.invoice_calculations import (
    InvoiceCalculation,
    calculate_due_date,
    calculate_invoice_total,
    calculate_payment_balance,
    generate_invoice_number,
    resolve_payment_status,
    round_money,
    validate_invoice,
)

logger = logging.getLogger(__name__)

_HOTEL_SNAPSHOT: dict[str, str] = {
    "hotel_name": "hotel_name",
    "hotel_address": "address_line1",
    "hotel_city": "city",
    "hotel_state": "state",
    "hotel_pincode": "pin_code",
    "hotel_country": "country",
    "hotel_phone": "phone",
    "hotel_email": "email",
    "hotel_gst_number": "gst_number",
    "hotel_website": "website",
}


class InvoiceValidationError(ValueError):
    """Raised when an invoice payload fails the advisory validator."""

    def __init__(self, errors: Sequence[str]) -> None:
        super().__init__("Invoice validation failed")
        self.errors = list(errors)


@dataclass(slots=True)
class _Draft:
    customer_name: str | None
    invoice_date: date | None
    line_items: list[LineItemInput]


def apply_line_defaults(
    line_items: Iterable[LineItemInput], default_gst_rate: Decimal
) -> list[LineItemInput]:
    """Fill a missing GST rate and sort order on each line."""

    prepared: list[LineItemInput] = []
    for index, item in enumerate(line_items):
        updates: dict[str, object] = {}
        if item.tax_rate is None:
            updates["tax_rate"] = default_gst_rate
        if item.sort_order is None:
            updates["sort_order"] = index
        prepared.append(item.model_copy(update=updates) if updates else item)
    return prepared


async def default_gst_rate(session: AsyncSession) -> Decimal:
    """GST rate from hotel configuration, falling back to settings."""

    config = await hotel_config_service.get_config(session)
    if config is not None:
        return config.gst_rate
    return get_invoice_defaults().default_gst_rate


async def next_invoice_number(
    session: AsyncSession,
    *,
    invoice_type: InvoiceType,
    config: HotelConfig | None = None,
    year: int | None = None,
) -> str:
    """Allocate the next number in the ``{prefix}-{year}-NNNN`` series."""

    defaults = get_invoice_defaults()
    if invoice_type is InvoiceType.PROFORMA:
        prefix = config.proforma_prefix if config else defaults.proforma_prefix
    else:
        prefix = config.invoice_prefix if config else defaults.invoice_prefix
    year = year if year is not None else date.today().year

    result = await session.execute(
        select(Invoice.invoice_number)
        .where(
            Invoice.invoice_number.startswith(f"{prefix}-{year}-", autoescape=True)
        )
        .order_by(
            func.length(Invoice.invoice_number).desc(),
            Invoice.invoice_number.desc(),
        )
        .limit(1)
    )
    return generate_invoice_number(result.scalar_one_or_none(), prefix=prefix, year=year)


def _line_rows(
    items: Sequence[LineItemInput], calculation: InvoiceCalculation
) -> list[InvoiceLineItem]:
    rows: list[InvoiceLineItem] = []
    for item, calc in zip(items, calculation.line_items, strict=True):
        rows.append(
            InvoiceLineItem(
                item_type=item.item_type,
                custom_item_type_id=item.custom_item_type_id,
                description=item.description.strip(),
                quantity=item.quantity or Decimal("0"),
                unit_price=item.unit_price or Decimal("0"),
                tax_rate=item.tax_rate or Decimal("0"),
                tax_inclusive=item.tax_inclusive,
                tax_name=item.tax_name or "GST",
                discount_rate=item.discount_rate or Decimal("0"),
                line_total=calc.line_total,
                tax_amount=calc.tax_amount,
                discount_amount=calc.discount_amount,
                final_amount=calc.final_amount,
                is_buffet_item=item.is_buffet_item,
                buffet_type=item.buffet_type,
                persons_count=item.persons_count,
                price_per_person=item.price_per_person,
                item_date=item.item_date,
                sort_order=item.sort_order or 0,
            )
        )
    return rows


def _prepare(
    payload: InvoiceCreate, gst_rate: Decimal
) -> tuple[list[LineItemInput], InvoiceCalculation]:
    items = apply_line_defaults(payload.line_items, gst_rate)
    errors = validate_invoice(
        _Draft(
            customer_name=payload.customer_name,
            invoice_date=payload.invoice_date,
            line_items=items,
        )
    )
    if errors:
        logger.warning("Rejected invoice payload: %s", "; ".join(errors))
        raise InvoiceValidationError(errors)
    return items, calculate_invoice_total(items)


def _header_values(
    payload: InvoiceCreate, config: HotelConfig | None
) -> dict[str, object]:
    defaults = get_invoice_defaults()
    values = payload.model_dump(
        exclude={"invoice_number", "line_items", "show_bank_details", "is_email_enabled"}
    )
    values["customer_name"] = (payload.customer_name or "").strip()
    values["customer_country"] = payload.customer_country or defaults.default_country
    values["currency"] = (
        payload.currency
        or (config.default_currency if config else None)
        or defaults.default_currency
    ).upper()
    values["show_bank_details"] = (
        payload.show_bank_details
        if payload.show_bank_details is not None
        else (config.show_bank_details_default if config else True)
    )
    values["is_email_enabled"] = (
        payload.is_email_enabled
        if payload.is_email_enabled is not None
        else (config.email_enabled_default if config else True)
    )
    if config is not None:
        for field, column in _HOTEL_SNAPSHOT.items():
            if values.get(field) is None:
                values[field] = getattr(config, column)
    if values.get("hotel_country") is None:
        values["hotel_country"] = defaults.default_country
    if values.get("terms_and_conditions") is None and config is not None:
        values["terms_and_conditions"] = config.default_terms_and_conditions
    if values.get("due_date") is None and payload.invoice_date is not None:
        values["due_date"] = calculate_due_date(
            payload.invoice_date, defaults.payment_terms_days
        )
    return values


async def create_invoice(
    session: AsyncSession,
    payload: InvoiceCreate,
    *,
    created_by: str | None = None,
) -> Invoice:
    """Validate, number, calculate and persist a new invoice."""

    config = await hotel_config_service.get_config(session)
    gst_rate = config.gst_rate if config else get_invoice_defaults().default_gst_rate
    items, calculation = _prepare(payload, gst_rate)

    invoice_number = payload.invoice_number or await next_invoice_number(
        session, invoice_type=payload.invoice_type, config=config
    )
    if await _number_taken(session, invoice_number):
        raise ValueError("Invoice number already exists")

    invoice = Invoice(
        invoice_number=invoice_number,
        created_by=created_by,
        subtotal=calculation.subtotal,
        total_tax=calculation.total_tax,
        total_discount=calculation.total_discount,
        total_amount=calculation.total_amount,
        paid_amount=Decimal("0.00"),
        balance_amount=calculation.total_amount,
        payment_status=PaymentStatus.PENDING,
        **_header_values(payload, config),
    )
    invoice.line_items = _line_rows(items, calculation)
    invoice.payments = []
    _apply_settlement(invoice)
    session.add(invoice)
    await session.commit()

    logger.info(
        "Created invoice %s with %d line items, total %s",
        invoice.invoice_number,
        len(items),
        calculation.total_amount,
    )
    loaded = await get_invoice(session, invoice_id=invoice.id)
    if loaded is None:
        raise ValueError("Invoice not found")
    return loaded


async def update_invoice(
    session: AsyncSession,
    *,
    invoice_id: uuid.UUID,
    payload: InvoiceCreate,
) -> Invoice:
    """Replace header fields and line items, then recalculate totals."""

    invoice = await get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise ValueError("Invoice not found")

    config = await hotel_config_service.get_config(session)
    gst_rate = config.gst_rate if config else get_invoice_defaults().default_gst_rate
    items, calculation = _prepare(payload, gst_rate)

    if calculation.total_amount < invoice.paid_amount:
        raise ValueError("Invoice total cannot be less than the amount already paid")

    if payload.invoice_number and payload.invoice_number != invoice.invoice_number:
        if await _number_taken(session, payload.invoice_number):
            raise ValueError("Invoice number already exists")
        invoice.invoice_number = payload.invoice_number

    for field, value in _header_values(payload, config).items():
        setattr(invoice, field, value)

    invoice.line_items.clear()
    await session.flush()
    invoice.line_items.extend(_line_rows(items, calculation))

    invoice.subtotal = calculation.subtotal
    invoice.total_tax = calculation.total_tax
    invoice.total_discount = calculation.total_discount
    invoice.total_amount = calculation.total_amount
    _apply_settlement(invoice)
    await session.commit()

    logger.info(
        "Updated invoice %s, total %s", invoice.invoice_number, invoice.total_amount
    )
    loaded = await get_invoice(session, invoice_id=invoice.id)
    if loaded is None:
        raise ValueError("Invoice not found")
    return loaded


async def delete_invoice(session: AsyncSession, *, invoice_id: uuid.UUID) -> None:
    """Delete an invoice that has no recorded payments."""

    invoice = await get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise ValueError("Invoice not found")
    if invoice.payments:
        raise ValueError("Cannot delete an invoice with recorded payments")
    await session.delete(invoice)
    await session.commit()
    logger.info("Deleted invoice %s", invoice.invoice_number)


async def get_invoice(
    session: AsyncSession, *, invoice_id: uuid.UUID
) -> Invoice | None:
    stmt = (
        select(Invoice)
        .options(selectinload(Invoice.line_items), selectinload(Invoice.payments))
        .where(Invoice.id == invoice_id)
        .execution_options(populate_existing=True)
    )
    result = await session.execute(stmt)
    return result.scalars().unique().one_or_none()


async def search_invoices(
    session: AsyncSession,
    *,
    status: InvoiceStatus | None = None,
    payment_status: PaymentStatus | None = None,
    customer_id: uuid.UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    query: str | None = None,
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[Invoice], int]:
    """Return paginated invoices, newest first, with optional filters applied."""

    limit = max(1, min(limit, 500))
    offset = max(0, offset)

    stmt: Select[tuple[Invoice]] = select(Invoice)
    if status is not None:
        stmt = stmt.where(Invoice.status == status)
    if payment_status is not None:
        stmt = stmt.where(Invoice.payment_status == payment_status)
    if customer_id is not None:
        stmt = stmt.where(Invoice.customer_id == customer_id)
    if date_from is not None:
        stmt = stmt.where(Invoice.invoice_date >= date_from)
    if date_to is not None:
        stmt = stmt.where(Invoice.invoice_date <= date_to)
    if query:
        pattern = f"%{query}%"
        stmt = stmt.where(
            or_(
                Invoice.invoice_number.ilike(pattern),
                Invoice.customer_name.ilike(pattern),
            )
        )

    total = await session.scalar(select(func.count()).select_from(stmt.subquery()))
    result = await session.execute(
        stmt.order_by(Invoice.created_at.desc(), Invoice.invoice_number.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(result.scalars().all()), int(total or 0)


async def list_payments(
    session: AsyncSession, *, invoice_id: uuid.UUID
) -> list[InvoicePayment]:
    invoice = await get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise ValueError("Invoice not found")
    return list(invoice.payments)


async def record_payment(
    session: AsyncSession,
    *,
    invoice_id: uuid.UUID,
    payload: PaymentCreate,
    created_by: str | None = None,
) -> tuple[InvoicePayment, Invoice]:
    """Record a payment and refresh the invoice settlement fields."""

    invoice = await get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise ValueError("Invoice not found")
    if invoice.status is InvoiceStatus.CANCELLED:
        raise ValueError("Cannot record a payment on a cancelled invoice")

    amount = round_money(payload.amount)
    if amount <= 0:
        raise ValueError("Payment amount must be greater than 0")
    if amount > invoice.balance_amount:
        raise ValueError("Payment amount cannot exceed balance amount")

    payment = InvoicePayment(
        payment_date=payload.payment_date,
        amount=amount,
        payment_method=payload.payment_method,
        reference_number=payload.reference_number,
        notes=payload.notes,
        created_by=created_by,
    )
    invoice.payments.append(payment)
    invoice.paid_amount = round_money(invoice.paid_amount + amount)
    _apply_settlement(invoice)
    await session.commit()
    await session.refresh(payment)

    logger.info(
        "Recorded %s payment of %s on invoice %s (balance %s)",
        payment.payment_method.value,
        amount,
        invoice.invoice_number,
        invoice.balance_amount,
    )
    return payment, invoice


async def update_payment(
    session: AsyncSession,
    *,
    invoice_id: uuid.UUID,
    payment_id: uuid.UUID,
    payload: PaymentCreate,
) -> tuple[InvoicePayment, Invoice]:
    """Edit a recorded payment and re-derive the invoice settlement."""

    invoice = await get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise ValueError("Invoice not found")
    payment = _find_payment(invoice, payment_id)

    amount = round_money(payload.amount)
    if amount <= 0:
        raise ValueError("Payment amount must be greater than 0")
    others = sum(
        (other.amount for other in invoice.payments if other.id != payment.id),
        Decimal("0"),
    )
    if others + amount > invoice.total_amount:
        raise ValueError("Payment amount cannot exceed balance amount")

    payment.payment_date = payload.payment_date
    payment.amount = amount
    payment.payment_method = payload.payment_method
    payment.reference_number = payload.reference_number
    payment.notes = payload.notes
    invoice.paid_amount = round_money(others + amount)
    _apply_settlement(invoice)
    await session.commit()
    await session.refresh(payment)

    logger.info(
        "Updated payment %s on invoice %s (balance %s)",
        payment.id,
        invoice.invoice_number,
        invoice.balance_amount,
    )
    return payment, invoice


async def delete_payment(
    session: AsyncSession, *, invoice_id: uuid.UUID, payment_id: uuid.UUID
) -> Invoice:
    invoice = await get_invoice(session, invoice_id=invoice_id)
    if invoice is None:
        raise ValueError("Invoice not found")
    payment = _find_payment(invoice, payment_id)

    invoice.payments.remove(payment)
    invoice.paid_amount = round_money(
        sum((other.amount for other in invoice.payments), Decimal("0"))
    )
    _apply_settlement(invoice)
    await session.commit()

    logger.info(
        "Deleted payment %s from invoice %s (balance %s)",
        payment_id,
        invoice.invoice_number,
        invoice.balance_amount,
    )
    return invoice


def _find_payment(invoice: Invoice, payment_id: uuid.UUID) -> InvoicePayment:
    for payment in invoice.payments:
        if payment.id == payment_id:
            return payment
    raise ValueError("Payment not found")


def _apply_settlement(invoice: Invoice) -> None:
    invoice.balance_amount = calculate_payment_balance(
        invoice.total_amount, invoice.paid_amount
    )
    invoice.payment_status = resolve_payment_status(
        invoice.total_amount, invoice.paid_amount
    )
    if invoice.payment_status is PaymentStatus.PAID:
        invoice.status = InvoiceStatus.PAID
    elif invoice.status is InvoiceStatus.PAID:
        invoice.status = InvoiceStatus.SENT


async def _number_taken(session: AsyncSession, invoice_number: str) -> bool:
    existing = await session.scalar(
        select(Invoice.id).where(Invoice.invoice_number == invoice_number)
    )
    return existing is not None
