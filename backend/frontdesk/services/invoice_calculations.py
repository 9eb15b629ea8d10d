"""Invoice arithmetic: line totals, invoice totals, GST breakdown, validation.

Everything in this module is a pure function over its arguments. Money values
are ``Decimal`` and every rounded figure uses ``ROUND_HALF_UP`` to two places,
applied once per line and once more on the aggregated sums.

The calculator never rejects input: malformed or non-finite numbers flow
through as ``NaN``/``Infinity`` results. Range checks live in
:func:`validate_line_item` / :func:`validate_invoice`, which report problems
as plain strings so a live preview can keep computing while a form is only
partially filled in.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    Overflow,
    ROUND_HALF_UP,
    localcontext,
)
from typing import Any, Callable, Final, Iterable, Protocol, TypeVar

from frontdesk.models.invoice import BuffetType, ItemType, PaymentStatus

MONEY_PLACES: Final = Decimal("0.01")
ZERO: Final = Decimal("0")
HUNDRED: Final = Decimal("100")

# Invalid operations (NaN operands, Infinity - Infinity) quietly yield NaN.
_ARITHMETIC: Final = Context(traps=[DivisionByZero, Overflow])

_T = TypeVar("_T")


class LineItemLike(Protocol):
    """Anything carrying the numeric inputs of a billable line."""

    quantity: Any
    unit_price: Any
    tax_rate: Any
    tax_inclusive: Any
    discount_rate: Any


@dataclass(slots=True, frozen=True)
class LineItem:
    """Plain line item input; metadata fields are ignored by the arithmetic."""

    quantity: Decimal | int | float | str | None = ZERO
    unit_price: Decimal | int | float | str | None = ZERO
    tax_rate: Decimal | int | float | str | None = ZERO
    tax_inclusive: bool = False
    discount_rate: Decimal | int | float | str | None = ZERO
    description: str = ""
    item_type: ItemType = ItemType.OTHER
    item_date: date | None = None
    sort_order: int = 0
    is_buffet_item: bool = False
    buffet_type: BuffetType | None = None
    persons_count: int = 1
    price_per_person: Decimal | None = None


@dataclass(slots=True, frozen=True)
class LineItemCalculation:
    """Computed amounts for one line, rounded to two places."""

    line_total: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal


@dataclass(slots=True, frozen=True)
class InvoiceCalculation:
    """Invoice totals plus the per-line calculations in input order."""

    subtotal: Decimal
    total_tax: Decimal
    total_discount: Decimal
    total_amount: Decimal
    line_items: tuple[LineItemCalculation, ...] = field(default_factory=tuple)


@dataclass(slots=True, frozen=True)
class GSTBucket:
    """Taxable and tax amounts accumulated for a single GST rate."""

    taxable_amount: Decimal
    tax_amount: Decimal


def _lenient(func: Callable[..., _T]) -> Callable[..., _T]:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> _T:
        with localcontext(_ARITHMETIC):
            return func(*args, **kwargs)

    return wrapper


def to_decimal(value: Any) -> Decimal:
    """Coerce a form or ORM value to ``Decimal``.

    ``None`` counts as zero and unparseable text becomes ``NaN``.
    """

    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return _ARITHMETIC.create_decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Round to two places, halves away from zero; non-finite values pass through."""

    if not value.is_finite():
        return value
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)


@_lenient
def calculate_line_item(item: LineItemLike) -> LineItemCalculation:
    """Calculate tax, discount and totals for one line item."""

    quantity = to_decimal(item.quantity)
    unit_price = to_decimal(item.unit_price)
    tax_rate = to_decimal(item.tax_rate)
    discount_rate = to_decimal(item.discount_rate)
    tax_inclusive = bool(item.tax_inclusive)

    base_amount = quantity * unit_price
    tax_amount = ZERO
    discount_amount = ZERO

    # Discount always applies to the pre-tax base amount.
    if discount_rate > 0 or discount_rate.is_nan():
        discount_amount = base_amount * discount_rate / HUNDRED

    if tax_rate > 0 or tax_rate.is_nan():
        if tax_inclusive:
            tax_amount = base_amount * tax_rate / (HUNDRED + tax_rate)
            # NOTE: tax-inclusive lines report the discount without subtracting it.
            line_total = base_amount
        else:
            taxable_amount = base_amount - discount_amount
            tax_amount = taxable_amount * tax_rate / HUNDRED
            line_total = base_amount + tax_amount - discount_amount
    else:
        line_total = base_amount - discount_amount

    final_amount = line_total

    return LineItemCalculation(
        line_total=round_money(line_total),
        tax_amount=round_money(tax_amount),
        discount_amount=round_money(discount_amount),
        final_amount=round_money(final_amount),
    )


@_lenient
def calculate_invoice_total(line_items: Iterable[LineItemLike]) -> InvoiceCalculation:
    """Sum per-line calculations into invoice totals."""

    calculations = tuple(calculate_line_item(item) for item in line_items)

    subtotal = sum((calc.line_total for calc in calculations), ZERO)
    total_tax = sum((calc.tax_amount for calc in calculations), ZERO)
    total_discount = sum((calc.discount_amount for calc in calculations), ZERO)
    total_amount = sum((calc.final_amount for calc in calculations), ZERO)

    return InvoiceCalculation(
        subtotal=round_money(subtotal),
        total_tax=round_money(total_tax),
        total_discount=round_money(total_discount),
        total_amount=round_money(total_amount),
        line_items=calculations,
    )


@_lenient
def calculate_gst_breakdown(
    line_items: Iterable[LineItemLike],
) -> dict[Decimal, GSTBucket]:
    """Group taxable and tax amounts by exact GST rate.

    Lines at a zero rate are left out entirely. Buckets appear in the order
    their rate is first seen.
    """

    taxable: dict[Decimal, Decimal] = {}
    taxes: dict[Decimal, Decimal] = {}

    for item in line_items:
        tax_rate = to_decimal(item.tax_rate)
        if not tax_rate > 0:
            continue

        calculation = calculate_line_item(item)
        base_amount = to_decimal(item.quantity) * to_decimal(item.unit_price)
        if item.tax_inclusive:
            taxable_amount = (
                base_amount - calculation.tax_amount - calculation.discount_amount
            )
        else:
            taxable_amount = base_amount - calculation.discount_amount

        taxable[tax_rate] = taxable.get(tax_rate, ZERO) + taxable_amount
        taxes[tax_rate] = taxes.get(tax_rate, ZERO) + calculation.tax_amount

    return {
        rate: GSTBucket(
            taxable_amount=round_money(taxable[rate]),
            tax_amount=round_money(taxes[rate]),
        )
        for rate in taxable
    }


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def validate_line_item(item: Any) -> list[str]:
    """Return human-readable problems with a line item (empty when valid).

    ``NaN`` and infinite numbers fail the check for their field.
    """

    errors: list[str] = []

    if _is_blank(getattr(item, "description", None)):
        errors.append("Description is required")

    quantity = to_decimal(getattr(item, "quantity", None))
    if not quantity.is_finite() or quantity <= 0:
        errors.append("Quantity must be greater than 0")

    unit_price = to_decimal(getattr(item, "unit_price", None))
    if not unit_price.is_finite() or unit_price < 0:
        errors.append("Unit price cannot be negative")

    tax_rate = to_decimal(getattr(item, "tax_rate", None))
    if not tax_rate.is_finite() or not ZERO <= tax_rate <= HUNDRED:
        errors.append("Tax rate must be between 0 and 100")

    discount_rate = to_decimal(getattr(item, "discount_rate", None))
    if not discount_rate.is_finite() or not ZERO <= discount_rate <= HUNDRED:
        errors.append("Discount rate must be between 0 and 100")

    return errors


def validate_invoice(invoice: Any) -> list[str]:
    """Run required-field checks and per-line validation for an invoice."""

    errors: list[str] = []

    if _is_blank(getattr(invoice, "customer_name", None)):
        errors.append("Customer name is required")

    if not getattr(invoice, "invoice_date", None):
        errors.append("Invoice date is required")

    line_items = getattr(invoice, "line_items", None) or []
    if not line_items:
        errors.append("At least one line item is required")

    for index, item in enumerate(line_items, start=1):
        errors.extend(
            f"Line item {index}: {message}" for message in validate_line_item(item)
        )

    return errors


def generate_invoice_number(
    last_invoice_number: str | None = None,
    *,
    prefix: str = "INV",
    year: int | None = None,
) -> str:
    """Return the next ``{prefix}-{year}-NNNN`` number after ``last_invoice_number``.

    The sequence restarts at 0001 for a new year, a different prefix, or a
    previous number whose suffix is not numeric.
    """

    year = year if year is not None else date.today().year
    series = f"{prefix}-{year}-"

    if not last_invoice_number or not last_invoice_number.startswith(series):
        return f"{series}0001"

    suffix = last_invoice_number[len(series):]
    if not suffix.isdigit():
        return f"{series}0001"

    return f"{series}{int(suffix) + 1:04d}"


def calculate_due_date(invoice_date: date | str, payment_terms: int = 30) -> date:
    """Due date ``payment_terms`` days after the invoice date."""

    if isinstance(invoice_date, str):
        invoice_date = date.fromisoformat(invoice_date)
    return invoice_date + timedelta(days=payment_terms)


def is_invoice_overdue(
    due_date: date | None,
    payment_status: PaymentStatus | str,
    today: date | None = None,
) -> bool:
    """True when an unpaid invoice is past its due date."""

    if PaymentStatus(payment_status) is PaymentStatus.PAID or due_date is None:
        return False
    return due_date < (today or date.today())


def calculate_payment_balance(total_amount: Any, paid_amount: Any) -> Decimal:
    """Outstanding amount, rounded to two places."""

    return round_money(to_decimal(total_amount) - to_decimal(paid_amount))


def resolve_payment_status(total_amount: Any, paid_amount: Any) -> PaymentStatus:
    """Derive the settlement state of an invoice from what has been paid."""

    paid = to_decimal(paid_amount)
    if paid <= 0:
        return PaymentStatus.PENDING
    if calculate_payment_balance(total_amount, paid) <= 0:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIAL
