"""Flat-rate GST helpers for room charges."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Final

from frontdesk.services.currency import format_currency
from frontdesk.services.invoice_calculations import round_money, to_decimal

HOTEL_GST_RATE: Final = Decimal("0.12")


@dataclass(slots=True, frozen=True)
class GSTCalculation:
    """Base, GST, and total amounts for a single charge."""

    base_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal
    gst_rate: Decimal


@dataclass(slots=True, frozen=True)
class BookingAmount:
    """GST calculation for a stay along with its per-night inputs."""

    base_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal
    gst_rate: Decimal
    total_nights: int
    per_night_rate: Decimal


def calculate_gst(
    amount: Any,
    is_inclusive: bool = True,
    rate: Decimal = HOTEL_GST_RATE,
) -> GSTCalculation:
    """Split out (inclusive) or add on (exclusive) GST at ``rate``.

    ``rate`` is a fraction, so 12% is ``Decimal("0.12")``.
    """

    amount = to_decimal(amount)
    if amount <= 0:
        raise ValueError("Amount must be greater than zero")

    if is_inclusive:
        gst_amount = amount * rate / (1 + rate)
        return GSTCalculation(
            base_amount=round_money(amount - gst_amount),
            gst_amount=round_money(gst_amount),
            total_amount=amount,
            gst_rate=rate,
        )

    gst_amount = amount * rate
    return GSTCalculation(
        base_amount=round_money(amount),
        gst_amount=round_money(gst_amount),
        total_amount=round_money(amount + gst_amount),
        gst_rate=rate,
    )


def calculate_booking_amount(
    room_rate: Any,
    nights: int,
    is_gst_inclusive: bool = True,
    rate: Decimal = HOTEL_GST_RATE,
) -> BookingAmount:
    """GST breakdown for ``nights`` at ``room_rate`` per night."""

    if nights <= 0:
        raise ValueError("Number of nights must be greater than zero")

    per_night = to_decimal(room_rate)
    calculation = calculate_gst(per_night * nights, is_gst_inclusive, rate)
    return BookingAmount(
        base_amount=calculation.base_amount,
        gst_amount=calculation.gst_amount,
        total_amount=calculation.total_amount,
        gst_rate=calculation.gst_rate,
        total_nights=nights,
        per_night_rate=per_night,
    )


def generate_gst_breakdown(calculation: GSTCalculation | BookingAmount) -> str:
    """Three-line text summary suitable for a receipt footer."""

    percent = (calculation.gst_rate * 100).quantize(Decimal("1"))
    return "\n".join(
        [
            f"Room Charges: {format_currency(calculation.base_amount)}",
            f"GST ({percent}%): {format_currency(calculation.gst_amount)}",
            f"Total Amount: {format_currency(calculation.total_amount)}",
        ]
    )
