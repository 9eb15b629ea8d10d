"""Tests for the flat hotel GST helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from frontdesk.services.gst_service import (
    calculate_booking_amount,
    calculate_gst,
    generate_gst_breakdown,
)


def test_inclusive_amount_is_split() -> None:
    result = calculate_gst(1120)
    assert result.base_amount == Decimal("1000.00")
    assert result.gst_amount == Decimal("120.00")
    assert result.total_amount == Decimal("1120")
    assert result.gst_rate == Decimal("0.12")


def test_exclusive_amount_adds_gst() -> None:
    result = calculate_gst(1000, is_inclusive=False)
    assert result.base_amount == Decimal("1000.00")
    assert result.gst_amount == Decimal("120.00")
    assert result.total_amount == Decimal("1120.00")


def test_custom_rate() -> None:
    result = calculate_gst(1000, is_inclusive=False, rate=Decimal("0.18"))
    assert result.gst_amount == Decimal("180.00")


@pytest.mark.parametrize("amount", [0, -10])
def test_non_positive_amount_is_rejected(amount) -> None:
    with pytest.raises(ValueError, match="Amount must be greater than zero"):
        calculate_gst(amount)


def test_booking_amount_and_breakdown() -> None:
    booking = calculate_booking_amount(2800, 3)
    assert booking.total_nights == 3
    assert booking.per_night_rate == Decimal("2800")
    assert booking.base_amount == Decimal("7500.00")
    assert booking.gst_amount == Decimal("900.00")
    assert generate_gst_breakdown(booking) == (
        "Room Charges: ₹7,500.00\nGST (12%): ₹900.00\nTotal Amount: ₹8,400.00"
    )


def test_booking_requires_nights() -> None:
    with pytest.raises(ValueError, match="Number of nights must be greater than zero"):
        calculate_booking_amount(2800, 0)
