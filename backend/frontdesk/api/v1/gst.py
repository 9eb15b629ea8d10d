"""Flat hotel GST quotes."""

from __future__ import annotations

from decimal import Decimal

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel

from frontdesk.services import gst_service

router = APIRouter(prefix="/gst")


class BookingGSTRead(BaseModel):
    base_amount: Decimal
    gst_amount: Decimal
    total_amount: Decimal
    gst_rate: Decimal
    total_nights: int
    per_night_rate: Decimal
    breakdown: str


@router.get("/booking", response_model=BookingGSTRead, summary="GST for a room booking")
async def booking_gst(
    room_rate: Decimal = Query(...),
    nights: int = Query(...),
    gst_inclusive: bool = Query(default=True),
) -> BookingGSTRead:
    try:
        booking = gst_service.calculate_booking_amount(room_rate, nights, gst_inclusive)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return BookingGSTRead(
        base_amount=booking.base_amount,
        gst_amount=booking.gst_amount,
        total_amount=booking.total_amount,
        gst_rate=booking.gst_rate,
        total_nights=booking.total_nights,
        per_night_rate=booking.per_night_rate,
        breakdown=gst_service.generate_gst_breakdown(booking),
    )
