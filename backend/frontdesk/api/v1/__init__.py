"""Versioned API router."""

from fastapi import APIRouter

from . import gst, health, hotel, invoices, item_types

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(invoices.router, tags=["invoices"])
router.include_router(hotel.router, tags=["hotel"])
router.include_router(item_types.router, tags=["item-types"])
router.include_router(gst.router, tags=["gst"])

__all__ = ["router"]
