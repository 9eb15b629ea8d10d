"""Hotel configuration endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api import deps
from frontdesk.schemas.hotel_config import HotelConfigRead, HotelConfigUpdate
from frontdesk.services import hotel_config_service

router = APIRouter(prefix="/hotel")


@router.get("/config", response_model=HotelConfigRead, summary="Hotel configuration")
async def get_hotel_config(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelConfigRead:
    config = await hotel_config_service.get_config(session)
    return hotel_config_service.to_read(config)


@router.put(
    "/config", response_model=HotelConfigRead, summary="Update hotel configuration"
)
async def update_hotel_config(
    payload: HotelConfigUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> HotelConfigRead:
    config = await hotel_config_service.update_config(session, payload)
    return hotel_config_service.to_read(config)
