"""Custom invoice item type endpoints."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.api import deps
from frontdesk.schemas.item_type import ItemTypeCreate, ItemTypeRead, ItemTypeUpdate
from frontdesk.services import item_type_service

router = APIRouter(prefix="/invoice/item-types")


@router.get("", response_model=list[ItemTypeRead], summary="List item types")
async def list_item_types(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    include_inactive: bool = Query(default=False),
) -> list[ItemTypeRead]:
    item_types = await item_type_service.list_item_types(
        session, include_inactive=include_inactive
    )
    return [ItemTypeRead.model_validate(item) for item in item_types]


@router.post(
    "",
    response_model=ItemTypeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create item type",
)
async def create_item_type(
    payload: ItemTypeCreate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ItemTypeRead:
    item_type = await item_type_service.create_item_type(session, payload)
    return ItemTypeRead.model_validate(item_type)


@router.put("/{item_type_id}", response_model=ItemTypeRead, summary="Update item type")
async def update_item_type(
    item_type_id: uuid.UUID,
    payload: ItemTypeUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> ItemTypeRead:
    try:
        item_type = await item_type_service.update_item_type(
            session, item_type_id=item_type_id, payload=payload
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return ItemTypeRead.model_validate(item_type)


@router.delete(
    "/{item_type_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Deactivate item type",
)
async def delete_item_type(
    item_type_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> Response:
    try:
        await item_type_service.deactivate_item_type(
            session, item_type_id=item_type_id
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
