"""Custom invoice item types."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.models import CustomItemType
from frontdesk.schemas.item_type import ItemTypeCreate, ItemTypeUpdate

logger = logging.getLogger(__name__)


async def list_item_types(
    session: AsyncSession, *, include_inactive: bool = False
) -> list[CustomItemType]:
    """Return item types ordered by ``sort_order`` then name."""

    stmt = select(CustomItemType)
    if not include_inactive:
        stmt = stmt.where(CustomItemType.is_active.is_(True))
    stmt = stmt.order_by(CustomItemType.sort_order, CustomItemType.name)
    result = await session.execute(stmt)
    return list(result.scalars().all())


async def create_item_type(
    session: AsyncSession, payload: ItemTypeCreate
) -> CustomItemType:
    item_type = CustomItemType(**payload.model_dump())
    session.add(item_type)
    await session.commit()
    await session.refresh(item_type)
    logger.info("Created item type %s (%s)", item_type.name, item_type.id)
    return item_type


async def update_item_type(
    session: AsyncSession, *, item_type_id: uuid.UUID, payload: ItemTypeUpdate
) -> CustomItemType:
    """Apply a partial update to an item type."""

    item_type = await session.get(CustomItemType, item_type_id)
    if item_type is None:
        raise ValueError("Item type not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        setattr(item_type, field, value)

    await session.commit()
    await session.refresh(item_type)
    return item_type


async def deactivate_item_type(
    session: AsyncSession, *, item_type_id: uuid.UUID
) -> None:
    """Hide an item type from the default listing; existing lines keep it."""

    item_type = await session.get(CustomItemType, item_type_id)
    if item_type is None:
        raise ValueError("Item type not found")
    item_type.is_active = False
    await session.commit()
    logger.info("Deactivated item type %s (%s)", item_type.name, item_type_id)
