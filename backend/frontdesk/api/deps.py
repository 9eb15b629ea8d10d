"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from frontdesk.db.session import get_session


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async for session in get_session():
        yield session


async def get_actor_id(
    x_user_id: Annotated[str | None, Header(alias="X-User-ID", max_length=64)] = None,
) -> str | None:
    """Identifier of the front-desk user making the request, if supplied."""
    if x_user_id is None:
        return None
    return x_user_id.strip() or None
