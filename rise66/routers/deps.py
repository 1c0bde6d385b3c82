from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Optional
from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..db import get_db_session
from ..services.profile_services import get_or_create_user


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


async def get_current_user_id(
    x_user_id: Optional[str] = Header(default=None),
    session: AsyncSession = Depends(get_db_session),
) -> str:
    """The auth proxy in front of the API puts the user's subject in X-User-Id."""
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    user = await get_or_create_user(session, x_user_id.strip())
    return user.id
