from __future__ import annotations
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from ..models.users import User

async def get_or_create_user(session: AsyncSession, user_id: str, email: Optional[str] = None) -> User:
    user = await session.get(User, user_id)
    if user:
        return user
    user = User(id=user_id, email=email)
    session.add(user)
    await session.flush()
    return user
