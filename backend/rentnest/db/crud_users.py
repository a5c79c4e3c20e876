# rentnest/db/crud_users.py

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.db.models import User
from rentnest.core.security import get_password_hash


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    res = await db.execute(select(User).where(User.id == user_id))
    return res.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> Optional[User]:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def create_user(
    db: AsyncSession,
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    role: str = "renter",
) -> User:
    """
    Create a user with hashed password.
    """
    hashed = get_password_hash(password)
    user = User(
        name=name,
        email=email,
        phone=phone,
        hashed_password=hashed,
        role=role,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def update_profile(db: AsyncSession, user: User, data: dict) -> User:
    for k in ("name", "phone"):
        if k in data and data[k] is not None:
            setattr(user, k, data[k])
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user
