# rentnest/api/dependencies.py
import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.core.actor import Actor, OWNER
from rentnest.core.security import decode_access_token
from rentnest.db import crud_users
from rentnest.db.models import User
from rentnest.db.session import get_db

logger = logging.getLogger("uvicorn.error")
security = HTTPBearer(auto_error=False)


async def _user_from_credentials(
    db: AsyncSession, credentials: HTTPAuthorizationCredentials
) -> User:
    try:
        uid = decode_access_token(credentials.credentials)
    except JWTError as exc:
        logger.warning("rejected bearer token: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token"
        )

    user = await crud_users.get_user(db, uid)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found"
        )
    return user


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated"
        )
    return await _user_from_credentials(db, credentials)


async def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    return Actor(id=user.id, role=user.role)


async def get_optional_actor(
    db: AsyncSession = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[Actor]:
    """
    Anonymous access allowed: no header means no actor. A bad token is
    still rejected.
    """
    if credentials is None:
        return None
    user = await _user_from_credentials(db, credentials)
    return Actor(id=user.id, role=user.role)


def require_role(role: str):
    async def dep(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role != role:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions"
            )
        return actor

    return dep


require_owner = require_role(OWNER)
