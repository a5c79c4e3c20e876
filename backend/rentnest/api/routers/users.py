# rentnest/api/routers/users.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.api.dependencies import get_current_user
from rentnest.db import crud_users
from rentnest.db.session import get_db
from rentnest.schemas.user import UserOut, UserUpdate

router = APIRouter()


@router.get("/me", response_model=UserOut)
async def me(current_user=Depends(get_current_user)):
    return current_user


@router.put("/me", response_model=UserOut)
async def update_me(
    body: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user=Depends(get_current_user),
):
    """
    Profile edits only; role and email are fixed after registration.
    """
    return await crud_users.update_profile(db, current_user, body.model_dump(exclude_unset=True))
