# rentnest/api/routers/auth.py
from typing import Dict, Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.db.session import get_db
from rentnest.db import crud_users
from rentnest.schemas.auth import Token
from rentnest.schemas.user import UserCreate, UserLogin, UserOut
from rentnest.core.actor import Actor
from rentnest.core.security import create_access_token, verify_password

router = APIRouter()


def _token_response(user) -> Dict[str, Any]:
    """
    Return a simple dict matching the Token pydantic model:
    { access_token, token_type, user }
    """
    access = create_access_token(Actor(id=user.id, role=user.role))
    return {
        "access_token": access,
        "token_type": "bearer",
        "user": UserOut.model_validate(user),
    }


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(payload: UserCreate, db: AsyncSession = Depends(get_db)):
    existing = await crud_users.get_user_by_email(db, payload.email)
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email exists")

    user = await crud_users.create_user(
        db=db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        role=payload.role,
    )
    return _token_response(user)


@router.post("/login", response_model=Token)
async def login(payload: UserLogin, db: AsyncSession = Depends(get_db)):
    user = await crud_users.get_user_by_email(db, payload.email)
    if not user or not verify_password(payload.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    return _token_response(user)
