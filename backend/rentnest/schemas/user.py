# backend/rentnest/schemas/user.py
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    id: int
    name: str
    email: EmailStr
    phone: Optional[str] = None
    role: str

    # Pydantic v2 style (replaces orm_mode = True)
    model_config = {"from_attributes": True}


class UserCreate(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    phone: Optional[str] = None
    role: Literal["owner", "renter"] = "renter"


class UserLogin(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)


class UserOut(UserBase):
    pass


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    phone: Optional[str] = None
