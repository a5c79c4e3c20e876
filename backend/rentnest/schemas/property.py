# backend/rentnest/schemas/property.py
from datetime import date
from typing import Optional, List

from pydantic import BaseModel, Field

from rentnest.schemas.booking import ActiveBookingSummary


class PropertyBase(BaseModel):
    id: int
    owner_id: int
    title: str
    description: str
    price: float
    location: str
    type: str
    bedrooms: int
    bathrooms: int
    size: Optional[int] = None
    furnished: bool
    pet_friendly: bool
    availability_date: Optional[date] = None
    amenities: List[str]
    images: List[str]
    is_available: bool

    class Config:
        from_attributes = True


class PropertyView(PropertyBase):
    """
    Property as shown to a particular viewer: projected status plus the
    active booking, which only the owner and the booker get to see.
    """
    status: str
    active_booking: Optional[ActiveBookingSummary] = None


class PropertyCreate(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    location: str = Field(min_length=1, max_length=255)
    type: str = Field(min_length=1, max_length=50)
    bedrooms: int = Field(default=0, ge=0)
    bathrooms: int = Field(default=0, ge=0)
    size: Optional[int] = Field(default=None, ge=0)
    furnished: bool = False
    pet_friendly: bool = False
    availability_date: Optional[date] = None
    amenities: List[str] = []
    images: List[str] = []


class PropertyUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    location: Optional[str] = None
    type: Optional[str] = None
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[int] = Field(default=None, ge=0)
    size: Optional[int] = Field(default=None, ge=0)
    furnished: Optional[bool] = None
    pet_friendly: Optional[bool] = None
    availability_date: Optional[date] = None
    amenities: Optional[List[str]] = None
    images: Optional[List[str]] = None


class PropertiesPage(BaseModel):
    items: list[PropertyView]
    total: int
    page: int
    per_page: int
    total_pages: int
