# backend/rentnest/schemas/booking.py
from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, Field, model_validator

from rentnest.db.models import BookingStatus


class BookingCreate(BaseModel):
    # the web client sends "property", "startDate" and "endDate"
    property_id: int = Field(validation_alias=AliasChoices("property_id", "property"))
    start_date: date = Field(validation_alias=AliasChoices("start_date", "startDate"))
    end_date: date = Field(validation_alias=AliasChoices("end_date", "endDate"))
    message: Optional[str] = Field(default=None, max_length=2000)

    @model_validator(mode="after")
    def check_dates(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class RenterInfo(BaseModel):
    id: int
    name: str

    model_config = {"from_attributes": True}


class BookingOut(BaseModel):
    id: int
    property_id: int
    user_id: int
    start_date: date
    end_date: date
    status: BookingStatus
    message: Optional[str] = None
    created_at: datetime

    # Pydantic v2 style – replaces orm_mode=True
    model_config = {"from_attributes": True}


class OwnerBookingOut(BookingOut):
    user: RenterInfo


class ActiveBookingSummary(BaseModel):
    id: int
    user_id: int
    start_date: date
    end_date: date
    status: BookingStatus

    model_config = {"from_attributes": True}
