# rentnest/schemas/dashboard.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class PropertySummary(BaseModel):
    id: int
    title: str
    location: str


class NextBooking(BaseModel):
    id: int
    property: Optional[PropertySummary] = None
    start_date: date
    end_date: date


class Activity(BaseModel):
    id: int
    type: str
    status: str
    property: Optional[PropertySummary] = None
    created_at: datetime


class RenterDashboard(BaseModel):
    total_bookings: int
    active_bookings: int
    past_bookings: int
    next_booking: Optional[NextBooking] = None
    recent_activity: List[Activity]
