# rentnest/services/availability.py
"""
Derived, never-persisted availability status for a property.

The result depends on the current date, so it is recomputed on every read.
"""
from datetime import date
from typing import Optional

AVAILABLE = "available"
BOOKED = "booked"
AWAITING_RESET = "awaiting_reset"
UNAVAILABLE = "unavailable"

OWNER_PERSPECTIVE = "owner"
RENTER_PERSPECTIVE = "renter"


def has_ended(booking, today: date) -> bool:
    """
    A booking has ended once its end date is today or earlier.

    Reset uses the same comparison, so "awaiting_reset" shows up exactly
    when a reset would be accepted.
    """
    if booking is None or booking.end_date is None:
        return False
    return booking.end_date <= today


def perspective_for(prop, viewer_id: Optional[int]) -> str:
    if viewer_id is not None and prop.owner_id == viewer_id:
        return OWNER_PERSPECTIVE
    return RENTER_PERSPECTIVE


def project_status(
    prop,
    viewer_id: Optional[int],
    perspective: str,
    active_booking=None,
    today: Optional[date] = None,
) -> str:
    today = today or date.today()

    if prop.is_available:
        return AVAILABLE

    if perspective == OWNER_PERSPECTIVE:
        if has_ended(active_booking, today):
            return AWAITING_RESET
        return BOOKED

    # renters only learn whether the booking is theirs
    if viewer_id is not None and prop.booked_by_id == viewer_id:
        return BOOKED
    return UNAVAILABLE
