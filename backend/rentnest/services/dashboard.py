# rentnest/services/dashboard.py
from datetime import date
from typing import Any, Dict, List, Optional

from rentnest.db.models import Booking, BookingStatus

RECENT_ACTIVITY_LIMIT = 5


def _property_summary(booking: Booking) -> Optional[Dict[str, Any]]:
    prop = booking.property
    if prop is None:
        return None
    return {"id": prop.id, "title": prop.title, "location": prop.location}


def build_renter_dashboard(bookings: List[Booking], today: Optional[date] = None) -> Dict[str, Any]:
    """
    Summarize a renter's bookings. `bookings` must be newest first with
    their property loaded.
    """
    today = today or date.today()

    active = [b for b in bookings if b.start_date <= today <= b.end_date]
    past = [b for b in bookings if b.end_date < today]
    upcoming = sorted(
        (b for b in bookings if b.start_date > today),
        key=lambda b: b.start_date,
    )

    next_booking = None
    if upcoming:
        nb = upcoming[0]
        next_booking = {
            "id": nb.id,
            "property": _property_summary(nb),
            "start_date": nb.start_date,
            "end_date": nb.end_date,
        }

    recent_activity = [
        {
            "id": b.id,
            "type": (
                "booking_cancelled"
                if b.status == BookingStatus.CANCELLED.value
                else "booking_updated"
            ),
            "status": b.status,
            "property": _property_summary(b),
            "created_at": b.created_at,
        }
        for b in bookings[:RECENT_ACTIVITY_LIMIT]
    ]

    return {
        "total_bookings": len(bookings),
        "active_bookings": len(active),
        "past_bookings": len(past),
        "next_booking": next_booking,
        "recent_activity": recent_activity,
    }
