# rentnest/services/bookings.py
"""
Booking lifecycle: creation, status transitions and availability reset.

This module is the only writer of Property.is_available, booked_by_id and
active_booking_id. Every function takes the acting user explicitly and
commits (or rolls back) its own unit of work.
"""
import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.core.actor import Actor
from rentnest.core.errors import (
    BookingError,
    Forbidden,
    NotFound,
    StorageError,
    TooEarly,
    Unavailable,
)
from rentnest.db import crud_bookings, crud_properties
from rentnest.db.models import Booking, BookingStatus, FINISHED_STATUSES, Property
from rentnest.services.availability import has_ended

logger = logging.getLogger(__name__)

# Moving the active booking to one of these frees the property immediately.
# "completed" is left out: the property waits for an explicit reset.
_RELEASING_STATUSES = (
    BookingStatus.CANCELLED.value,
    BookingStatus.REJECTED.value,
    BookingStatus.PENDING.value,
)

# Statuses an active booking may hold while the property is unavailable
_HOLDING_STATUSES = (
    BookingStatus.ACCEPTED.value,
    BookingStatus.COMPLETED.value,
)


async def create_booking(
    db: AsyncSession,
    actor: Actor,
    *,
    property_id: int,
    start_date: date,
    end_date: date,
    message: Optional[str] = None,
) -> Booking:
    """
    Request a booking. The property is not touched; any number of pending
    requests may coexist, including ones with overlapping dates.
    """
    try:
        prop = await crud_properties.get_property(db, property_id)
        if prop is None:
            raise NotFound("Property not found")
        if not prop.is_available:
            raise Unavailable("Property is not available for booking")

        booking = await crud_bookings.create_booking(
            db,
            user_id=actor.id,
            property_id=property_id,
            start_date=start_date,
            end_date=end_date,
            message=message,
        )
    except BookingError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("creating booking on property %s failed", property_id)
        raise StorageError() from exc

    logger.info(
        "booking %s requested by user %s on property %s",
        booking.id,
        actor.id,
        property_id,
    )
    return booking


async def update_booking_status(
    db: AsyncSession,
    actor: Actor,
    booking_id: int,
    status: str,
) -> Booking:
    """
    Owner-driven status change.

    No transition table is enforced. Side effects:
      accepted  -> property claimed for this booking and every other pending
                   booking on it rejected, in one transaction. Fails with
                   Unavailable if another booking already holds the property.
      cancelled / rejected / pending -> property freed if this booking held it.
                   The previous backend freed only on cancelled.
      completed -> nothing; the owner frees the property with a reset.
    """
    status = BookingStatus(status).value

    try:
        booking = await crud_bookings.get_booking(db, booking_id)
        if booking is None:
            raise NotFound("Booking not found")

        prop = await crud_properties.get_property(db, booking.property_id)
        if prop is None:
            raise NotFound("Property not found")

        if not actor.is_owner or prop.owner_id != actor.id:
            raise Forbidden("Only the property owner can update this booking")

        previous = booking.status
        rejected = 0

        if status == BookingStatus.ACCEPTED.value:
            claimed = await crud_properties.claim_for_booking(db, prop.id, booking)
            if not claimed:
                logger.warning(
                    "accept of booking %s lost: property %s already held",
                    booking.id,
                    prop.id,
                )
                raise Unavailable("Property already has an accepted booking")
            rejected = await crud_bookings.reject_competing(db, prop.id, booking.id)
        elif status in _RELEASING_STATUSES:
            await crud_properties.release_booking(db, prop.id, booking.id)

        booking.status = status
        await db.commit()

        # bulk updates above bypass the identity map
        await db.refresh(booking)
        await db.refresh(prop)
    except BookingError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("updating booking %s to %s failed", booking_id, status)
        raise StorageError() from exc

    logger.info(
        "booking %s: %s -> %s by owner %s (%d competing rejected)",
        booking.id,
        previous,
        status,
        actor.id,
        rejected,
    )
    return booking


async def reset_availability(
    db: AsyncSession,
    actor: Actor,
    property_id: int,
    *,
    today: Optional[date] = None,
) -> Property:
    """
    Free a property once its active booking has ended.

    A missing or dangling active booking counts as already free, so calling
    this twice is harmless. The ended booking is marked completed unless it
    already reached a final status.
    """
    today = today or date.today()

    try:
        if not actor.is_owner:
            raise Forbidden("Only owners can reset availability")

        prop = await crud_properties.get_owned_property(db, property_id, actor.id)
        if prop is None:
            raise NotFound("Property not found")

        booking = None
        if prop.active_booking_id is not None:
            booking = await crud_bookings.get_booking(db, prop.active_booking_id)

        for problem in find_inconsistencies(prop, booking):
            logger.warning("property %s: %s", prop.id, problem)

        if booking is not None:
            if not has_ended(booking, today):
                logger.warning(
                    "reset of property %s refused: booking %s ends %s",
                    prop.id,
                    booking.id,
                    booking.end_date,
                )
                raise TooEarly(
                    f"Booking {booking.id} ends on {booking.end_date.isoformat()}"
                )
            if booking.status not in FINISHED_STATUSES:
                booking.status = BookingStatus.COMPLETED.value

        crud_properties.mark_free(prop)
        await db.commit()
        await db.refresh(prop)
    except BookingError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.exception("resetting availability of property %s failed", property_id)
        raise StorageError() from exc

    logger.info("property %s reset to available by owner %s", prop.id, actor.id)
    return prop


def find_inconsistencies(prop: Property, active_booking: Optional[Booking]) -> List[str]:
    """
    Check the property's denormalized booking pointer against the booking.
    Returns a list of problems, empty when the pair is consistent.
    """
    problems = []

    if prop.active_booking_id is None:
        if not prop.is_available:
            problems.append("unavailable without an active booking")
        if prop.booked_by_id is not None:
            problems.append("booked_by set without an active booking")
        return problems

    if prop.is_available:
        problems.append(f"available while pointing at booking {prop.active_booking_id}")

    if active_booking is None:
        problems.append(f"active booking {prop.active_booking_id} does not exist")
        return problems

    if active_booking.property_id != prop.id:
        problems.append(
            f"active booking {active_booking.id} belongs to property {active_booking.property_id}"
        )
    if active_booking.status not in _HOLDING_STATUSES:
        problems.append(
            f"active booking {active_booking.id} is {active_booking.status}"
        )
    if prop.booked_by_id != active_booking.user_id:
        problems.append(
            f"booked_by {prop.booked_by_id} does not match renter {active_booking.user_id}"
        )
    return problems
