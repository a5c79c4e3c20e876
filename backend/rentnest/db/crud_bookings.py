# rentnest/db/crud_bookings.py

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from rentnest.db.models import Booking, BookingStatus, Property


async def get_booking(db: AsyncSession, booking_id: int) -> Optional[Booking]:
    res = await db.execute(select(Booking).where(Booking.id == booking_id))
    return res.scalar_one_or_none()


async def create_booking(
    db: AsyncSession,
    *,
    user_id: int,
    property_id: int,
    start_date: date,
    end_date: date,
    message: Optional[str] = None,
) -> Booking:
    booking = Booking(
        user_id=user_id,
        property_id=property_id,
        start_date=start_date,
        end_date=end_date,
        message=message,
        status=BookingStatus.PENDING.value,
    )
    db.add(booking)
    await db.commit()
    await db.refresh(booking)
    return booking


async def reject_competing(db: AsyncSession, property_id: int, keep_booking_id: int) -> int:
    """
    Mark every other pending booking on the property as rejected.
    Does not commit. Returns the number of rejected bookings.
    """
    stmt = (
        update(Booking)
        .where(
            Booking.property_id == property_id,
            Booking.id != keep_booking_id,
            Booking.status == BookingStatus.PENDING.value,
        )
        .values(status=BookingStatus.REJECTED.value)
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    return res.rowcount


async def list_bookings_for_user(db: AsyncSession, user_id: int) -> List[Booking]:
    stmt = (
        select(Booking)
        .options(selectinload(Booking.property))
        .where(Booking.user_id == user_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def list_bookings_for_owner(db: AsyncSession, owner_id: int) -> List[Booking]:
    """
    All bookings for properties owned by owner_id
    """
    stmt = (
        select(Booking)
        .join(Property, Booking.property_id == Property.id)
        .options(selectinload(Booking.property), selectinload(Booking.user))
        .where(Property.owner_id == owner_id)
        .order_by(Booking.created_at.desc(), Booking.id.desc())
    )
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def get_bookings_by_ids(db: AsyncSession, booking_ids: Iterable[int]) -> dict:
    """
    Map of id -> Booking for the given ids; missing ids are simply absent.
    """
    ids = [i for i in booking_ids if i is not None]
    if not ids:
        return {}
    res = await db.execute(select(Booking).where(Booking.id.in_(ids)))
    return {b.id: b for b in res.scalars().all()}
