# rentnest/db/crud_properties.py
from typing import Tuple, List, Optional

from sqlalchemy import select, func, and_, or_, delete, update
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.db.models import Property, Booking

# Columns the owner may never set through create/update
_AVAILABILITY_FIELDS = ("is_available", "booked_by_id", "active_booking_id", "owner_id")


async def list_properties(
    db: AsyncSession,
    filters: dict = None,
    page: int = 1,
    per_page: int = 12,
) -> Tuple[List[Property], int]:
    """
    Public listing, newest first.
    """
    filters = filters or {}
    stmt = select(Property)

    where_clauses = []

    if filters.get("q"):
        term = f"%{filters['q']}%"
        where_clauses.append(
            or_(
                Property.title.ilike(term),
                Property.description.ilike(term),
                Property.location.ilike(term),
            )
        )
    if filters.get("location"):
        where_clauses.append(Property.location.ilike(f"%{filters['location']}%"))
    if filters.get("min_price") is not None:
        where_clauses.append(Property.price >= float(filters["min_price"]))
    if filters.get("max_price") is not None:
        where_clauses.append(Property.price <= float(filters["max_price"]))
    if filters.get("type"):
        where_clauses.append(Property.type == filters["type"])
    if filters.get("bedrooms_min") is not None:
        where_clauses.append(Property.bedrooms >= filters["bedrooms_min"])
    if filters.get("bathrooms_min") is not None:
        where_clauses.append(Property.bathrooms >= filters["bathrooms_min"])
    if filters.get("furnished") is not None:
        where_clauses.append(Property.furnished == filters["furnished"])
    if filters.get("pet_friendly") is not None:
        where_clauses.append(Property.pet_friendly == filters["pet_friendly"])

    if where_clauses:
        stmt = stmt.where(and_(*where_clauses))

    stmt = stmt.order_by(Property.id.desc())

    # count total
    count_stmt = select(func.count()).select_from(stmt.subquery())
    total_res = await db.execute(count_stmt)
    total = total_res.scalar_one()

    offset = (page - 1) * per_page
    stmt = stmt.offset(offset).limit(per_page)
    res = await db.execute(stmt)
    items = list(res.scalars().all())
    return items, int(total)


async def get_property(db: AsyncSession, prop_id: int) -> Optional[Property]:
    res = await db.execute(select(Property).where(Property.id == prop_id))
    return res.scalars().first()


async def get_owned_property(
    db: AsyncSession, prop_id: int, owner_id: int
) -> Optional[Property]:
    res = await db.execute(
        select(Property).where(Property.id == prop_id, Property.owner_id == owner_id)
    )
    return res.scalars().first()


async def list_properties_for_owner(db: AsyncSession, owner_id: int) -> List[Property]:
    res = await db.execute(
        select(Property)
        .where(Property.owner_id == owner_id)
        .order_by(Property.id.desc())
    )
    return list(res.scalars().all())


async def create_property(db: AsyncSession, owner_id: int, **kwargs) -> Property:
    """
    New listings always start available with no active booking.
    """
    for field in _AVAILABILITY_FIELDS:
        kwargs.pop(field, None)
    prop = Property(owner_id=owner_id, is_available=True, **kwargs)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def update_property(db: AsyncSession, prop: Property, data: dict) -> Property:
    for k, v in data.items():
        if k in _AVAILABILITY_FIELDS:
            continue
        if v is not None:
            setattr(prop, k, v)
    db.add(prop)
    await db.commit()
    await db.refresh(prop)
    return prop


async def delete_property(db: AsyncSession, prop: Property):
    # SQLite does not enforce ON DELETE CASCADE unless told to
    await db.execute(delete(Booking).where(Booking.property_id == prop.id))
    await db.delete(prop)
    await db.commit()
    return True


# --- Availability writes used by rentnest.services.bookings ---
# These do not commit: the caller owns the transaction.

async def claim_for_booking(db: AsyncSession, prop_id: int, booking: Booking) -> bool:
    """
    Compare-and-swap the property onto `booking`.

    Matches only while the property has no active booking (or already points
    at this one), so two concurrent accepts cannot both win.
    Returns False when the row was taken by another booking.
    """
    stmt = (
        update(Property)
        .where(
            Property.id == prop_id,
            or_(
                Property.active_booking_id.is_(None),
                Property.active_booking_id == booking.id,
            ),
        )
        .values(
            is_available=False,
            booked_by_id=booking.user_id,
            active_booking_id=booking.id,
        )
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    return res.rowcount == 1


async def release_booking(db: AsyncSession, prop_id: int, booking_id: int) -> bool:
    """
    Free the property if (and only if) `booking_id` is its active booking.
    """
    stmt = (
        update(Property)
        .where(Property.id == prop_id, Property.active_booking_id == booking_id)
        .values(is_available=True, booked_by_id=None, active_booking_id=None)
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    return res.rowcount == 1


def mark_free(prop: Property) -> None:
    prop.is_available = True
    prop.booked_by_id = None
    prop.active_booking_id = None
