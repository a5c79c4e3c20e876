# rentnest/api/routers/bookings.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.api.dependencies import get_current_actor, require_owner
from rentnest.core.actor import Actor
from rentnest.db import crud_bookings
from rentnest.db.session import get_db
from rentnest.schemas.booking import (
    BookingCreate,
    BookingOut,
    BookingStatusUpdate,
    OwnerBookingOut,
)
from rentnest.services import bookings as booking_service

router = APIRouter()


@router.post("/bookings", status_code=status.HTTP_201_CREATED)
async def create_booking(
    body: BookingCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    booking = await booking_service.create_booking(
        db,
        actor,
        property_id=body.property_id,
        start_date=body.start_date,
        end_date=body.end_date,
        message=body.message,
    )
    return {"success": True, "data": BookingOut.model_validate(booking)}


@router.get("/bookings/me")
async def my_bookings(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    bookings = await crud_bookings.list_bookings_for_user(db, actor.id)
    return {"items": [BookingOut.model_validate(b) for b in bookings]}


@router.get("/bookings")
async def owner_bookings(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(require_owner),
):
    """
    List all bookings for properties owned by the current user.
    """
    bookings = await crud_bookings.list_bookings_for_owner(db, owner_id=actor.id)
    return {"items": [OwnerBookingOut.model_validate(b) for b in bookings]}


@router.put("/bookings/{booking_id}/status")
async def update_booking_status(
    booking_id: int,
    body: BookingStatusUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    booking = await booking_service.update_booking_status(
        db, actor, booking_id, body.status
    )
    return {"success": True, "data": BookingOut.model_validate(booking)}
