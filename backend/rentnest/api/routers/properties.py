# rentnest/api/routers/properties.py
import math
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.api.dependencies import get_optional_actor, require_owner
from rentnest.core.actor import Actor
from rentnest.core.config import get_settings
from rentnest.db import crud_bookings, crud_properties
from rentnest.db.session import get_db
from rentnest.schemas.booking import ActiveBookingSummary
from rentnest.schemas.property import (
    PropertiesPage,
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertyView,
)
from rentnest.services import availability, bookings as booking_service

router = APIRouter()


def _view(prop, actor: Optional[Actor], active_booking=None) -> dict:
    """
    Serialize a property for this viewer: projected status, plus the active
    booking for the owner or for the renter who holds it.
    """
    viewer_id = actor.id if actor else None
    perspective = availability.perspective_for(prop, viewer_id)
    projected = availability.project_status(prop, viewer_id, perspective, active_booking)

    summary = None
    if active_booking is not None:
        is_booker = viewer_id is not None and prop.booked_by_id == viewer_id
        if perspective == availability.OWNER_PERSPECTIVE or is_booker:
            summary = ActiveBookingSummary.model_validate(active_booking)

    view = PropertyView(
        **PropertyBase.model_validate(prop).model_dump(),
        status=projected,
        active_booking=summary,
    )
    return view.model_dump()


async def _views(db: AsyncSession, props, actor: Optional[Actor]) -> list:
    active = await crud_bookings.get_bookings_by_ids(
        db, (p.active_booking_id for p in props)
    )
    return [_view(p, actor, active.get(p.active_booking_id)) for p in props]


@router.get("/properties")
async def list_properties(
    db: AsyncSession = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
    q: Optional[str] = None,
    location: Optional[str] = None,
    type: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    bedrooms_min: Optional[int] = Query(None, ge=0),
    bathrooms_min: Optional[int] = Query(None, ge=0),
    furnished: Optional[bool] = None,
    pet_friendly: Optional[bool] = None,
    page: int = Query(1, ge=1),
    per_page: Optional[int] = Query(None, ge=1),
):
    cfg = get_settings()
    per_page = min(per_page or cfg.DEFAULT_PAGE_SIZE, cfg.MAX_PAGE_SIZE)
    filters = {
        "q": q,
        "location": location,
        "type": type,
        "min_price": min_price,
        "max_price": max_price,
        "bedrooms_min": bedrooms_min,
        "bathrooms_min": bathrooms_min,
        "furnished": furnished,
        "pet_friendly": pet_friendly,
    }
    items, total = await crud_properties.list_properties(
        db,
        filters=filters,
        page=page,
        per_page=per_page,
    )
    page_obj = PropertiesPage(
        items=await _views(db, items, actor),
        total=total,
        page=page,
        per_page=per_page,
        total_pages=math.ceil(total / per_page),
    )
    return {"success": True, "data": page_obj.model_dump()}


@router.get("/properties/me")
async def my_properties(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(require_owner),
):
    """
    Owner dashboard: every property of the current owner, with the
    owner-perspective status (available / booked / awaiting_reset).
    """
    items = await crud_properties.list_properties_for_owner(db, owner_id=actor.id)
    return {"success": True, "data": {"items": await _views(db, items, actor)}}


@router.get("/properties/{prop_id}")
async def get_property_detail(
    prop_id: int,
    db: AsyncSession = Depends(get_db),
    actor: Optional[Actor] = Depends(get_optional_actor),
):
    prop = await crud_properties.get_property(db, prop_id)
    if not prop:
        raise HTTPException(status_code=404, detail="Not found")

    active_booking = None
    if prop.active_booking_id is not None:
        active_booking = await crud_bookings.get_booking(db, prop.active_booking_id)
    return {"success": True, "data": _view(prop, actor, active_booking)}


@router.post("/properties", status_code=status.HTTP_201_CREATED)
async def create_property(
    body: PropertyCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(require_owner),
):
    prop = await crud_properties.create_property(
        db,
        owner_id=actor.id,
        **body.model_dump(),
    )
    return {"success": True, "data": _view(prop, actor)}


@router.put("/properties/{prop_id}")
async def update_property(
    prop_id: int,
    body: PropertyUpdate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(require_owner),
):
    """
    Listing fields only; availability is owned by the booking lifecycle.
    """
    prop = await crud_properties.get_owned_property(db, prop_id, actor.id)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")

    prop = await crud_properties.update_property(db, prop, body.model_dump(exclude_unset=True))
    return {"success": True, "data": (await _views(db, [prop], actor))[0]}


@router.delete("/properties/{prop_id}")
async def delete_property(
    prop_id: int,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(require_owner),
):
    """
    Delete an owned property together with its bookings, whatever their state.
    """
    prop = await crud_properties.get_owned_property(db, prop_id, actor.id)
    if not prop:
        raise HTTPException(status_code=404, detail="Property not found")

    await crud_properties.delete_property(db, prop)
    return {"success": True}


@router.post("/properties/{prop_id}/reset-availability")
async def reset_availability(
    prop_id: int,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(require_owner),
):
    prop = await booking_service.reset_availability(db, actor, prop_id)
    return {
        "success": True,
        "message": "Property reset to available",
        "data": _view(prop, actor),
    }
