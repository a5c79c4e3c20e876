# rentnest/api/routers/renter.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from rentnest.api.dependencies import get_current_actor
from rentnest.core.actor import Actor
from rentnest.db import crud_bookings
from rentnest.db.session import get_db
from rentnest.schemas.dashboard import RenterDashboard
from rentnest.services.dashboard import build_renter_dashboard

router = APIRouter()


@router.get("/dashboard", response_model=RenterDashboard)
async def renter_dashboard(
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
):
    bookings = await crud_bookings.list_bookings_for_user(db, actor.id)
    return build_renter_dashboard(bookings)
