from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from rentnest.services.availability import (
    AVAILABLE,
    AWAITING_RESET,
    BOOKED,
    OWNER_PERSPECTIVE,
    RENTER_PERSPECTIVE,
    UNAVAILABLE,
    has_ended,
    perspective_for,
    project_status,
)

TODAY = date(2026, 3, 10)
OWNER_ID, BOOKER_ID, STRANGER_ID = 1, 2, 3


def make_property(is_available=False):
    return SimpleNamespace(
        owner_id=OWNER_ID,
        is_available=is_available,
        booked_by_id=None if is_available else BOOKER_ID,
    )


def make_booking(end_offset):
    return SimpleNamespace(end_date=TODAY + timedelta(days=end_offset))


@pytest.mark.parametrize("perspective", [OWNER_PERSPECTIVE, RENTER_PERSPECTIVE])
def test_available_property_is_available_to_everyone(perspective):
    prop = make_property(is_available=True)
    assert project_status(prop, STRANGER_ID, perspective, None, TODAY) == AVAILABLE


def test_owner_sees_booked_until_the_end_date():
    prop = make_property()
    status = project_status(prop, OWNER_ID, OWNER_PERSPECTIVE, make_booking(3), TODAY)
    assert status == BOOKED


@pytest.mark.parametrize("end_offset", [0, -1, -30])
def test_owner_sees_awaiting_reset_once_ended(end_offset):
    prop = make_property()
    status = project_status(
        prop, OWNER_ID, OWNER_PERSPECTIVE, make_booking(end_offset), TODAY
    )
    assert status == AWAITING_RESET


def test_owner_with_missing_booking_sees_booked():
    prop = make_property()
    assert project_status(prop, OWNER_ID, OWNER_PERSPECTIVE, None, TODAY) == BOOKED


def test_booker_sees_booked_even_after_end():
    prop = make_property()
    status = project_status(prop, BOOKER_ID, RENTER_PERSPECTIVE, make_booking(-2), TODAY)
    assert status == BOOKED


@pytest.mark.parametrize("viewer", [STRANGER_ID, None])
def test_other_renters_only_see_unavailable(viewer):
    prop = make_property()
    status = project_status(prop, viewer, RENTER_PERSPECTIVE, make_booking(3), TODAY)
    assert status == UNAVAILABLE


def test_projection_follows_the_clock():
    prop = make_property()
    booking = make_booking(0)
    yesterday = TODAY - timedelta(days=1)
    assert project_status(prop, OWNER_ID, OWNER_PERSPECTIVE, booking, yesterday) == BOOKED
    assert project_status(prop, OWNER_ID, OWNER_PERSPECTIVE, booking, TODAY) == AWAITING_RESET
    # nothing was written back
    assert prop.is_available is False


def test_has_ended_boundary():
    assert has_ended(make_booking(0), TODAY)
    assert not has_ended(make_booking(1), TODAY)
    assert not has_ended(None, TODAY)


def test_perspective_for():
    prop = make_property()
    assert perspective_for(prop, OWNER_ID) == OWNER_PERSPECTIVE
    assert perspective_for(prop, BOOKER_ID) == RENTER_PERSPECTIVE
    assert perspective_for(prop, None) == RENTER_PERSPECTIVE
