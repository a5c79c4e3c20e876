from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rentnest.core.actor import Actor, OWNER, RENTER
from rentnest.core.security import create_access_token
from rentnest.db import crud_properties, crud_users
from rentnest.db.base import Base
from rentnest.db import models  # noqa: F401  (registers tables)
from rentnest.db.session import get_db
from rentnest.main import app

TODAY = date(2026, 3, 10)


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def fetch(session_factory):
    """
    Load a row through a fresh session, so assertions see what was committed
    rather than whatever the test session has cached.
    """
    async def _fetch(model, pk):
        async with session_factory() as session:
            return await session.get(model, pk)

    return _fetch


async def make_user(db, email, role):
    user = await crud_users.create_user(
        db, name=email.split("@")[0], email=email, password="secret123", role=role
    )
    return Actor(id=user.id, role=user.role)


@pytest.fixture
async def owner(db):
    return await make_user(db, "olga@example.com", OWNER)


@pytest.fixture
async def other_owner(db):
    return await make_user(db, "oscar@example.com", OWNER)


@pytest.fixture
async def renter_a(db):
    return await make_user(db, "anna@example.com", RENTER)


@pytest.fixture
async def renter_b(db):
    return await make_user(db, "ben@example.com", RENTER)


async def make_property(db, owner_id, title="Flat by the river"):
    prop = await crud_properties.create_property(
        db,
        owner_id=owner_id,
        title=title,
        description="Two rooms, balcony",
        price=1200,
        location="Lisbon",
        type="apartment",
    )
    return prop.id


@pytest.fixture
async def property_id(db, owner):
    return await make_property(db, owner.id)


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def auth_headers(actor: Actor) -> dict:
    token = create_access_token(actor)
    return {"Authorization": f"Bearer {token}"}
