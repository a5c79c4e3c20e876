# backend/rentnest/db/session.py
from collections.abc import AsyncGenerator
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from rentnest.core.config import Settings, settings


def engine_options(cfg: Settings) -> Dict[str, Any]:
    """
    Driver-specific engine arguments.

    SQLite serializes writers on a database lock, so a concurrent accept
    waits out the busy timeout instead of failing at once. MySQL connections
    are pinged before reuse since the server drops idle ones.
    """
    options: Dict[str, Any] = {"echo": cfg.DB_ECHO}
    if cfg.is_sqlite:
        options["connect_args"] = {"timeout": cfg.SQLITE_BUSY_TIMEOUT}
    else:
        options["pool_pre_ping"] = True
    return options


engine = create_async_engine(settings.DATABASE_URL, **engine_options(settings))

# expire_on_commit=False: routers serialize objects after the service commits
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session
