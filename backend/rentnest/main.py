import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rentnest.core.config import settings
from rentnest.core.errors import BookingError
from rentnest.db.base import Base
from rentnest.db.session import engine
from rentnest.api.routers import (
    auth as auth_router,
    users as users_router,
    properties as properties_router,
    bookings as bookings_router,
    renter as renter_router,
)

logging.getLogger("rentnest").setLevel(settings.LOG_LEVEL.upper())
logger = logging.getLogger("uvicorn.error")

app = FastAPI(title=settings.PROJECT_NAME)

# ---------------------------
# CORS
# ---------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------
# Errors
# ---------------------------
@app.exception_handler(BookingError)
async def booking_error_handler(request: Request, exc: BookingError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )


# ---------------------------
# Startup
# ---------------------------
@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ---------------------------
# Routers
# ---------------------------
app.include_router(auth_router.router, prefix="/api/auth", tags=["auth"])
app.include_router(users_router.router, prefix="/api/users", tags=["users"])
app.include_router(properties_router.router, prefix="/api", tags=["properties"])
app.include_router(bookings_router.router, prefix="/api", tags=["bookings"])
app.include_router(renter_router.router, prefix="/api/renter", tags=["renter"])


# ---------------------------
# Health check
# ---------------------------
@app.get("/ping")
async def ping():
    return {"status": "ok"}


# ---------------------------
# Run
# ---------------------------
if __name__ == "__main__":
    uvicorn.run("rentnest.main:app", host="0.0.0.0", port=8000, reload=True)
