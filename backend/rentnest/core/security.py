# rentnest/core/security.py
"""
Password hashing and bearer tokens.

A token carries the user id as `sub` and the role the user had when it was
issued. The role claim is informational only: requests resolve the user
from the database, so a role change takes effect immediately.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from rentnest.core.actor import Actor
from rentnest.core.config import settings

# pbkdf2_sha256: no 72-byte input limit and no bcrypt backend to pin
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ACCESS = "access"


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(actor: Actor, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {
        "sub": str(actor.id),
        "role": actor.role,
        "type": ACCESS,
        "iss": settings.JWT_ISSUER,
        "iat": now,
        "exp": now + ttl,
    }
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Validate signature, expiry, issuer and token type; return the user id.
    Raises JWTError for anything that is not a usable access token.
    """
    payload = jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM],
        issuer=settings.JWT_ISSUER,
    )
    if payload.get("type") != ACCESS:
        raise JWTError("Invalid token type")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise JWTError("Invalid subject")
