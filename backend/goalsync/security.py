"""Security utilities for password hashing and session tokens."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

from goalsync.config import Settings
from goalsync.exceptions import Unauthorized

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=BCRYPT_ROUNDS,
)


def get_app_settings(request: Request) -> Settings:
    """Get the settings the running application was created with."""
    return request.app.state.settings


def require_secret(settings: Settings) -> str:
    if not settings.SECRET_KEY:
        raise ValueError(
            "SECRET_KEY not set. Generate with: python scripts/generate_keys.py"
        )
    return settings.SECRET_KEY


def create_session_token(
    data: dict,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a JWT session token."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(days=settings.TOKEN_EXPIRE_DAYS)
    to_encode.update({"iat": now, "exp": expire})
    encoded_jwt = jwt.encode(to_encode, require_secret(settings), algorithm=JWT_ALGORITHM)
    return encoded_jwt


def create_user_token(user_id: int, email: str, settings: Settings) -> str:
    """Issue the session token returned after register/login."""
    return create_session_token({"id": str(user_id), "sub": email}, settings)


def verify_session_token(token: str, settings: Settings) -> Optional[dict]:
    """Verify and decode a JWT session token."""
    try:
        payload = jwt.decode(token, require_secret(settings), algorithms=[JWT_ALGORITHM])
        return payload
    except JWTError:
        return None


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password for storage."""
    return pwd_context.hash(password)


async def hash_password_async(password: str) -> str:
    """Hash a password on the thread pool."""
    return await run_in_threadpool(get_password_hash, password)


async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password on the thread pool."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


async def get_session_claims(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> Optional[dict]:
    """Decode the bearer token when REQUIRE_AUTH is on.

    Returns None when authentication is disabled.
    """
    if not settings.REQUIRE_AUTH:
        return None

    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise Unauthorized("Authentication required")

    payload = verify_session_token(auth_header[len("Bearer "):], settings)
    if payload is None:
        raise Unauthorized("Invalid or expired token")
    return payload
