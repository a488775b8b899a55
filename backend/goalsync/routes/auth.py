"""Authentication routes: register and log in."""

import logging
import re

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from goalsync.config import Settings
from goalsync.database import get_async_db
from goalsync.exceptions import BadRequest, Conflict, InternalError, NotFound, Unauthorized
from goalsync.models import User
from goalsync.schemas import AuthRequest, AuthResponse
from goalsync.security import (
    create_user_token,
    get_app_settings,
    hash_password_async,
    require_secret,
    verify_password_async,
)

logger = logging.getLogger(__name__)
router = APIRouter()

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6


async def register_user(db: AsyncSession, request: AuthRequest) -> User:
    """Create a new user; Conflict if the email is taken."""
    if not EMAIL_PATTERN.match(request.email):
        raise BadRequest("Please enter a valid email address.")
    if len(request.password) < MIN_PASSWORD_LENGTH:
        raise BadRequest(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

    try:
        result = await db.execute(select(User).filter(User.email == request.email))
        if result.scalar_one_or_none():
            raise Conflict("User already exists. Please log in.")

        password_hash = await hash_password_async(request.password)
        user = User.new(
            email=request.email,
            password_hash=password_hash,
            name=request.name.strip() if request.name else None,
            country=request.country,
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await db.rollback()
        raise Conflict("User already exists. Please log in.")
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to register user: {e}")
        raise InternalError()

    logger.info(f"Registered user {user.id}")
    return user


async def login_user(db: AsyncSession, request: AuthRequest) -> User:
    """Check credentials; NotFound for unknown email, Unauthorized on mismatch."""
    try:
        result = await db.execute(select(User).filter(User.email == request.email))
        user = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error(f"Failed to look up user for login: {e}")
        raise InternalError()

    if not user:
        raise NotFound("User not found. Please sign up.")

    if not await verify_password_async(request.password, user.password_hash):
        logger.warning(f"Failed login for user {user.id}")
        raise Unauthorized("Invalid credentials.")

    return user


@router.post("", response_model=AuthResponse)
async def authenticate(
    request: AuthRequest,
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Register (``isRegister: true``) or log in.

    Returns the stripped user object and a signed session token.
    """
    if not request.email or not request.password:
        raise BadRequest("Email and password are required.")

    # No account is written unless a token can be issued for it
    try:
        require_secret(settings)
    except ValueError as e:
        logger.error(str(e))
        raise InternalError()

    if request.is_register:
        user = await register_user(db, request)
    else:
        user = await login_user(db, request)

    token = create_user_token(user.id, user.email, settings)
    return AuthResponse(user=user.to_public_dict(), token=token)
