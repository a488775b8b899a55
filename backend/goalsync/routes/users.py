"""User retrieval and troubleshooting routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from goalsync.database import get_async_db
from goalsync.exceptions import InternalError, NotFound
from goalsync.models import User
from goalsync.routes.sync import check_account_access
from goalsync.schemas import UserResponse
from goalsync.security import get_session_claims

logger = logging.getLogger(__name__)
router = APIRouter()


async def get_user_by_email(db: AsyncSession, email: str) -> User:
    try:
        result = await db.execute(select(User).filter(User.email == email))
        user = result.scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.error(f"Failed to load user: {e}")
        raise InternalError()

    if not user:
        raise NotFound("User not found")
    return user


@router.get("/user/{email}", response_model=UserResponse)
async def get_user(
    email: str,
    db: AsyncSession = Depends(get_async_db),
    claims: Optional[dict] = Depends(get_session_claims),
):
    """Get the stripped user document."""
    check_account_access(email, claims)
    user = await get_user_by_email(db, email)
    return UserResponse(user=user.to_public_dict())


@router.get("/debug/{email}")
async def debug_user(
    email: str,
    db: AsyncSession = Depends(get_async_db),
    claims: Optional[dict] = Depends(get_session_claims),
):
    """Summarize which goal fields are stored and how long the lists are."""
    check_account_access(email, claims)
    user = await get_user_by_email(db, email)
    return user.goal_summary()
