"""Profile sync route."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from goalsync.database import get_async_db
from goalsync.exceptions import BadRequest, Forbidden, InternalError, NotFound
from goalsync.models import User
from goalsync.schemas import SyncRequest, SyncResponse
from goalsync.security import get_session_claims

logger = logging.getLogger(__name__)
router = APIRouter()


def check_account_access(email: str, claims: Optional[dict], message: str = "Not authorized") -> None:
    """Reject a session token issued for a different account."""
    if claims is not None and claims.get("sub") != email:
        raise Forbidden(message)


@router.post("", response_model=SyncResponse)
async def sync_user(
    request: SyncRequest,
    db: AsyncSession = Depends(get_async_db),
    claims: Optional[dict] = Depends(get_session_claims),
):
    """
    Apply a partial update to the user's document.

    Each sent top-level field replaces the stored one; nested objects such
    as ``goal`` are replaced wholesale.
    """
    if not request.email:
        raise BadRequest("Email required")

    check_account_access(request.email, claims, "Not authorized to sync this account")
    patch = request.to_patch()

    try:
        result = await db.execute(
            select(User).filter(User.email == request.email).with_for_update()
        )
        user = result.scalar_one_or_none()

        if not user:
            raise NotFound("User not found")

        user.apply_patch(patch)
        await db.commit()

    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to sync user: {e}")
        raise InternalError()

    logger.info(f"Synced user {user.id}: {sorted(patch)}")
    return SyncResponse(success=True)
