"""FastAPI dependencies that resolve the X-Token header to a caller identity."""
from typing import Optional
from uuid import UUID
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.errors import Unauthenticated
from app.services.identity import resolve_token


async def get_caller_id(
    x_token: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
) -> Optional[UUID]:
    """User id behind the X-Token header, or None for an anonymous caller.

    Services decide whether an anonymous caller is acceptable.
    """
    return await resolve_token(db, x_token)


async def require_caller(caller_id: Optional[UUID] = Depends(get_caller_id)) -> UUID:
    """Like get_caller_id, but an anonymous caller is rejected.

    Runs before the request body is validated, so a bad token is reported
    as Unauthorized whatever the body looks like.
    """
    if caller_id is None:
        raise Unauthenticated()
    return caller_id
