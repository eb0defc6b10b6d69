"""Users and session API routes."""
import base64
import binascii
from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Header, Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_caller_id
from app.errors import Unauthenticated
from app.schemas.user import TokenResponse, UserCreate, UserResponse
from app.services import identity

router = APIRouter(tags=["users"])


@router.post("/users", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register a new account."""
    user = await identity.register_user(db, body.email, body.password)
    return {"id": str(user.id), "email": user.email}


@router.get("/users/me", response_model=UserResponse)
async def get_me(
    caller_id: Optional[UUID] = Depends(get_caller_id),
    db: AsyncSession = Depends(get_db),
):
    """Return the account behind the X-Token header."""
    user = await identity.get_user(db, caller_id)
    return {"id": str(user.id), "email": user.email}


@router.get("/connect", response_model=TokenResponse)
async def connect(
    authorization: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    """Exchange HTTP Basic credentials for a session token."""
    email, password = _basic_credentials(authorization)
    token = await identity.issue_token(db, email, password)
    return {"token": token}


@router.get("/disconnect", status_code=204)
async def disconnect(
    x_token: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
):
    """Revoke the session token in X-Token."""
    await identity.revoke_token(db, x_token)
    return Response(status_code=204)


def _basic_credentials(authorization: Optional[str]) -> tuple[str, str]:
    """Split an 'Authorization: Basic ...' header into (email, password)."""
    if not authorization:
        raise Unauthenticated()
    scheme, _, encoded = authorization.partition(" ")
    if scheme.lower() != "basic" or not encoded:
        raise Unauthenticated()
    try:
        decoded = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise Unauthenticated()
    email, sep, password = decoded.partition(":")
    if not sep:
        raise Unauthenticated()
    return email, password
