"""Identity provider: accounts, password hashing and session tokens.

Tokens are opaque uuid4 strings stored in the auth_tokens table with an
expiry. resolve_token() is the only entry point the file routes need.
"""
import logging
import uuid
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import EmailAlreadyExists, MissingEmail, MissingPassword, Unauthenticated
from app.models.auth_token import AuthToken
from app.models.user import User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash."""
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # unrecognized or corrupt stored hash
        return False


async def register_user(db: AsyncSession, email: str | None, password: str | None) -> User:
    """Create a new account. Email must be unused."""
    if not email:
        raise MissingEmail()
    if not password:
        raise MissingPassword()

    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise EmailAlreadyExists()

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    await db.commit()
    await db.refresh(user)
    logger.info("Registered user %s", user.id)
    return user


async def issue_token(db: AsyncSession, email: str, password: str) -> str:
    """Check credentials and open a session. Raises Unauthenticated on mismatch."""
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if not user or not verify_password(password, user.password_hash):
        raise Unauthenticated()

    token = str(uuid.uuid4())
    expires_at = datetime.now(timezone.utc) + timedelta(seconds=settings.TOKEN_TTL_SECONDS)
    db.add(AuthToken(token=token, user_id=user.id, expires_at=expires_at))
    await db.commit()
    logger.info("Issued session token for user %s", user.id)
    return token


async def resolve_token(db: AsyncSession, token: str | None) -> uuid.UUID | None:
    """Map a session token to its user id. None when absent, unknown or expired."""
    if not token:
        return None
    auth = await db.get(AuthToken, token)
    if not auth:
        return None
    expires_at = auth.expires_at
    # SQLite hands back naive datetimes
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at <= datetime.now(timezone.utc):
        return None
    return auth.user_id


async def revoke_token(db: AsyncSession, token: str | None) -> None:
    """Close a session. Raises Unauthenticated if the token is not live."""
    user_id = await resolve_token(db, token)
    if user_id is None:
        raise Unauthenticated()
    await db.execute(delete(AuthToken).where(AuthToken.token == token))
    await db.commit()
    logger.info("Revoked session token for user %s", user_id)


async def get_user(db: AsyncSession, user_id: uuid.UUID | None) -> User:
    if user_id is None:
        raise Unauthenticated()
    user = await db.get(User, user_id)
    if not user:
        raise Unauthenticated()
    return user
