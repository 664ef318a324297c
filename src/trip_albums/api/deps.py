import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from trip_albums.common.uow import UnitOfWork
from trip_albums.core.security import decode_access_token
from trip_albums.db.database import get_db

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


async def get_uow(db: AsyncSession = Depends(get_db)) -> UnitOfWork:
    return UnitOfWork(db)


async def get_current_user_id(token: str = Depends(oauth2_scheme)) -> int:
    """Resolve the caller from the bearer token's ``sub`` claim."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(token)
    if payload is None:
        logger.warning("Could not validate credentials: Token decoding failed.")
        raise credentials_exception

    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError):
        logger.warning(f"Could not validate credentials: unusable subject {subject!r}.")
        raise credentials_exception
