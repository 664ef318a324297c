import logging
from typing import Optional

from jose import JWTError, jwt

from trip_albums.core.config import configs

logger = logging.getLogger(__name__)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode a JWT access token issued by the auth service."""
    try:
        logger.debug("Decoding access token.")
        payload = jwt.decode(token, configs.SECRET_KEY, algorithms=[configs.ALGORITHM])
        return payload
    except JWTError as e:
        logger.warning(f"Error decoding access token: {e}")
        return None
