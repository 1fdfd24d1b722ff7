"""Password hashing, token issuance and principal extraction."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi.security import HTTPBearer

from surveydesk.core.config import settings
from surveydesk.core.errors import ForbiddenError
from surveydesk.schemas.user import Principal

logger = logging.getLogger(__name__)

# auto_error=False: a missing header is decided by the access policy, not here
bearer_scheme = HTTPBearer(auto_error=False)


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(principal: Principal, expires_delta: Optional[timedelta] = None) -> str:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": principal.id,
        "email": principal.email,
        "role": principal.role,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Principal:
    """Verify signature and expiry; raise ForbiddenError("Invalid token") otherwise."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return Principal(id=payload["sub"], email=payload["email"], role=payload["role"])
    except jwt.ExpiredSignatureError:
        logger.info("Rejected expired token")
        raise ForbiddenError("Invalid token")
    except (jwt.InvalidTokenError, KeyError, ValueError):
        raise ForbiddenError("Invalid token")

