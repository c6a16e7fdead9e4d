import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional, Protocol

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from jiji.core.config import settings


logger = logging.getLogger(__name__)


class AuthResolver(Protocol):
    """Turns a bearer token into a verified user id, or None."""

    def resolve(self, token: Optional[str]) -> Optional[uuid.UUID]: ...


class JwtAuthResolver:
    """Verifies HS-signed JWTs issued by the identity provider."""

    def __init__(self, secret_key: str, algorithm: str):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def resolve(self, token: Optional[str]) -> Optional[uuid.UUID]:
        if not token:
            return None

        try:
            # Decode the "Gibberish"
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        # Expired, tampered or malformed tokens just mean "anonymous"
        except jwt.InvalidTokenError as error:
            logger.warning(f"Ignoring invalid bearer token: {error}")
            return None

        subject = payload.get("sub")
        try:
            return uuid.UUID(str(subject))
        except ValueError:
            logger.warning("Ignoring bearer token with a non-UUID subject")
            return None


def create_access_token(user_id: uuid.UUID, expires_minutes: Optional[int] = None):
    expire_time = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sub": str(user_id), "exp": expire_time}

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# auto_error=False: a missing header is fine, the route decides what it needs
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_resolver() -> AuthResolver:
    return JwtAuthResolver(settings.SECRET_KEY, settings.ALGORITHM)


# Optional auth: who is calling, if anyone
async def get_optional_user_id(
    credentials: Annotated[
        Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)
    ],
    resolver: Annotated[AuthResolver, Depends(get_auth_resolver)],
) -> Optional[uuid.UUID]:
    token = credentials.credentials if credentials else None
    return resolver.resolve(token)
