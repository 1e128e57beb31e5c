"""Bearer-token verification for tokens issued by the external auth provider."""
import logging
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Header

from sparkbytes.config import settings
from sparkbytes.errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None


def decode_token(token: str) -> CurrentUser:
    """Validate the signature and expiry of ``token`` and extract the caller's identity."""
    options = {"verify_aud": bool(settings.JWT_AUDIENCE)}
    try:
        claims = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE or None,
            options=options,
        )
    except jwt.PyJWTError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise AuthenticationError("Token is not valid")

    # Provider tokens carry "sub"; legacy tokens carry "userId".
    user_id = claims.get("sub") or claims.get("userId")
    if not user_id:
        raise AuthenticationError("Token is not valid")

    metadata = claims.get("user_metadata") or {}
    name = metadata.get("name") or metadata.get("full_name") or claims.get("name")
    return CurrentUser(user_id=str(user_id), email=claims.get("email"), name=name)


def get_current_user(
    authorization: Optional[str] = Header(None),
    x_auth_token: Optional[str] = Header(None),
) -> CurrentUser:
    """FastAPI dependency: resolve the caller from ``Authorization: Bearer`` or ``x-auth-token``."""
    token = None
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials:
            token = credentials.strip()
    if not token and x_auth_token:
        token = x_auth_token.strip()
    if not token:
        raise AuthenticationError("No token, authorization denied")
    return decode_token(token)
