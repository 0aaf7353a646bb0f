from __future__ import annotations

import logging

import jwt
from fastapi import Cookie, Header, HTTPException, status

from shiftdesk.auth.jwt_tokens import JwtConfig, decode_access_token
from shiftdesk.core.config import settings
from shiftdesk.schemas.parsing import EMAIL_RE

log = logging.getLogger("shiftdesk.auth")


def get_jwt_config() -> JwtConfig:
    return JwtConfig(
        secret=settings.JWT_SECRET,
        issuer=settings.JWT_ISS,
        audience=settings.JWT_AUD,
        ttl_seconds=settings.ACCESS_TOKEN_TTL_SECONDS,
    )


def _bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_owner_email(
    access_token: str | None = Cookie(default=None, alias="access_token"),
    authorization: str | None = Header(default=None),
    x_user_email: str | None = Header(default=None, alias="x-user-email"),
) -> str:
    """Resolve the tenant (owner email) for the request.

    Order: access_token cookie, then Authorization: Bearer, then the
    x-user-email header when TRUST_EMAIL_HEADER is on.
    """
    token = access_token or _bearer(authorization)
    if token:
        try:
            payload = decode_access_token(get_jwt_config(), token)
        except jwt.PyJWTError:
            log.info("rejected access token")
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        email = str(payload["sub"]).strip().lower()
        if not EMAIL_RE.match(email):
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
        return email

    if settings.TRUST_EMAIL_HEADER and x_user_email:
        email = x_user_email.strip().lower()
        if EMAIL_RE.match(email):
            return email

    raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
