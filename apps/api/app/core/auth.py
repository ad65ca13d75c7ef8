from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from starlette.requests import Request

from app.core.config import get_settings


logger = logging.getLogger("app.authz")


@dataclass(frozen=True, slots=True)
class Identity:
    user_id: str
    email: str | None
    name: str | None
    role: str


def _token_from_request(request: Request) -> str | None:
    auth_header = request.headers.get("authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[len("Bearer ") :].strip()
        if token:
            return token

    settings = get_settings()
    cookie_token = request.cookies.get(settings.auth_cookie_name)
    return cookie_token or None


def decode_identity(token: str) -> Identity | None:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        logger.info("auth.token_rejected", extra={"error": str(exc)})
        return None

    subject = payload.get("userId", payload.get("sub"))
    if subject is None or subject == "":
        return None

    role = payload.get("role")
    return Identity(
        user_id=str(subject),
        email=payload.get("email"),
        name=payload.get("name"),
        role=str(role) if role is not None else "",
    )


def resolve_identity(request: Request) -> Identity | None:
    token = _token_from_request(request)
    if token is None:
        return None
    return decode_identity(token)


async def get_current_identity(request: Request) -> Identity | None:
    return resolve_identity(request)


def create_access_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + (expires_delta or timedelta(days=settings.jwt_expiration_days))
    claims = {
        "sub": identity.user_id,
        "userId": identity.user_id,
        "email": identity.email,
        "name": identity.name,
        "role": identity.role,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
