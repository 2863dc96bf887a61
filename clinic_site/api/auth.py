# This file provides bearer-token authentication and role checks for protected routes.
# It exists so routers can declare "signed in" or "admin only" with one dependency each.
# Tokens are HS256 JWTs whose claims carry the user id, role, and optional email.
# Authentication runs before body validation, so anonymous writes get 401 rather than 400.

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from clinic_site.api.api_config import ApiConfig
from clinic_site.api.dependencies import get_config
from clinic_site.api.error_handlers import ForbiddenError, UnauthorizedError

LOGGER = logging.getLogger("auth")

SUPER_ADMIN = "super_admin"
MAIN_ADMIN = "main_admin"
PUBLIC_RELATIONS = "pr"
ADMIN_AND_ABOVE = (SUPER_ADMIN, MAIN_ADMIN, PUBLIC_RELATIONS)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller resolved from a bearer token."""

    user_id: int
    role: str
    email: str | None = None


def create_access_token(
    *,
    user_id: int,
    role: str,
    config: ApiConfig,
    email: str | None = None,
    expires_minutes: int | None = None,
) -> str:
    minutes = expires_minutes if expires_minutes is not None else config.access_token_expire_minutes
    claims: dict[str, object] = {
        "sub": str(user_id),
        "role": role,
        "exp": datetime.now(tz=UTC) + timedelta(minutes=minutes),
    }
    if email:
        claims["email"] = email
    return jwt.encode(claims, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, *, config: ApiConfig) -> Principal:
    try:
        payload = jwt.decode(token, config.jwt_secret_key, algorithms=[config.jwt_algorithm])
    except JWTError as exc:
        raise UnauthorizedError("Invalid or expired token.") from exc

    subject = payload.get("sub")
    role = payload.get("role")
    if subject is None or not str(subject).isdigit() or not role:
        raise UnauthorizedError("Invalid token payload.")
    return Principal(user_id=int(subject), role=str(role), email=payload.get("email"))


def get_current_principal(
    config: Annotated[ApiConfig, Depends(get_config)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required.")
    return decode_access_token(credentials.credentials, config=config)


def require_roles(*roles: str) -> Callable[[Principal], Principal]:
    allowed = frozenset(roles)

    def checker(principal: Annotated[Principal, Depends(get_current_principal)]) -> Principal:
        if principal.role not in allowed:
            LOGGER.info("Denied role=%s user_id=%s", principal.role, principal.user_id)
            raise ForbiddenError("You do not have permission to perform this action.")
        return principal

    return checker


PrincipalDep = Annotated[Principal, Depends(get_current_principal)]
AdminDep = Annotated[Principal, Depends(require_roles(*ADMIN_AND_ABOVE))]
