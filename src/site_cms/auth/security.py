"""Bearer-token authentication for write routes.

Tokens are HS256 JWTs carrying ``{"id": <user id>}``. A token is accepted
when it verifies, is not expired and resolves to an active user.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Annotated, Any, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from motor.motor_asyncio import AsyncIOMotorDatabase

from site_cms.db.nosql import DbDep
from site_cms.exceptions import Forbidden, Unauthorized
from site_cms.resources.users import users_repo

from .settings import AuthSettings, get_auth_settings

logger = logging.getLogger(__name__)

TOKEN_INVALID = "غير مصرح - التوكن غير صالح"
TOKEN_EXPIRED = "انتهت صلاحية التوكن"
USER_NOT_FOUND = "غير مصرح - المستخدم غير موجود"
ACCOUNT_DISABLED = "الحساب معطل"

ADMIN_ROLE = "admin"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    user: dict[str, Any]

    @property
    def id(self) -> str:
        return str(self.user.get("_id"))

    @property
    def role(self) -> str:
        return self.user.get("role", "editor")

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def create_access_token(
    user_id: str,
    *,
    settings: Optional[AuthSettings] = None,
    lifetime_seconds: Optional[int] = None,
) -> str:
    settings = settings or get_auth_settings()
    now = datetime.now(timezone.utc)
    lifetime = lifetime_seconds if lifetime_seconds is not None else settings.jwt_lifetime_seconds
    payload = {"id": str(user_id), "iat": now, "exp": now + timedelta(seconds=lifetime)}
    return jwt.encode(payload, settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, *, settings: Optional[AuthSettings] = None) -> dict[str, Any]:
    settings = settings or get_auth_settings()
    try:
        return jwt.decode(
            token,
            settings.jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as exc:
        raise Unauthorized(TOKEN_EXPIRED) from exc
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise Unauthorized(TOKEN_INVALID) from exc


async def resolve_identity(
    db: AsyncIOMotorDatabase, token: str, *, settings: Optional[AuthSettings] = None
) -> Identity:
    payload = decode_access_token(token, settings=settings)
    user_id = payload.get("id")
    if not user_id:
        raise Unauthorized(TOKEN_INVALID)
    user = await users_repo.get(db, user_id)
    if user is None:
        raise Unauthorized(USER_NOT_FOUND)
    if not user.get("isActive", True):
        raise Unauthorized(ACCOUNT_DISABLED)
    return Identity(user=user)


async def require_user(
    db: DbDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Identity:
    if credentials is None or not credentials.credentials:
        raise Unauthorized()
    return await resolve_identity(db, credentials.credentials)


async def require_admin(identity: Annotated[Identity, Depends(require_user)]) -> Identity:
    if not identity.is_admin:
        raise Forbidden()
    return identity


UserDep = Annotated[Identity, Depends(require_user)]
AdminDep = Annotated[Identity, Depends(require_admin)]
