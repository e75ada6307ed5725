from .security import (
    AdminDep,
    Identity,
    UserDep,
    create_access_token,
    decode_access_token,
    require_admin,
    require_user,
    resolve_identity,
)
from .settings import AuthSettings, get_auth_settings, set_auth_settings

__all__ = [
    "AuthSettings",
    "get_auth_settings",
    "set_auth_settings",
    "Identity",
    "UserDep",
    "AdminDep",
    "create_access_token",
    "decode_access_token",
    "resolve_identity",
    "require_user",
    "require_admin",
]
