from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    jwt_secret: SecretStr = Field(validation_alias=AliasChoices("AUTH_JWT_SECRET", "JWT_SECRET"))
    jwt_algorithm: str = "HS256"
    jwt_lifetime_seconds: int = 60 * 60 * 24 * 7

    # used by `site-cms auth seed-admin`
    admin_email: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("AUTH_ADMIN_EMAIL", "ADMIN_EMAIL")
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_", env_file=".env", extra="ignore", populate_by_name=True
    )


_settings: AuthSettings | None = None


def get_auth_settings() -> AuthSettings:
    global _settings
    if _settings is None:
        _settings = AuthSettings()
    return _settings


def set_auth_settings(settings: AuthSettings | None) -> None:
    """Replace (or with ``None`` reset) the process-wide settings; used by tests and the CLI."""
    global _settings
    _settings = settings
