"""Deployment environment, read from ``APP_ENV`` with ``NODE_ENV`` as fallback."""

from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache
from typing import Any


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


_ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "testing": Env.TEST,
    "preview": Env.TEST,
    "production": Env.PROD,
}


def parse_env(raw: str | None) -> Env | None:
    if not raw:
        return None
    value = raw.strip().lower()
    if value in Env._value2member_map_:
        return Env(value)
    return _ALIASES.get(value)


@cache
def get_env() -> Env:
    """Resolve the environment once; unknown values warn and mean ``local``."""
    raw = os.getenv("APP_ENV") or os.getenv("NODE_ENV")
    env = parse_env(raw)
    if env is None and raw:
        warnings.warn(f"Unrecognized environment '{raw}', defaulting to 'local'.", RuntimeWarning, stacklevel=2)
    return env or Env.LOCAL


ENV: Env = get_env()


def pick(*, prod: Any, nonprod: Any, **per_env: Any) -> Any:
    """``prod`` in production, else the value named after the environment, else ``nonprod``.

    Example:
        log_level = pick(prod="INFO", nonprod="DEBUG", test="WARNING")
    """
    env = get_env()
    if env is Env.PROD:
        return prod
    value = per_env.get(env.value)
    return nonprod if value is None else value
