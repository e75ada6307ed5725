from .core.env import ENV, Env, get_env, pick
from .core.logging import JsonFormatter, setup_logging
from .settings import AppSettings, get_app_settings

__all__ = [
    "ENV",
    "Env",
    "get_env",
    "pick",
    "setup_logging",
    "JsonFormatter",
    "AppSettings",
    "get_app_settings",
]
