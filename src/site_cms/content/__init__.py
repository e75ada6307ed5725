from .hooks import (
    BLOG_HOOKS,
    CATEGORY_HOOKS,
    FAQ_CATEGORY_HOOKS,
    SERVICE_HOOKS,
    Draft,
    apply_hooks,
)
from .slug import slugify

__all__ = [
    "slugify",
    "Draft",
    "apply_hooks",
    "BLOG_HOOKS",
    "SERVICE_HOOKS",
    "CATEGORY_HOOKS",
    "FAQ_CATEGORY_HOOKS",
]
