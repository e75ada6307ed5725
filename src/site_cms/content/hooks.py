"""Pre-persist lifecycle hooks.

A hook is a pure function ``Draft -> Draft``. Each entity kind has an ordered
tuple of hooks that :func:`apply_hooks` runs right before the document is
written, on create and on update. Hooks only derive defaults; they never
raise, so the schema validation and the unique indexes that run afterwards
are the only things that can reject a write.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from .slug import slugify

WORDS_PER_MINUTE = 200
READ_TIME_UNIT = "دقائق"

_WHITESPACE_RUN = re.compile(r"\s+")


@dataclass(frozen=True)
class Draft:
    """A document as it is about to be written.

    ``data`` is the merged document (previous state overlaid with this
    write), ``provided`` the keys the caller sent in this write and
    ``previous`` the stored state (``None`` on create).
    """

    data: dict[str, Any]
    provided: frozenset[str]
    previous: Mapping[str, Any] | None = None
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def is_modified(self, name: str) -> bool:
        if name not in self.provided:
            return False
        if self.previous is None:
            return True
        return self.previous.get(name) != self.data.get(name)

    def with_values(self, **values: Any) -> "Draft":
        return replace(self, data={**self.data, **values})


Hook = Callable[[Draft], Draft]


def slug_from(source: str, *, rederive_on_change: bool = False) -> Hook:
    """Build a hook deriving ``slug`` from ``source`` (``title`` or ``name``).

    By default the slug is only derived while none exists, so a slug that was
    set once is never overwritten. With ``rederive_on_change`` the slug
    follows every change of ``source`` unless the caller sends one.
    """

    def derive_slug(draft: Draft) -> Draft:
        explicit = draft.data.get("slug") if "slug" in draft.provided else None
        if isinstance(explicit, str) and explicit.strip():
            # schema lowercases slugs on write
            return draft.with_values(slug=explicit.strip().lower())

        current = draft.data.get("slug")
        if draft.is_modified(source) and (rederive_on_change or not current):
            derived = slugify(draft.data.get(source))
        elif rederive_on_change and not current:
            derived = slugify(draft.data.get(source))
        else:
            return draft
        return draft.with_values(slug=derived) if derived else draft

    derive_slug.__name__ = f"derive_slug_from_{source}"
    return derive_slug


def count_words(text: str) -> int:
    # Splits on whitespace only; Arabic word boundaries are not considered.
    return len(_WHITESPACE_RUN.split(text))


def format_read_time(words: int) -> str:
    minutes = math.ceil(words / WORDS_PER_MINUTE)
    return f"{minutes} {READ_TIME_UNIT}"


def estimate_read_time(draft: Draft) -> Draft:
    if not draft.is_modified("content"):
        return draft
    content = draft.data.get("content")
    if not isinstance(content, str):
        return draft
    return draft.with_values(readTime=format_read_time(count_words(content)))


def stamp_published_at(draft: Draft) -> Draft:
    if not draft.is_modified("status") or draft.data.get("status") != "published":
        return draft
    if draft.data.get("publishedAt"):
        return draft
    return draft.with_values(publishedAt=draft.now)


BLOG_HOOKS: tuple[Hook, ...] = (slug_from("title"), estimate_read_time, stamp_published_at)
SERVICE_HOOKS: tuple[Hook, ...] = (slug_from("title"),)
CATEGORY_HOOKS: tuple[Hook, ...] = (slug_from("name"),)
FAQ_CATEGORY_HOOKS: tuple[Hook, ...] = (slug_from("name", rederive_on_change=True),)


def apply_hooks(
    hooks: Iterable[Hook],
    changes: Mapping[str, Any],
    previous: Mapping[str, Any] | None = None,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Run ``hooks`` in order over ``previous`` overlaid with ``changes``.

    Returns the full document to write.
    """
    base = dict(previous or {})
    draft = Draft(
        data={**base, **changes},
        provided=frozenset(changes),
        previous=previous,
        now=now or datetime.now(timezone.utc),
    )
    for hook in hooks:
        draft = hook(draft)
    return draft.data


__all__ = [
    "Draft",
    "Hook",
    "slug_from",
    "count_words",
    "format_read_time",
    "estimate_read_time",
    "stamp_published_at",
    "apply_hooks",
    "BLOG_HOOKS",
    "SERVICE_HOOKS",
    "CATEGORY_HOOKS",
    "FAQ_CATEGORY_HOOKS",
]
