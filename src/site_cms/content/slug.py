from __future__ import annotations

import re

# Arabic letters hamza..yeh; diacritics and Arabic punctuation are dropped
_DISALLOWED = re.compile(r"[^\wء-ي\s-]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(text: str | None) -> str:
    """Derive a lowercase, URL-safe slug from a display title.

    Arabic letters are kept verbatim (no transliteration), so
    ``slugify("دليل العزل الحراري")`` is ``"دليل-العزل-الحراري"``.
    Deriving a slug from an existing slug returns it unchanged. Uniqueness
    is not checked here; the unique index on ``slug`` does that.
    """
    if not text:
        return ""
    slug = _DISALLOWED.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


__all__ = ["slugify"]
