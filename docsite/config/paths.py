"""Path and URL predicates shared by the models and the validator."""

from __future__ import annotations

import re
from urllib.parse import urlsplit

EXTERNAL_SCHEMES = frozenset({"http", "https", "mailto"})
_WHITESPACE = re.compile(r"\s")


def normalize_page_path(path: str) -> str:
    """Return ``path`` with a single leading slash and no query or fragment."""
    trimmed = path.strip().split("?", 1)[0].split("#", 1)[0]
    return "/" + trimmed.lstrip("/")


def is_absolute_url(value: str) -> bool:
    """Return ``True`` for absolute ``http(s)`` URLs and ``mailto`` links."""
    if _WHITESPACE.search(value):
        return False
    parts = urlsplit(value)
    if parts.scheme not in EXTERNAL_SCHEMES:
        return False
    if parts.scheme == "mailto":
        return bool(parts.path)
    return bool(parts.netloc)


def is_internal_path(value: str) -> bool:
    """Return ``True`` for site-relative paths such as ``/guide/install#tips``."""
    if not value.startswith("/") or value.startswith("//"):
        return False
    if _WHITESPACE.search(value):
        return False
    return "//" not in value.split("#", 1)[0]


def is_valid_target(value: str, *, allow_external: bool = True) -> bool:
    """Return ``True`` when ``value`` is an internal path or, if allowed, a URL."""
    if is_internal_path(value):
        return True
    return allow_external and is_absolute_url(value)


def is_valid_prefix(value: str) -> bool:
    """Return ``True`` for hierarchical path prefixes (``/`` on both ends)."""
    return is_internal_path(value) and value.endswith("/") and "#" not in value


__all__ = [
    "EXTERNAL_SCHEMES",
    "is_absolute_url",
    "is_internal_path",
    "is_valid_prefix",
    "is_valid_target",
    "normalize_page_path",
]
