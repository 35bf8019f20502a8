"""Field validation and tag helpers for knowledge items."""

from __future__ import annotations

from urllib.parse import urlparse

from ..exceptions import ValidationError
from .types import KNOWLEDGE_TYPES

MAX_TITLE_CHARS = 200
MAX_CONTENT_CHARS = 10000


def validate_item(
    title: str,
    content: str,
    type: str,
    source_url: str | None = None,
) -> None:
    """Check item fields, raising ValidationError listing every problem.

    Args:
        title: Required, at most 200 characters
        content: Required, at most 10000 characters
        type: One of KNOWLEDGE_TYPES
        source_url: Empty/None, or an absolute http(s) URL

    Raises:
        ValidationError: If any field is invalid
    """
    errors: dict[str, str] = {}

    if not title:
        errors["title"] = "Title is required"
    elif len(title) > MAX_TITLE_CHARS:
        errors["title"] = "Title too long"

    if not content:
        errors["content"] = "Content is required"
    elif len(content) > MAX_CONTENT_CHARS:
        errors["content"] = "Content too long"

    if type not in KNOWLEDGE_TYPES:
        errors["type"] = f"Type must be one of: {', '.join(KNOWLEDGE_TYPES)}"

    if source_url and not _is_valid_url(source_url):
        errors["source_url"] = "Invalid URL"

    if errors:
        raise ValidationError(errors)


def parse_tags(raw: str | list[str] | None) -> list[str]:
    """Normalize comma-separated (or listed) tags to unique lowercase labels."""
    if not raw:
        return []
    parts = raw.split(",") if isinstance(raw, str) else raw
    tags: list[str] = []
    for part in parts:
        tag = str(part).strip().lower()
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def merge_tag(tags: list[str], tag: str) -> list[str]:
    """Return tags with a suggested tag appended when not already present."""
    if tag in tags:
        return list(tags)
    return [*tags, tag]


def _is_valid_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
