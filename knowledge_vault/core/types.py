"""
Core data types for knowledge_vault.

This module defines the data structures shared by the store, the capture
workflow and the AI client:
- KnowledgeItem: A persisted note, link or insight
- CreateKnowledgeItem: Draft fields submitted for a new item
- FilterState: Search, type, tag and sort options for listing items
- AutoTagResult: Tag suggestions tagged with their origin
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

KNOWLEDGE_TYPES = ("note", "link", "insight")
SORT_OPTIONS = ("recent", "oldest", "title")


@dataclass
class KnowledgeItem:
    """A user-authored knowledge record.

    Attributes:
        id: Unique identifier (uuid4 hex string)
        title: Short descriptive title
        content: Free-form body text
        type: One of "note", "link" or "insight"
        tags: Lowercase tag labels
        source_url: Optional origin URL for links
        summary: Optional AI-generated summary
        created_at: ISO 8601 UTC creation timestamp
        updated_at: ISO 8601 UTC timestamp of the last change
    """
    id: str
    title: str
    content: str
    type: str
    tags: list[str] = field(default_factory=list)
    source_url: str | None = None
    summary: str | None = None
    created_at: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "KnowledgeItem":
        return cls(
            id=str(data["id"]),
            title=str(data.get("title") or ""),
            content=str(data.get("content") or ""),
            type=str(data.get("type") or "note"),
            tags=[str(tag) for tag in data.get("tags") or []],
            source_url=data.get("source_url") or None,
            summary=data.get("summary") or None,
            created_at=str(data.get("created_at") or ""),
            updated_at=str(data.get("updated_at") or ""),
        )


@dataclass
class CreateKnowledgeItem:
    """Fields accepted when creating a knowledge item.

    `tags` may be given as a list or as the comma-separated string typed in
    the capture form; the capture workflow normalizes it.
    """
    title: str
    content: str
    type: str = "note"
    tags: list[str] | str | None = None
    source_url: str | None = None
    summary: str | None = None


@dataclass
class FilterState:
    """Listing options for the knowledge store.

    Attributes:
        search: Case-insensitive substring matched against title or content
        type: Item type to keep, or "all"
        tags: Tags every returned item must carry
        sort: "recent", "oldest" or "title"
    """
    search: str = ""
    type: str = "all"
    tags: list[str] = field(default_factory=list)
    sort: str = "recent"


@dataclass(frozen=True)
class AutoTagResult:
    """Tag suggestions plus a flag marking locally extracted tags.

    `fallback` is True only when the remote service was unavailable and the
    tags came from the local keyword extractor.
    """
    tags: list[str]
    fallback: bool
