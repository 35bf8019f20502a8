"""
JSON-file backed storage for knowledge items.

All items live in a single JSON document ({"items": [...]}) that is read
once when the store opens and rewritten after every change. Listing
supports the type, tag, search and sort options of FilterState.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
import json
import logging
from pathlib import Path
from typing import Any, Callable
import uuid

from ..exceptions import ItemNotFoundError, StoreError
from .types import SORT_OPTIONS, CreateKnowledgeItem, FilterState, KnowledgeItem
from .validation import parse_tags, validate_item

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset({"title", "content", "type", "tags", "source_url", "summary"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class KnowledgeStore:
    """Persists knowledge items to a JSON file.

    Attributes:
        path: Location of the JSON document
    """

    def __init__(self, path: Path, clock: Callable[[], datetime] = _utcnow):
        self.path = path
        self._clock = clock
        self._items: dict[str, KnowledgeItem] = self._load()

    def create(self, draft: CreateKnowledgeItem) -> KnowledgeItem:
        """Validate and persist a new item.

        Raises:
            ValidationError: If the draft has invalid fields
        """
        validate_item(draft.title, draft.content, draft.type, draft.source_url)
        now = self._clock().isoformat()
        item = KnowledgeItem(
            id=uuid.uuid4().hex,
            title=draft.title,
            content=draft.content,
            type=draft.type,
            tags=parse_tags(draft.tags),
            source_url=draft.source_url or None,
            summary=draft.summary or None,
            created_at=now,
            updated_at=now,
        )
        self._commit({**self._items, item.id: item})
        logger.info("Created knowledge item %s", item.id, extra={"item_type": item.type})
        return item

    def get(self, item_id: str) -> KnowledgeItem:
        try:
            return self._items[item_id]
        except KeyError:
            raise ItemNotFoundError(item_id) from None

    def update(self, item_id: str, **changes: Any) -> KnowledgeItem:
        """Apply field changes to an existing item.

        Raises:
            ItemNotFoundError: If no item has this id
            ValidationError: If the merged fields are invalid
            ValueError: If an unknown field is passed
        """
        current = self.get(item_id)
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown fields: {', '.join(sorted(unknown))}")
        if "tags" in changes:
            changes["tags"] = parse_tags(changes["tags"])
        updated = replace(current, **changes)
        validate_item(updated.title, updated.content, updated.type, updated.source_url)
        updated = replace(
            updated,
            source_url=updated.source_url or None,
            summary=updated.summary or None,
            updated_at=self._clock().isoformat(),
        )
        self._commit({**self._items, item_id: updated})
        logger.info("Updated knowledge item %s", item_id)
        return updated

    def delete(self, item_id: str) -> None:
        if item_id not in self._items:
            raise ItemNotFoundError(item_id)
        remaining = dict(self._items)
        del remaining[item_id]
        self._commit(remaining)
        logger.info("Deleted knowledge item %s", item_id)

    def list_items(self, filters: FilterState | None = None) -> list[KnowledgeItem]:
        """Return items matching the filters in the requested order."""
        filters = filters or FilterState()
        if filters.sort not in SORT_OPTIONS:
            raise ValueError(f"Unsupported sort option: {filters.sort}")

        items = list(self._items.values())
        if filters.type != "all":
            items = [item for item in items if item.type == filters.type]
        if filters.tags:
            wanted = set(filters.tags)
            items = [item for item in items if wanted.issubset(item.tags)]
        term = filters.search.strip().casefold()
        if term:
            items = [
                item
                for item in items
                if term in item.title.casefold() or term in item.content.casefold()
            ]
        return _sort_items(items, filters.sort)

    def all_tags(self) -> list[str]:
        """Return every distinct tag in use, sorted alphabetically."""
        tags: set[str] = set()
        for item in self._items.values():
            tags.update(item.tags)
        return sorted(tags)

    def _load(self) -> dict[str, KnowledgeItem]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            records = raw.get("items", []) if isinstance(raw, dict) else []
            items = [KnowledgeItem.from_dict(record) for record in records]
        except (OSError, ValueError, KeyError, AttributeError) as exc:
            raise StoreError(f"Cannot read knowledge store {self.path}: {exc}") from exc
        return {item.id: item for item in items}

    def _commit(self, items: dict[str, KnowledgeItem]) -> None:
        # In-memory state changes only once the file write has succeeded
        payload = {"items": [item.to_dict() for item in items.values()]}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        except OSError as exc:
            raise StoreError(f"Cannot write knowledge store {self.path}: {exc}") from exc
        self._items = items


def _sort_items(items: list[KnowledgeItem], sort: str) -> list[KnowledgeItem]:
    if sort == "recent":
        return sorted(items, key=lambda item: item.created_at, reverse=True)
    if sort == "oldest":
        return sorted(items, key=lambda item: item.created_at)
    return sorted(items, key=lambda item: item.title.casefold())
