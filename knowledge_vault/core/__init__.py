"""
Core domain models and storage.

This package contains the knowledge item types, field validation and
the JSON-file backed store.
"""

from .store import KnowledgeStore
from .types import (
    KNOWLEDGE_TYPES,
    SORT_OPTIONS,
    AutoTagResult,
    CreateKnowledgeItem,
    FilterState,
    KnowledgeItem,
)
from .validation import merge_tag, parse_tags, validate_item

__all__ = [
    "KNOWLEDGE_TYPES",
    "SORT_OPTIONS",
    "AutoTagResult",
    "CreateKnowledgeItem",
    "FilterState",
    "KnowledgeItem",
    "KnowledgeStore",
    "merge_tag",
    "parse_tags",
    "validate_item",
]
