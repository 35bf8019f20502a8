"""Exception types raised by the knowledge store and item validation."""

from __future__ import annotations


class KnowledgeVaultError(Exception):
    """Base class for errors raised by knowledge_vault."""


class ValidationError(KnowledgeVaultError):
    """Raised when a knowledge item fails field validation.

    Attributes:
        errors: Mapping of field name to a human-readable message
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        detail = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"Invalid knowledge item ({detail})")


class ItemNotFoundError(KnowledgeVaultError):
    """Raised when an item id does not exist in the store."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(f"Knowledge item not found: {item_id}")


class StoreError(KnowledgeVaultError):
    """Raised when the backing store file cannot be read or written."""
