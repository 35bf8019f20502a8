"""Remote AI summarization and tagging."""

from .client import AIClient, Notifier

__all__ = ["AIClient", "Notifier"]
