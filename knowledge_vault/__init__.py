"""
Knowledge Vault - personal knowledge capture with AI-assisted tagging.

This package stores short notes, links and insights, lets you search and
filter them by type and tag, and suggests tags and summaries through a
remote AI function. Tag suggestions fall back to a local keyword
extractor whenever the remote service is unavailable.

Main entry point is the CLI via the `knowledge-vault` command.

Example:
    $ knowledge-vault suggest --title "React Hooks" --content "..."
"""

__all__ = [
    "__version__",
    "AIClient",
    "AutoTagResult",
    "KnowledgeStore",
    "extract_tags",
]
__version__ = "0.1.0"

from .ai.client import AIClient
from .core.store import KnowledgeStore
from .core.types import AutoTagResult
from .tagging.extractor import extract_tags
