"""
Capture workflow for new knowledge items.

Ties the store and the AI client together the way the capture form does:
tags typed as a comma-separated string are normalized, and long items
without a summary get one from the AI service before they are saved.
"""

from __future__ import annotations

from dataclasses import replace
import logging

from .ai.client import AIClient
from .config import AppConfig
from .core.store import KnowledgeStore
from .core.types import AutoTagResult, CreateKnowledgeItem, KnowledgeItem
from .core.validation import parse_tags, validate_item

logger = logging.getLogger(__name__)


async def suggest_tags(client: AIClient, title: str, content: str) -> AutoTagResult:
    """Suggest tags for a draft; blank drafts get no suggestions and no request."""
    if not title.strip() or not content.strip():
        return AutoTagResult(tags=[], fallback=False)
    return await client.auto_tag(title, content)


async def capture_item(
    store: KnowledgeStore,
    client: AIClient | None,
    draft: CreateKnowledgeItem,
    cfg: AppConfig,
) -> KnowledgeItem:
    """Normalize, optionally summarize and persist a draft item.

    A summary is requested only when auto-summarize is enabled, the draft
    has no summary yet and its content is longer than the configured
    minimum. A failed summary never blocks saving.

    Raises:
        ValidationError: If the draft has invalid fields
    """
    # Invalid drafts are rejected before any remote call
    validate_item(draft.title, draft.content, draft.type, draft.source_url)
    draft = replace(draft, tags=parse_tags(draft.tags))

    if (
        client is not None
        and cfg.summary.auto_summarize
        and not draft.summary
        and len(draft.content) > cfg.summary.min_content_chars
    ):
        summary = await client.summarize(draft.title, draft.content)
        if summary is None:
            logger.info("Saving item without summary")
        draft = replace(draft, summary=summary)

    return store.create(draft)
