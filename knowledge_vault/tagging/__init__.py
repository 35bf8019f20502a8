"""Offline tag extraction."""

from .extractor import DEFAULT_MAX_TAGS, STOPWORDS, extract_tags

__all__ = ["extract_tags", "STOPWORDS", "DEFAULT_MAX_TAGS"]
