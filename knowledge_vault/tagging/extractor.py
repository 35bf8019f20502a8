"""
Local keyword extraction used for tag suggestions.

This is the offline substitute for the remote auto-tag action. It strips
URLs and punctuation, drops stopwords and short words, and ranks the
remaining words by frequency. The function is pure and deterministic.
"""

from __future__ import annotations

from collections import Counter
import re

DEFAULT_MAX_TAGS = 6
MIN_TAG_LENGTH = 3

STOPWORDS = frozenset(
    {
        "the", "and", "a", "an", "of", "to", "in", "for", "on", "with",
        "is", "are", "was", "were", "be", "by", "this", "that", "it", "as",
        "at", "from", "or", "we", "you", "your", "i", "my", "me", "our",
        "they", "their", "but", "not", "have", "has", "had", "can", "will",
        "would", "should", "could",
    }
)

_URL_RE = re.compile(r"https?://\S+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9\s]")


def extract_tags(text: str | None, max_tags: int = DEFAULT_MAX_TAGS) -> list[str]:
    """Extract candidate tags from free-form text.

    URLs are removed before punctuation so that their host and path
    segments never surface as words. Accented and other non-ASCII letters
    are discarded along with punctuation.

    Args:
        text: Raw text, usually a title and content joined together
        max_tags: Maximum number of tags to return; negative or non-numeric values count as 0

    Returns:
        Lowercase alphanumeric tags ordered by descending frequency, with
        equally frequent words kept in the order they first appear

    Examples:
        >>> extract_tags("react react hooks hooks hooks")
        ['hooks', 'react']
    """
    try:
        limit = max(0, int(max_tags))
    except (TypeError, ValueError, OverflowError):
        limit = 0
    if not text or limit == 0:
        return []

    counts = Counter(_tokenize(text))
    # most_common() sorts stably, so ties keep first-seen order
    return [word for word, _ in counts.most_common(limit)]


def _tokenize(text: str) -> list[str]:
    cleaned = _URL_RE.sub(" ", text.lower())
    cleaned = _NON_ALNUM_RE.sub(" ", cleaned)
    return [
        word
        for word in cleaned.split()
        if len(word) >= MIN_TAG_LENGTH and word not in STOPWORDS
    ]
