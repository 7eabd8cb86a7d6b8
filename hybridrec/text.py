"""
Text normalization for content vectors
"""

import re
from typing import List, Optional

from .models import Item

_NON_TERM_RE = re.compile(r'[^a-z0-9 ]')


def tokenize(text: Optional[str]) -> List[str]:
    """
    Split free text into lower-case alphanumeric terms.

    Every character outside [a-z0-9 ] (after lower-casing) becomes a space,
    the result is split on whitespace and single-character tokens are dropped.
    """
    if not text:
        return []
    cleaned = _NON_TERM_RE.sub(' ', text.lower())
    return [token for token in cleaned.split() if len(token) > 1]


def item_terms(item: Item) -> List[str]:
    """Description tokens followed by each tag once, in a stable order."""
    return tokenize(item.description) + sorted(item.tags)
