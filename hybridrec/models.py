"""
Catalog and user records shared by all recommenders
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional

from .config import RATING_MIN, RATING_MAX


@dataclass(frozen=True)
class Item:
    """
    A catalog entry.

    The description is lower-cased and tags are lower-cased into a frozenset
    on construction, so two items built from the same raw data always compare
    equal. The title is for display only and never used in scoring.
    """

    item_id: int
    title: str = ''
    description: Optional[str] = ''
    tags: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, 'description', (self.description or '').lower())
        tags = (self.tags,) if isinstance(self.tags, str) else (self.tags or ())
        object.__setattr__(self, 'tags', frozenset(t.strip().lower() for t in tags if t.strip()))

    def __str__(self):
        return f"{self.item_id}: {self.title}"


@dataclass
class User:
    """A user and their ratings (item_id -> rating)."""

    user_id: int
    ratings: Dict[int, float] = field(default_factory=dict)

    def __post_init__(self):
        ratings, self.ratings = self.ratings, {}
        for item_id, rating in ratings.items():
            self.rate(item_id, rating)

    def rate(self, item_id: int, rating: float):
        """Add or overwrite the rating for one item."""
        rating = float(rating)
        if not RATING_MIN <= rating <= RATING_MAX:
            raise ValueError(
                f"Rating {rating} for item {item_id} outside [{RATING_MIN}, {RATING_MAX}]"
            )
        self.ratings[item_id] = rating


def index_by_id(records: Iterable, attr: str) -> Dict:
    """Map records by an id attribute, rejecting duplicates."""
    index = {}
    for record in records:
        key = getattr(record, attr)
        if key in index:
            raise ValueError(f"Duplicate {attr}: {key}")
        index[key] = record
    return index
