"""
Similarity functions over sparse dict vectors
"""

import math
from typing import Dict, Hashable, Mapping, Optional


def term_cosine(a: Optional[Mapping[str, float]],
                b: Optional[Mapping[str, float]]) -> float:
    """
    Cosine similarity of two L2-normalized term vectors.

    Both inputs are already unit length, so this is just the dot product.
    Iterates over the smaller vector; missing terms contribute zero.
    """
    if not a or not b:
        return 0.0
    if len(a) > len(b):
        a, b = b, a
    dot = sum(weight * b.get(term, 0.0) for term, weight in a.items())
    return max(-1.0, min(1.0, dot))


def rating_cosine(a: Mapping[Hashable, float], b: Mapping[Hashable, float]) -> float:
    """
    Plain cosine similarity between two sparse rating vectors (user_id -> rating).

    Ratings are not mean-centered. Returns 0.0 when either vector is empty or
    has zero norm.
    """
    if not a or not b:
        return 0.0

    small, large = (a, b) if len(a) <= len(b) else (b, a)
    dot = sum(value * large.get(key, 0.0) for key, value in small.items())

    norm_a = math.sqrt(sum(v * v for v in a.values()))
    norm_b = math.sqrt(sum(v * v for v in b.values()))
    if norm_a == 0 or norm_b == 0:
        return 0.0

    return max(-1.0, min(1.0, dot / (norm_a * norm_b)))


def invert_ratings(user_ratings: Mapping[int, Mapping[int, float]]) -> Dict[int, Dict[int, float]]:
    """Turn user_id -> {item_id: rating} into item_id -> {user_id: rating}."""
    item_ratings: Dict[int, Dict[int, float]] = {}
    for user_id, ratings in user_ratings.items():
        for item_id, rating in ratings.items():
            item_ratings.setdefault(item_id, {})[user_id] = rating
    return item_ratings
