"""
Recommendation Engine
Owns the catalog and users and serves the three recommendation methods
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .collaborative_filtering import CollaborativeFiltering
from .config import HYBRID_WEIGHTS
from .content_based import ContentBasedRecommender
from .hybrid_recommender import HybridRecommender
from .models import Item, User, index_by_id

logger = logging.getLogger(__name__)


class RecommendationEngine:
    """
    Facade over the content, collaborative and hybrid recommenders.

    All caches (content vectors, item-item similarities) are computed eagerly
    from the catalog and ratings given at construction and are read-only
    afterwards. Ratings added through rate() are visible to recommendation
    calls (an item the user just rated is excluded) but the caches only
    reflect them after rebuild().
    """

    def __init__(self, items: Iterable[Item], users: Iterable[User] = ()):
        self._items: Dict[int, Item] = index_by_id(items, 'item_id')
        self._users: Dict[int, User] = index_by_id(users, 'user_id')
        self.hybrid_model = self._fit_models()

    def _fit_models(self) -> HybridRecommender:
        items = list(self._items.values())
        users = list(self._users.values())
        logger.info("Fitting recommenders on %d items and %d users", len(items), len(users))

        content_model = ContentBasedRecommender().fit(items)
        cf_model = CollaborativeFiltering().fit(items, users)
        return HybridRecommender().fit(cf_model, content_model)

    def rebuild(self):
        """
        Recompute every cache from the current catalog and ratings.

        The new models are fully built before being swapped in with a single
        assignment, so readers see either the old or the new caches.
        """
        self.hybrid_model = self._fit_models()

    @property
    def content_model(self) -> ContentBasedRecommender:
        return self.hybrid_model.content_model

    @property
    def cf_model(self) -> CollaborativeFiltering:
        return self.hybrid_model.cf_model

    @property
    def items(self) -> List[Item]:
        return list(self._items.values())

    @property
    def user_ids(self) -> List[int]:
        return list(self._users)

    def get_item(self, item_id: int) -> Optional[Item]:
        return self._items.get(item_id)

    def get_user(self, user_id: int) -> Optional[User]:
        return self._users.get(user_id)

    def rate(self, user_id: int, item_id: int, rating: float) -> User:
        """Record a rating, creating the user on first use. Caches are not refreshed."""
        if item_id not in self._items:
            raise ValueError(f"Unknown item: {item_id}")
        user = self._users.get(user_id)
        if user is None:
            user = self._users[user_id] = User(user_id)
        user.rate(item_id, rating)
        return user

    def recommend_content(self, user_id: int, k: int) -> List[Tuple[int, float]]:
        """Top k unrated items by similarity to the user's content profile."""
        user = self._users.get(user_id)
        if user is None:
            _check_k(k)
            return []
        return self.content_model.recommend(user.ratings, k)

    def recommend_collaborative(self, user_id: int, k: int) -> List[Tuple[int, float]]:
        """Top k unrated items by item-item CF predicted score."""
        user = self._users.get(user_id)
        if user is None:
            _check_k(k)
            return []
        return self.cf_model.recommend(user.ratings, k)

    def recommend_hybrid(self,
                         user_id: int,
                         k: int,
                         content_weight: float = HYBRID_WEIGHTS['content']) -> List[Tuple[int, float]]:
        """Top k unrated items by weighted rank fusion of both recommenders."""
        user = self._users.get(user_id)
        if user is None:
            _check_k(k)
            return []
        return self.hybrid_model.recommend(user.ratings, k, content_weight)


def _check_k(k: int):
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
