"""
Hybrid Recommender
Fuses Collaborative Filtering and Content-Based rankings
"""

import logging
from typing import Dict, List, Mapping, Optional, Tuple

from .config import HYBRID_WEIGHTS, HYBRID_MIN_POOL, HYBRID_POOL_FACTOR, N_RECOMMENDATIONS
from .collaborative_filtering import CollaborativeFiltering
from .content_based import ContentBasedRecommender
from .utils import pool_size, top_k

logger = logging.getLogger(__name__)


class HybridRecommender:
    """
    Hybrid Recommender System.

    Combines the two recommenders by rank position rather than raw score:
    content similarities and predicted ratings live on different scales, so
    each list is converted to Borda-style points before weighting.
    """

    def __init__(self,
                 content_weight: float = HYBRID_WEIGHTS['content'],
                 min_pool: int = HYBRID_MIN_POOL,
                 pool_factor: int = HYBRID_POOL_FACTOR):
        """
        Initialize the hybrid recommender.

        Args:
            content_weight: Default weight for content-based ranks (CF gets 1 - weight)
            min_pool: Minimum candidates fetched from each recommender
            pool_factor: Candidates fetched per requested recommendation
        """
        self.content_weight = _check_weight(content_weight)
        self.min_pool = min_pool
        self.pool_factor = pool_factor

        # Component models
        self.cf_model: Optional[CollaborativeFiltering] = None
        self.content_model: Optional[ContentBasedRecommender] = None

        self.is_fitted = False

    def fit(self,
            cf_model: CollaborativeFiltering,
            content_model: ContentBasedRecommender) -> 'HybridRecommender':
        """
        Fit the hybrid model with pre-trained component models.

        Args:
            cf_model: Trained collaborative filtering model
            content_model: Trained content-based model

        Returns:
            self for method chaining
        """
        if not (cf_model.is_fitted and content_model.is_fitted):
            raise ValueError("Component models must be fitted before the hybrid model.")

        self.cf_model = cf_model
        self.content_model = content_model
        self.is_fitted = True
        return self

    def recommend(self,
                  ratings: Mapping[int, float],
                  n_recommendations: int = N_RECOMMENDATIONS,
                  content_weight: Optional[float] = None) -> List[Tuple[int, float]]:
        """
        Generate hybrid recommendations for a user.

        Args:
            ratings: The user's ratings (item_id -> rating)
            n_recommendations: Number of recommendations to return
            content_weight: Weight in [0, 1] for the content list; defaults
                to the weight given at construction

        Returns:
            List of (item_id, fused rank score) tuples
        """
        if not self.is_fitted:
            raise ValueError("Model not fitted. Call fit() first.")
        if n_recommendations < 0:
            raise ValueError(f"n_recommendations must be non-negative, got {n_recommendations}")

        weight = self.content_weight if content_weight is None else _check_weight(content_weight)

        n_fetch = pool_size(n_recommendations, self.min_pool, self.pool_factor)
        content_recs = self.content_model.recommend(ratings, n_fetch)
        cf_recs = self.cf_model.recommend(ratings, n_fetch)

        combined: Dict[int, float] = {}
        _add_rank_scores(combined, content_recs, weight)
        _add_rank_scores(combined, cf_recs, 1.0 - weight)
        logger.debug("Fused %d content and %d CF candidates into %d items",
                     len(content_recs), len(cf_recs), len(combined))

        return top_k(combined, n_recommendations)


def _add_rank_scores(combined: Dict[int, float],
                     recommendations: List[Tuple[int, float]],
                     weight: float):
    # position i in a list of length L is worth (L - i) points
    length = len(recommendations)
    for position, (item_id, _) in enumerate(recommendations):
        combined[item_id] = combined.get(item_id, 0.0) + (length - position) * weight


def _check_weight(weight: float) -> float:
    if not 0.0 <= weight <= 1.0:
        raise ValueError(f"content_weight must be in [0, 1], got {weight}")
    return float(weight)
