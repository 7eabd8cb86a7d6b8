"""
Collaborative Filtering Recommender
Item-based CF over explicit ratings
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from scipy.sparse import csr_matrix
from sklearn.metrics.pairwise import cosine_similarity

from .config import N_RECOMMENDATIONS
from .models import Item, User
from .similarity import invert_ratings
from .utils import top_k

logger = logging.getLogger(__name__)


def build_rating_matrix(items: Sequence[Item],
                        users: Sequence[User]) -> Tuple[csr_matrix, Dict[int, int]]:
    """
    Build a sparse user-item rating matrix.

    Columns follow catalog order; ratings for items outside the catalog are
    ignored.

    Returns:
        Tuple of (matrix of shape (n_users, n_items), item_id -> column index)
    """
    item_id_map = {item.item_id: idx for idx, item in enumerate(items)}
    user_index = {user.user_id: idx for idx, user in enumerate(users)}
    item_ratings = invert_ratings({user.user_id: user.ratings for user in users})

    rows, cols, values = [], [], []
    for item_id, user_ratings in item_ratings.items():
        if item_id not in item_id_map:
            continue
        for user_id, rating in user_ratings.items():
            rows.append(user_index[user_id])
            cols.append(item_id_map[item_id])
            values.append(rating)

    matrix = csr_matrix(
        (np.asarray(values, dtype=float),
         (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=(len(users), len(items))
    )
    return matrix, item_id_map


def build_item_similarities(items: Sequence[Item],
                            users: Sequence[User]) -> Dict[int, Dict[int, float]]:
    """
    Compute item-item rating cosine similarity for every ordered pair of distinct items.

    Each item is represented by its column of ratings (one entry per user).
    Items nobody rated have a zero column and get similarity 0 against
    everything. Both directions are stored for O(1) lookup.

    Args:
        items: Full catalog
        users: Users whose ratings form the snapshot

    Returns:
        Dictionary mapping item_id to {other_item_id: similarity}
    """
    item_ids = [item.item_id for item in items]
    if not item_ids:
        return {}

    matrix, _ = build_rating_matrix(items, users)
    n_cells = matrix.shape[0] * matrix.shape[1]
    if n_cells:
        logger.info("Built rating matrix: %s, sparsity %.4f", matrix.shape, 1 - matrix.nnz / n_cells)

    if matrix.shape[0] == 0:
        similarity = np.zeros((len(item_ids), len(item_ids)))
    else:
        similarity = cosine_similarity(matrix.T)
    np.clip(similarity, -1.0, 1.0, out=similarity)

    return {
        item_id: {
            other_id: float(similarity[i, j])
            for j, other_id in enumerate(item_ids)
            if j != i
        }
        for i, item_id in enumerate(item_ids)
    }


class CollaborativeFiltering:
    """
    Item-based Collaborative Filtering Recommender.

    Predicts a user's rating for an unseen item as the similarity-weighted
    average of the ratings they gave to other items.
    """

    def __init__(self):
        # Model components
        self.item_ids: Optional[List[int]] = None
        self.item_similarity: Optional[Dict[int, Dict[int, float]]] = None

        self.is_fitted = False

    def fit(self, items: Sequence[Item], users: Sequence[User]) -> 'CollaborativeFiltering':
        """
        Fit the collaborative filtering model.

        Args:
            items: Full item catalog
            users: Users with their ratings at fit time

        Returns:
            self for method chaining
        """
        self.item_ids = [item.item_id for item in items]
        self.item_similarity = build_item_similarities(items, users)
        self.is_fitted = True
        return self

    def predict_scores(self, ratings: Mapping[int, float]) -> Dict[int, float]:
        """
        Predicted scores for every unrated item reachable from the user's ratings.

        score = sum(sim * rating) / sum(|sim|). A zero weight sum falls back
        to a divisor of 1.0, i.e. the raw accumulated score. Negative
        similarities can push predictions down; nothing is clamped.
        """
        scores: Dict[int, float] = {}
        weights: Dict[int, float] = {}

        for seen_id, rating in ratings.items():
            for candidate, sim in self.item_similarity.get(seen_id, {}).items():
                if candidate in ratings:
                    continue
                scores[candidate] = scores.get(candidate, 0.0) + sim * rating
                weights[candidate] = weights.get(candidate, 0.0) + abs(sim)

        return {
            candidate: score / (weights[candidate] or 1.0)
            for candidate, score in scores.items()
        }

    def recommend(self,
                  ratings: Mapping[int, float],
                  n_recommendations: int = N_RECOMMENDATIONS) -> List[Tuple[int, float]]:
        """
        Generate recommendations for a user.

        Args:
            ratings: The user's ratings (item_id -> rating)
            n_recommendations: Number of recommendations to return

        Returns:
            List of (item_id, predicted score) tuples
        """
        if not self.is_fitted:
            raise ValueError("Model not fitted. Call fit() first.")
        if n_recommendations < 0:
            raise ValueError(f"n_recommendations must be non-negative, got {n_recommendations}")

        if not ratings:
            return []

        return top_k(self.predict_scores(ratings), n_recommendations)

    def get_similar_items(self, item_id: int, n: int = 10) -> List[Tuple[int, float]]:
        """
        Get items with the most similar rating pattern to a given item.

        Args:
            item_id: Item ID
            n: Number of similar items to return

        Returns:
            List of (item_id, similarity) tuples
        """
        if self.item_similarity is None:
            raise ValueError("Model not fitted. Call fit() first.")

        if item_id not in self.item_similarity:
            return []

        return top_k(self.item_similarity[item_id], n)
