"""
Content-Based Recommender
Recommends items whose TF-IDF content vector matches the user's taste profile
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from sklearn.feature_extraction.text import TfidfVectorizer

from .config import N_RECOMMENDATIONS, PIVOT_RATING
from .models import Item
from .similarity import term_cosine
from .text import item_terms
from .utils import top_k

logger = logging.getLogger(__name__)


def _identity(terms):
    return terms


def build_content_vectors(items: Sequence[Item]) -> Dict[int, Dict[str, float]]:
    """
    Compute one L2-normalized TF-IDF vector per item.

    The scikit-learn vectorizer with smooth_idf uses
    idf(t) = ln((N + 1) / (1 + df(t))) + 1, so terms present in every item
    still carry weight. Items without any term get an empty vector.

    Args:
        items: Full catalog

    Returns:
        Dictionary mapping item_id to {term: weight}
    """
    documents = [item_terms(item) for item in items]

    # TfidfVectorizer refuses an empty vocabulary
    if not any(documents):
        logger.info("No terms in catalog of %d items; all content vectors are empty", len(items))
        return {item.item_id: {} for item in items}

    vectorizer = TfidfVectorizer(
        analyzer=_identity,
        lowercase=False,
        smooth_idf=True,
        sublinear_tf=False,
        norm='l2',
    )
    matrix = vectorizer.fit_transform(documents).tocsr()
    terms = vectorizer.get_feature_names_out()
    logger.info("TF-IDF matrix: %d items x %d terms", matrix.shape[0], matrix.shape[1])

    vectors = {}
    for row, item in enumerate(items):
        start, end = matrix.indptr[row], matrix.indptr[row + 1]
        vectors[item.item_id] = {
            str(terms[col]): float(weight)
            for col, weight in zip(matrix.indices[start:end], matrix.data[start:end])
        }
    return vectors


class ContentBasedRecommender:
    """
    Content-Based Recommender System.

    Builds a taste profile from the content vectors of rated items, each
    weighted by how far its rating sits from the neutral pivot, and ranks
    unrated items by similarity to that profile.
    """

    def __init__(self, pivot_rating: float = PIVOT_RATING):
        """
        Initialize the content-based recommender.

        Args:
            pivot_rating: Neutral rating; higher ratings count as positive signal
        """
        self.pivot_rating = pivot_rating

        # Model components
        self.item_ids: Optional[List[int]] = None  # Catalog order
        self.content_vectors: Optional[Dict[int, Dict[str, float]]] = None

        self.is_fitted = False

    def fit(self, items: Sequence[Item]) -> 'ContentBasedRecommender':
        """
        Fit the content-based recommender.

        Args:
            items: Full item catalog

        Returns:
            self for method chaining
        """
        self.item_ids = [item.item_id for item in items]
        self.content_vectors = build_content_vectors(items)
        self.is_fitted = True
        return self

    def get_user_profile(self, ratings: Mapping[int, float]) -> Dict[str, float]:
        """
        Weighted sum of rated items' content vectors.

        Each vector is scaled by (rating - pivot) and the sum is divided by
        the total |rating - pivot|. When every rating equals the pivot that
        total is zero and the raw accumulation is returned unnormalized.
        """
        profile: Dict[str, float] = {}
        norm_factor = 0.0

        for item_id, rating in ratings.items():
            vector = self.content_vectors.get(item_id)
            if vector is None:
                continue
            offset = rating - self.pivot_rating
            for term, weight in vector.items():
                profile[term] = profile.get(term, 0.0) + weight * offset
            norm_factor += abs(offset)

        if norm_factor > 0:
            profile = {term: weight / norm_factor for term, weight in profile.items()}

        return profile

    def recommend(self,
                  ratings: Mapping[int, float],
                  n_recommendations: int = N_RECOMMENDATIONS) -> List[Tuple[int, float]]:
        """
        Generate recommendations for a user.

        Args:
            ratings: The user's ratings (item_id -> rating)
            n_recommendations: Number of recommendations to return

        Returns:
            List of (item_id, score) tuples
        """
        if not self.is_fitted:
            raise ValueError("Model not fitted. Call fit() first.")
        if n_recommendations < 0:
            raise ValueError(f"n_recommendations must be non-negative, got {n_recommendations}")

        if not ratings:
            return []

        profile = self.get_user_profile(ratings)
        scores = {
            item_id: term_cosine(profile, self.content_vectors[item_id])
            for item_id in self.item_ids
            if item_id not in ratings
        }
        return top_k(scores, n_recommendations)

    def recommend_similar_items(self,
                                item_id: int,
                                n: int = N_RECOMMENDATIONS) -> List[Tuple[int, float]]:
        """
        Get items with the most similar content to a given item.

        Args:
            item_id: Item ID
            n: Number of similar items to return

        Returns:
            List of (item_id, similarity) tuples
        """
        if not self.is_fitted:
            raise ValueError("Model not fitted. Call fit() first.")
        if item_id not in self.content_vectors:
            return []

        vector = self.content_vectors[item_id]
        scores = {
            other: term_cosine(vector, self.content_vectors[other])
            for other in self.item_ids
            if other != item_id
        }
        return top_k(scores, n)

    def get_content_vector(self, item_id: int) -> Optional[Dict[str, float]]:
        """Get the TF-IDF vector for an item."""
        if self.content_vectors is None:
            return None
        return self.content_vectors.get(item_id)
