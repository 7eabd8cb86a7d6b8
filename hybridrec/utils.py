"""
Utility functions for the Hybrid Recommendation System
Includes top-k selection and evaluation metrics
"""

import heapq
import logging
from typing import Callable, Dict, Iterable, List, Mapping, Set, Tuple

import numpy as np

logger = logging.getLogger(__name__)


# =============================================================================
# SELECTION
# =============================================================================

def top_k(scores: Mapping[int, float], k: int) -> List[Tuple[int, float]]:
    """
    Select the k highest-scoring items.

    Uses a bounded heap (heapq.nlargest keeps a min-heap of size k), so the
    cost is O(n log k). Equal scores are ordered by ascending item id.

    Args:
        scores: Mapping from item ID to score
        k: Number of items to keep

    Returns:
        List of (item_id, score) tuples, highest score first
    """
    if k < 0:
        raise ValueError(f"k must be non-negative, got {k}")
    if k == 0:
        return []
    return heapq.nlargest(k, scores.items(), key=lambda entry: (entry[1], -entry[0]))


def pool_size(n: int, min_pool: int, factor: int) -> int:
    """Size of the candidate pool fetched before fusing ranked lists."""
    return max(min_pool, factor * n)


# =============================================================================
# EVALUATION METRICS
# =============================================================================

def precision_at_k(recommended: List[int], relevant: Set[int], k: int) -> float:
    """Fraction of the top k recommendations that are relevant."""
    if k <= 0:
        return 0.0
    return len(set(recommended[:k]) & relevant) / k


def recall_at_k(recommended: List[int], relevant: Set[int], k: int) -> float:
    """Fraction of relevant items found in the top k recommendations."""
    if not relevant:
        return 0.0
    return len(set(recommended[:k]) & relevant) / len(relevant)


def ndcg_at_k(recommended: List[int], relevant: Set[int], k: int) -> float:
    """
    Normalized Discounted Cumulative Gain at K with binary relevance.

    Args:
        recommended: Recommended item IDs, best first
        relevant: Set of relevant (ground truth) item IDs
        k: Cut-off rank

    Returns:
        NDCG@K in [0, 1]
    """
    dcg = sum(
        1.0 / np.log2(rank + 2)
        for rank, item_id in enumerate(recommended[:k])
        if item_id in relevant
    )
    idcg = sum(1.0 / np.log2(rank + 2) for rank in range(min(len(relevant), k)))
    return float(dcg / idcg) if idcg > 0 else 0.0


def hit_rate_at_k(recommended: List[int], relevant: Set[int], k: int) -> float:
    """1.0 if any relevant item is in the top k, else 0.0."""
    return 1.0 if set(recommended[:k]) & relevant else 0.0


def coverage(all_recommendations: Iterable[List[int]], all_items: Set[int]) -> float:
    """Fraction of the catalog that appears in at least one recommendation list."""
    if not all_items:
        return 0.0
    recommended = set()
    for recs in all_recommendations:
        recommended.update(recs)
    return len(recommended & all_items) / len(all_items)


def evaluate_recommender(recommend_fn: Callable[[int, int], List[Tuple[int, float]]],
                         relevant_by_user: Dict[int, Set[int]],
                         k: int = 5) -> Dict[str, float]:
    """
    Average ranking metrics over users.

    Args:
        recommend_fn: Callable (user_id, k) -> list of (item_id, score)
        relevant_by_user: Held-out relevant item IDs per user
        k: Number of recommendations to evaluate

    Returns:
        Dictionary with averaged metrics
    """
    metrics = {'precision': [], 'recall': [], 'ndcg': [], 'hit_rate': []}

    for user_id, relevant in relevant_by_user.items():
        rec_ids = [item_id for item_id, _ in recommend_fn(user_id, k)]
        metrics['precision'].append(precision_at_k(rec_ids, relevant, k))
        metrics['recall'].append(recall_at_k(rec_ids, relevant, k))
        metrics['ndcg'].append(ndcg_at_k(rec_ids, relevant, k))
        metrics['hit_rate'].append(hit_rate_at_k(rec_ids, relevant, k))

    logger.info("Evaluated %d users at k=%d", len(relevant_by_user), k)

    return {
        f'precision@{k}': float(np.mean(metrics['precision'])) if metrics['precision'] else 0.0,
        f'recall@{k}': float(np.mean(metrics['recall'])) if metrics['recall'] else 0.0,
        f'ndcg@{k}': float(np.mean(metrics['ndcg'])) if metrics['ndcg'] else 0.0,
        f'hit_rate@{k}': float(np.mean(metrics['hit_rate'])) if metrics['hit_rate'] else 0.0,
    }
