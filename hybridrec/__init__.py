# Hybrid Recommendation System
# Core module for recommendation algorithms

from .config import *
from .models import Item, User
from .text import tokenize
from .similarity import term_cosine, rating_cosine
from .content_based import ContentBasedRecommender, build_content_vectors
from .collaborative_filtering import CollaborativeFiltering, build_item_similarities
from .hybrid_recommender import HybridRecommender
from .engine import RecommendationEngine
from .data_loader import DataLoader

# The Flask API is available via explicit import: from hybridrec.api import create_app
from .utils import (
    top_k, precision_at_k, recall_at_k, ndcg_at_k, hit_rate_at_k,
    coverage, evaluate_recommender,
)

__version__ = "1.0.0"
