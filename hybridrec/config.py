"""
Configuration file for the Hybrid Recommendation System
Centralizes all paths, parameters, and constants
"""

import logging
import os

# =============================================================================
# PATHS
# =============================================================================

# Project root directory
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Data directory
DATA_DIR = os.environ.get('HYBRIDREC_DATA_DIR', os.path.join(PROJECT_ROOT, 'data'))

# Data file paths
ITEMS_FILE = os.path.join(DATA_DIR, 'items.csv')
RATINGS_FILE = os.path.join(DATA_DIR, 'ratings.csv')

# Separator between tags in the items file (MovieLens style "Action|Sci-Fi")
TAG_SEPARATOR = '|'

# =============================================================================
# MODEL PARAMETERS
# =============================================================================

# Number of recommendations to return
N_RECOMMENDATIONS = 5

# Rating scale
RATING_MIN = 1.0
RATING_MAX = 5.0

# Neutral rating: above it pulls the content profile towards an item, below pushes away
PIVOT_RATING = 3.0

# Hybrid model weights
HYBRID_WEIGHTS = {
    'collaborative': 0.4,        # Weight for CF rank score
    'content': 0.6,              # Weight for content-based rank score
}

# Candidate pool fetched from each recommender before rank fusion:
# max(HYBRID_MIN_POOL, HYBRID_POOL_FACTOR * n)
HYBRID_MIN_POOL = 50
HYBRID_POOL_FACTOR = 3

# =============================================================================
# API CONFIGURATION
# =============================================================================

# Flask API settings
API_HOST = os.environ.get('HYBRIDREC_API_HOST', '0.0.0.0')
API_PORT = int(os.environ.get('HYBRIDREC_API_PORT', 5001))

# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get('HYBRIDREC_LOG_LEVEL', 'INFO')
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str = LOG_LEVEL):
    """Configure root logging for command line and API entry points."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
