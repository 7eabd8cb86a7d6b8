"""
Flask API for the Hybrid Recommendation System

Run with: hybridrec-api
Serves the catalog in HYBRIDREC_DATA_DIR when present, the demo catalog otherwise.
"""

import logging
import os
from typing import Optional

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from .config import API_HOST, API_PORT, HYBRID_WEIGHTS, ITEMS_FILE, N_RECOMMENDATIONS, configure_logging
from .data_loader import DataLoader
from .demo import build_demo_engine
from .engine import RecommendationEngine

logger = logging.getLogger(__name__)

METHODS = ('content', 'cf', 'hybrid')


def create_app(engine: RecommendationEngine) -> Flask:
    """Create the Flask application around a built engine."""
    app = Flask(__name__)

    def _item_payload(item_id: int, score: float) -> dict:
        item = engine.get_item(item_id)
        return {
            'item_id': int(item_id),
            'title': item.title if item else None,
            'score': float(score),
        }

    @app.errorhandler(ValueError)
    def bad_request(error):
        return jsonify({'error': str(error)}), 400

    @app.errorhandler(Exception)
    def server_error(error):
        if isinstance(error, HTTPException):
            return error
        logger.error("Error: %s", error, exc_info=True)
        return jsonify({'error': str(error)}), 500

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return jsonify({
            'status': 'healthy',
            'n_items': len(engine.items),
            'n_users': len(engine.user_ids),
        })

    @app.route('/users')
    def get_users():
        """Get list of available user IDs."""
        limit = request.args.get('limit', 100, type=int)
        if limit < 0:
            raise ValueError(f"limit must be non-negative, got {limit}")
        users = engine.user_ids
        return jsonify({
            'users': users[:limit],
            'total': len(users),
            'returned': len(users[:limit]),
        })

    @app.route('/recommend/<int:user_id>')
    def recommend(user_id):
        """
        Recommendations for a user.

        Query params:
            n: Number of recommendations (default: 5)
            method: content, cf, or hybrid (default: hybrid)
            content_weight: Content share of the hybrid ranking (default: 0.6)
        """
        logger.info("Recommendation request for user %d", user_id)

        n = request.args.get('n', N_RECOMMENDATIONS, type=int)
        method = request.args.get('method', 'hybrid').lower()
        content_weight = request.args.get('content_weight', HYBRID_WEIGHTS['content'], type=float)

        if method == 'content':
            recommendations = engine.recommend_content(user_id, n)
        elif method == 'cf':
            recommendations = engine.recommend_collaborative(user_id, n)
        elif method == 'hybrid':
            recommendations = engine.recommend_hybrid(user_id, n, content_weight)
        else:
            raise ValueError(f"Unknown method: {method}. Expected one of {', '.join(METHODS)}")

        return jsonify({
            'user_id': user_id,
            'method': method,
            'recommendations': [_item_payload(i, s) for i, s in recommendations],
            'count': len(recommendations),
        })

    @app.route('/similar/<int:item_id>')
    def similar(item_id):
        """Items with the most similar content to a given item."""
        n = request.args.get('n', N_RECOMMENDATIONS, type=int)
        if engine.get_item(item_id) is None:
            return jsonify({'error': f'Unknown item: {item_id}'}), 404

        similar_items = engine.content_model.recommend_similar_items(item_id, n)
        return jsonify({
            'item_id': item_id,
            'similar': [_item_payload(i, s) for i, s in similar_items],
            'count': len(similar_items),
        })

    return app


def load_engine(items_path: Optional[str] = None) -> RecommendationEngine:
    """Engine over the configured data files, or the demo catalog when they are missing."""
    if os.path.exists(items_path or ITEMS_FILE):
        return DataLoader().load_data(items_path=items_path).build_engine()

    logger.warning("No catalog at %s, serving the demo catalog", items_path or ITEMS_FILE)
    return build_demo_engine()


def main():
    configure_logging()
    app = create_app(load_engine())
    app.run(host=API_HOST, port=API_PORT)


if __name__ == '__main__':
    main()
