"""
Demo catalog and command line entry point

Run with: hybridrec-demo --user 101 -k 3 --content-weight 0.6
"""

import argparse
from typing import List, Optional

from .config import HYBRID_WEIGHTS, configure_logging
from .engine import RecommendationEngine
from .models import Item, User


DEMO_ITEMS = [
    Item(1, "The Space Between Stars",
         "An astronaut struggles with loneliness while exploring distant galaxies. "
         "Dramatic sci-fi about isolation and discovery.",
         {"Sci-Fi", "Drama"}),
    Item(2, "Romantic Rhapsody",
         "A young musician falls in love and fights for her big break in a bustling city. "
         "Heartfelt romance with music.",
         {"Romance", "Music"}),
    Item(3, "Mystery Manor",
         "Detectives investigate strange occurrences at a Victorian manor. "
         "A twisting whodunit with dark secrets.",
         {"Mystery", "Thriller"}),
    Item(4, "Galactic Battles",
         "An interstellar war unfolds between rival fleets. "
         "Action-packed space opera with epic battles.",
         {"Action", "Sci-Fi"}),
    Item(5, "City of Laughter",
         "A group of comedians try to save their favorite club from closing. "
         "A feel-good comedy about friendship and stand-up.",
         {"Comedy"}),
    Item(6, "Secrets of the Mind",
         "A psychological thriller exploring memory and identity after a traumatic event.",
         {"Thriller", "Drama"}),
]

DEMO_RATINGS = {
    101: {1: 5.0, 4: 4.0},   # space drama and space action
    102: {2: 5.0, 5: 4.0},
    103: {3: 5.0, 6: 4.5},
}


def demo_users() -> List[User]:
    """Fresh copies of the demo users, safe to mutate."""
    return [User(user_id, dict(ratings)) for user_id, ratings in DEMO_RATINGS.items()]


def build_demo_engine() -> RecommendationEngine:
    return RecommendationEngine(DEMO_ITEMS, demo_users())


def _print_recommendations(engine: RecommendationEngine, title: str, recommendations):
    print(title)
    if not recommendations:
        print(" (none)")
    for item_id, score in recommendations:
        print(f" - {engine.get_item(item_id)}  [{score:.3f}]")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Hybrid content/collaborative recommender demo")
    parser.add_argument('--user', type=int, default=101, help="user id to recommend for")
    parser.add_argument('-k', type=int, default=3, help="number of recommendations")
    parser.add_argument('--content-weight', type=float, default=HYBRID_WEIGHTS['content'],
                        help="weight of the content ranking in the hybrid list, 0..1")
    parser.add_argument('--log-level', default='WARNING')
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    engine = build_demo_engine()

    _print_recommendations(engine, f"Content-based recommendations for user {args.user}:",
                           engine.recommend_content(args.user, args.k))
    print()
    _print_recommendations(engine, f"Collaborative recommendations for user {args.user}:",
                           engine.recommend_collaborative(args.user, args.k))
    print()
    _print_recommendations(
        engine,
        f"Hybrid recommendations ({args.content_weight} content weight) for user {args.user}:",
        engine.recommend_hybrid(args.user, args.k, args.content_weight),
    )
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
