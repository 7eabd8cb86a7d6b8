"""
Data Loader for the Hybrid Recommendation System
Reads catalog and rating CSV files into Item and User records
"""

import logging
import os
from typing import Dict, List, Optional

import pandas as pd

from .config import ITEMS_FILE, RATINGS_FILE, TAG_SEPARATOR
from .engine import RecommendationEngine
from .models import Item, User

logger = logging.getLogger(__name__)


class DataLoader:
    """
    Data loader for item metadata and user ratings.

    Attributes:
        items_df: DataFrame with one row per item (id, title, description, tags)
        ratings_df: DataFrame with one row per (user, item, rating)
    """

    def __init__(self, tag_separator: str = TAG_SEPARATOR):
        self.tag_separator = tag_separator
        self.items_df: Optional[pd.DataFrame] = None
        self.ratings_df: Optional[pd.DataFrame] = None

    def load_data(self,
                  items_path: Optional[str] = None,
                  ratings_path: Optional[str] = None) -> 'DataLoader':
        """
        Load the items and ratings CSV files.

        Args:
            items_path: Path to items CSV file
            ratings_path: Path to ratings CSV file

        Returns:
            self for method chaining
        """
        items_file = items_path or ITEMS_FILE
        if os.path.exists(items_file):
            self.items_df = pd.read_csv(items_file)
            logger.info("Loaded items data: %d items", len(self.items_df))
        else:
            logger.warning("Items file not found at %s", items_file)

        ratings_file = ratings_path or RATINGS_FILE
        if os.path.exists(ratings_file):
            self.ratings_df = pd.read_csv(ratings_file)
            logger.info("Loaded ratings data: %d ratings", len(self.ratings_df))
        else:
            logger.warning("Ratings file not found at %s", ratings_file)

        return self

    @staticmethod
    def _find_column(df: pd.DataFrame, possible_names: List[str], what: str,
                     required: bool = True) -> Optional[str]:
        for name in possible_names:
            if name in df.columns:
                return name
        if required:
            raise ValueError(f"Could not find {what} column. Columns: {df.columns.tolist()}")
        return None

    def _get_item_column(self, df: pd.DataFrame) -> str:
        return self._find_column(df, ['item_id', 'itemId', 'movie_id', 'movieId', 'id'], 'item')

    def _get_user_column(self, df: pd.DataFrame) -> str:
        return self._find_column(df, ['user_id', 'userId', 'user'], 'user')

    def build_items(self) -> List[Item]:
        """
        Build catalog records from the items DataFrame.

        Tags come from a 'tags' or 'genres' column, split on the tag separator.
        """
        if self.items_df is None:
            raise ValueError("Items data not loaded. Call load_data() first.")

        df = self.items_df
        id_col = self._get_item_column(df)
        title_col = self._find_column(df, ['title', 'name'], 'title', required=False)
        desc_col = self._find_column(df, ['description', 'overview', 'plot'], 'description',
                                     required=False)
        tags_col = self._find_column(df, ['tags', 'genres'], 'tags', required=False)

        items = []
        for row in df.to_dict('records'):
            tags = row.get(tags_col) if tags_col else None
            items.append(Item(
                item_id=int(row[id_col]),
                title=_text(row.get(title_col)) if title_col else '',
                description=_text(row.get(desc_col)) if desc_col else '',
                tags=[t.strip() for t in _text(tags).split(self.tag_separator) if t.strip()],
            ))
        return items

    def build_users(self) -> List[User]:
        """
        Build users from the ratings DataFrame.

        A repeated (user, item) pair keeps the last rating in file order.
        """
        if self.ratings_df is None:
            raise ValueError("Ratings data not loaded. Call load_data() first.")

        df = self.ratings_df
        user_col = self._get_user_column(df)
        item_col = self._get_item_column(df)
        rating_col = self._find_column(df, ['rating', 'score'], 'rating')

        users: Dict[int, User] = {}
        for user_id, item_id, rating in zip(df[user_col], df[item_col], df[rating_col]):
            user_id = int(user_id)
            user = users.get(user_id)
            if user is None:
                user = users[user_id] = User(user_id)
            user.rate(int(item_id), float(rating))
        return list(users.values())

    def build_engine(self) -> RecommendationEngine:
        """Build a recommendation engine from the loaded data."""
        users = self.build_users() if self.ratings_df is not None else []
        return RecommendationEngine(self.build_items(), users)

    def get_statistics(self) -> Dict:
        """
        Get dataset statistics.

        Returns:
            Dictionary with dataset statistics
        """
        stats = {}
        if self.items_df is not None:
            stats['n_items'] = len(self.items_df)

        if self.ratings_df is not None:
            df = self.ratings_df
            user_col = self._get_user_column(df)
            item_col = self._get_item_column(df)
            n_users = df[user_col].nunique()
            n_rated = df[item_col].nunique()
            ratings_per_user = df[user_col].value_counts()

            stats.update({
                'n_ratings': len(df),
                'n_users': n_users,
                'n_rated_items': n_rated,
                'avg_ratings_per_user': float(ratings_per_user.mean()),
                'median_ratings_per_user': float(ratings_per_user.median()),
                'sparsity': 1 - len(df) / (n_users * n_rated) if n_users and n_rated else 1.0,
            })

        return stats


def _text(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ''
    return str(value)
