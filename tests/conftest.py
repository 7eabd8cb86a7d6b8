import pytest

from hybridrec.demo import DEMO_ITEMS, demo_users
from hybridrec.engine import RecommendationEngine
from hybridrec.models import Item, User


@pytest.fixture
def items():
    return list(DEMO_ITEMS)


@pytest.fixture
def users():
    return demo_users()


@pytest.fixture
def engine(items, users):
    return RecommendationEngine(items, users)


@pytest.fixture
def overlapping_engine(items):
    """Users whose ratings overlap, so item similarities are not all zero."""
    users = [
        User(1, {1: 5.0, 4: 4.0, 6: 2.0}),
        User(2, {1: 4.0, 4: 5.0, 3: 1.0}),
        User(3, {2: 5.0, 5: 4.0, 3: 3.0}),
        User(4, {2: 4.0, 5: 5.0}),
        User(5, {1: 5.0}),
    ]
    return RecommendationEngine(items, users)


@pytest.fixture
def untagged_item():
    return Item(99, "Blank", "", [])
