import pandas as pd
import pytest

from hybridrec.data_loader import DataLoader


@pytest.fixture
def data_files(tmp_path):
    items_path = tmp_path / "items.csv"
    ratings_path = tmp_path / "ratings.csv"
    pd.DataFrame({
        'movieId': [1, 2, 3],
        'title': ['Galactic Battles', 'City of Laughter', 'Untitled'],
        'description': ['Space opera with epic battles', 'A feel-good comedy', None],
        'genres': ['Action|Sci-Fi', 'Comedy', None],
    }).to_csv(items_path, index=False)
    pd.DataFrame({
        'userId': [10, 10, 11, 10],
        'movieId': [1, 2, 2, 1],
        'rating': [4.0, 2.0, 5.0, 5.0],
    }).to_csv(ratings_path, index=False)
    return str(items_path), str(ratings_path)


def test_build_items(data_files):
    loader = DataLoader().load_data(*data_files)
    items = {item.item_id: item for item in loader.build_items()}
    assert items[1].tags == frozenset({'action', 'sci-fi'})
    assert items[1].description == 'space opera with epic battles'
    assert items[3].description == ''
    assert items[3].tags == frozenset()


def test_build_users_last_rating_wins(data_files):
    loader = DataLoader().load_data(*data_files)
    users = {user.user_id: user for user in loader.build_users()}
    assert users[10].ratings == {1: 5.0, 2: 2.0}
    assert users[11].ratings == {2: 5.0}


def test_build_engine(data_files):
    engine = DataLoader().load_data(*data_files).build_engine()
    assert len(engine.items) == 3
    recs = engine.recommend_content(11, 2)
    assert 2 not in [item_id for item_id, _ in recs]


def test_statistics(data_files):
    stats = DataLoader().load_data(*data_files).get_statistics()
    assert stats['n_items'] == 3
    assert stats['n_ratings'] == 4
    assert stats['n_users'] == 2
    assert stats['sparsity'] == pytest.approx(0.0)


def test_missing_files_are_tolerated_until_used(tmp_path):
    loader = DataLoader().load_data(str(tmp_path / "nope.csv"), str(tmp_path / "none.csv"))
    assert loader.items_df is None and loader.ratings_df is None
    assert loader.get_statistics() == {}
    with pytest.raises(ValueError, match="not loaded"):
        loader.build_items()
    with pytest.raises(ValueError, match="not loaded"):
        loader.build_users()


def test_missing_id_column(tmp_path):
    path = tmp_path / "items.csv"
    pd.DataFrame({'name': ['x']}).to_csv(path, index=False)
    loader = DataLoader().load_data(str(path), str(tmp_path / "none.csv"))
    with pytest.raises(ValueError, match="item column"):
        loader.build_items()
