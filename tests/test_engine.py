import pytest

from hybridrec.engine import RecommendationEngine
from hybridrec.models import Item, User

METHODS = ('content', 'collaborative', 'hybrid')


def _recommend(engine, method, user_id, k):
    return getattr(engine, f'recommend_{method}')(user_id, k)


@pytest.mark.parametrize("method", METHODS)
def test_unknown_user_gets_empty_list(engine, method):
    assert _recommend(engine, method, 999, 3) == []


@pytest.mark.parametrize("method", METHODS)
def test_negative_k_fails_loudly(engine, method):
    with pytest.raises(ValueError):
        _recommend(engine, method, 101, -1)
    with pytest.raises(ValueError):
        _recommend(engine, method, 999, -1)


@pytest.mark.parametrize("method", METHODS)
def test_user_without_ratings_gets_empty_list(items, method):
    engine = RecommendationEngine(items, [User(1)])
    assert _recommend(engine, method, 1, 3) == []


@pytest.mark.parametrize("method", METHODS)
@pytest.mark.parametrize("k", [0, 1, 2, 3, 4, 10])
def test_exclusion_and_length_bound(overlapping_engine, method, k):
    catalog = {item.item_id for item in overlapping_engine.items}
    for user_id in overlapping_engine.user_ids:
        rated = set(overlapping_engine.get_user(user_id).ratings)
        recs = _recommend(overlapping_engine, method, user_id, k)
        ids = [item_id for item_id, _ in recs]
        assert len(ids) <= k
        assert len(ids) <= len(catalog - rated)
        assert len(ids) == len(set(ids))
        assert set(ids) <= catalog
        assert not set(ids) & rated


@pytest.mark.parametrize("method", METHODS)
def test_repeated_calls_are_deterministic(overlapping_engine, method):
    first = _recommend(overlapping_engine, method, 3, 4)
    assert all(_recommend(overlapping_engine, method, 3, 4) == first for _ in range(3))


def test_demo_scenario_content(engine):
    ids = [item_id for item_id, _ in engine.recommend_content(101, 3)]
    assert ids[0] == 6


def test_demo_scenario_collaborative(engine):
    # no shared raters: every candidate predicts 0 and ties resolve by item id
    assert engine.recommend_collaborative(101, 3) == [(2, 0.0), (3, 0.0), (5, 0.0)]


def test_demo_scenario_hybrid_extremes(engine):
    content = [i for i, _ in engine.recommend_content(101, 3)]
    cf = [i for i, _ in engine.recommend_collaborative(101, 3)]
    assert [i for i, _ in engine.recommend_hybrid(101, 3, 1.0)] == content
    assert [i for i, _ in engine.recommend_hybrid(101, 3, 0.0)] == cf


def test_recommendations_do_not_mutate_state(engine):
    before = dict(engine.get_user(101).ratings)
    vectors = dict(engine.content_model.content_vectors)
    engine.recommend_hybrid(101, 3)
    assert engine.get_user(101).ratings == before
    assert engine.content_model.content_vectors == vectors


def test_rate_is_seen_immediately_but_caches_wait_for_rebuild(engine):
    sims_before = engine.cf_model.item_similarity

    engine.rate(101, 6, 5.0)
    assert 6 not in [i for i, _ in engine.recommend_content(101, 5)]
    assert engine.cf_model.item_similarity is sims_before

    engine.rebuild()
    assert engine.cf_model.item_similarity is not sims_before
    assert engine.cf_model.item_similarity[1][6] > 0


def test_rate_creates_user(engine):
    engine.rate(200, 1, 4.0)
    assert 200 in engine.user_ids
    assert engine.recommend_content(200, 2)


def test_rate_unknown_item(engine):
    with pytest.raises(ValueError):
        engine.rate(101, 404, 4.0)


def test_rebuild_is_idempotent(engine):
    vectors = engine.content_model.content_vectors
    sims = engine.cf_model.item_similarity
    engine.rebuild()
    assert engine.content_model.content_vectors == vectors
    assert engine.cf_model.item_similarity == sims


def test_duplicate_ids_rejected(items):
    with pytest.raises(ValueError):
        RecommendationEngine(items + [Item(1, "dup")])
    with pytest.raises(ValueError):
        RecommendationEngine(items, [User(1), User(1)])


def test_accessors(engine):
    assert engine.get_item(1).title == "The Space Between Stars"
    assert engine.get_item(404) is None
    assert engine.get_user(404) is None
    assert sorted(engine.user_ids) == [101, 102, 103]
