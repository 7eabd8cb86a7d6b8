from hybridrec.demo import DEMO_RATINGS, build_demo_engine, demo_users, main


def test_demo_users_are_independent_copies():
    users = demo_users()
    users[0].rate(2, 1.0)
    assert 2 not in DEMO_RATINGS[101]


def test_demo_engine():
    engine = build_demo_engine()
    assert len(engine.items) == 6
    assert sorted(engine.user_ids) == [101, 102, 103]


def test_main_prints_three_lists(capsys):
    assert main(['--user', '101', '-k', '2']) == 0
    out = capsys.readouterr().out
    assert "Content-based recommendations for user 101:" in out
    assert "Collaborative recommendations for user 101:" in out
    assert "Hybrid recommendations (0.6 content weight) for user 101:" in out
    assert "6: Secrets of the Mind" in out


def test_main_unknown_user(capsys):
    main(['--user', '999'])
    assert "(none)" in capsys.readouterr().out
