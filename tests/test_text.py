from hybridrec.models import Item
from hybridrec.text import item_terms, tokenize


def test_tokenize_strips_punctuation_and_short_tokens():
    assert tokenize("Action-packed space opera, with EPIC battles!") == [
        "action", "packed", "space", "opera", "with", "epic", "battles",
    ]


def test_tokenize_drops_single_characters():
    assert tokenize("a b cd e 42 x") == ["cd", "42"]


def test_tokenize_empty_and_missing_text():
    assert tokenize("") == []
    assert tokenize(None) == []
    assert tokenize("   !!! ") == []


def test_tokenize_keeps_duplicates_in_order():
    assert tokenize("space SPACE space") == ["space", "space", "space"]


def test_item_terms_adds_each_tag_once():
    item = Item(1, "t", "Dramatic sci-fi drama", {"Sci-Fi", "Drama"})
    terms = item_terms(item)
    assert terms[:4] == ["dramatic", "sci", "fi", "drama"]
    assert sorted(terms[4:]) == ["drama", "sci-fi"]
    assert terms.count("drama") == 2
