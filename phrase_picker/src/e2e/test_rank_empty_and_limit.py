import pytest
from phrasebook.search import rank, filter_phrases

CATALOG = [f"ITEM {i:02d}" for i in range(40)]

@pytest.mark.e2e
@pytest.mark.parametrize("q", ["", "   ", "\t\n"])
def test_blank_query_returns_catalog_head(q):
    assert rank(CATALOG, q, 25) == CATALOG[:25]
    assert rank(CATALOG, q, 3) == CATALOG[:3]

@pytest.mark.e2e
def test_limit_caps_output_and_results_come_from_catalog():
    out = rank(CATALOG, "item", 25)
    assert len(out) == 25
    assert set(out) <= set(CATALOG)
    assert rank(CATALOG, "item 0", 100) == CATALOG[:10]

@pytest.mark.e2e
def test_zero_and_negative_limit():
    assert rank(CATALOG, "item", 0) == []
    assert rank(CATALOG, "", -5) == []

@pytest.mark.e2e
def test_no_match_is_empty():
    assert rank(CATALOG, "zzz") == []

@pytest.mark.e2e
def test_filter_phrases_keeps_order_without_limit():
    phrases = ["Pâté tin", "tin can", "glass jar"]
    assert filter_phrases(phrases, "TIN") == ["Pâté tin", "tin can"]
    assert filter_phrases(phrases, "pate") == ["Pâté tin"]
    assert filter_phrases(phrases, "  ") == phrases
