import pytest
from phrasebook.catalog import CatalogStore
from phrasebook.config import DEFAULT_ITEMS

@pytest.mark.e2e
def test_bulk_import_dedup_is_case_sensitive():
    cat = CatalogStore(defaults=())
    added = cat.bulk_import("A\na\nA")
    assert added == 2
    assert cat.items == ("A", "a")

@pytest.mark.e2e
def test_bulk_import_crlf_trim_and_order():
    cat = CatalogStore(defaults=("b", "c"))
    assert cat.bulk_import("  x \r\nb\n\n\r\ny\n") == 2
    assert cat.items == ("b", "c", "x", "y")

@pytest.mark.e2e
@pytest.mark.parametrize("raw", ["", "   ", "\n\r\n  \n"])
def test_empty_bulk_import_is_noop(raw):
    cat = CatalogStore()
    assert cat.bulk_import(raw) == 0
    assert cat.items == DEFAULT_ITEMS

@pytest.mark.e2e
def test_insert_front_twice_keeps_length():
    cat = CatalogStore()
    assert cat.insert_front("NEW") is True
    n = len(cat)
    assert cat.insert_front("NEW") is False
    assert len(cat) == n
    assert cat.items[0] == "NEW"

@pytest.mark.e2e
def test_add_trims_and_ignores_blank():
    cat = CatalogStore()
    assert cat.add("   ") is False
    assert cat.add("  TAPE 2in  ") is True
    assert cat.items[0] == "TAPE 2in"
    assert cat.add("CARTON BOX NO.30") is False

@pytest.mark.e2e
def test_remove_exact_only():
    cat = CatalogStore()
    assert cat.remove("carton box no.30") is False
    assert cat.remove("CARTON BOX NO.30") is True
    assert "CARTON BOX NO.30" not in cat
    assert cat.remove("CARTON BOX NO.30") is False
