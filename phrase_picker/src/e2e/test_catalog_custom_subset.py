import pytest
from phrasebook.catalog import CatalogStore
from phrasebook.config import DEFAULT_ITEMS

@pytest.mark.e2e
def test_custom_subset_in_catalog_order():
    cat = CatalogStore()
    cat.add("first")
    cat.bulk_import("second\nCARTON BOX NO.26\nthird")
    assert cat.custom_subset() == ["first", "second", "third"]

@pytest.mark.e2e
def test_reset_then_custom_subset_is_empty():
    cat = CatalogStore()
    cat.add("mine")
    cat.remove("CARTON BOX NO.38")
    cat.reset_to_default()
    assert cat.items == DEFAULT_ITEMS
    assert cat.custom_subset() == []

@pytest.mark.e2e
def test_clear_custom_keeps_defaults_in_place():
    cat = CatalogStore()
    cat.remove("CARTON BOX NO.30")
    cat.add("zeta")
    cat.bulk_import("eta")
    assert cat.clear_custom() == 2
    assert cat.items == DEFAULT_ITEMS[1:]
    assert cat.clear_custom() == 0
