import time
from decimal import Decimal

import pytest

from stockroom.config import set_config_for_test
from stockroom.data.backends.csv_backend import CsvDataAccess, PRODUCTS_FILE
from stockroom.data.models import ProductCreate, ProductFilters
from stockroom.data.util import get_data_access


@pytest.fixture
def da(tmp_path):
    set_config_for_test(data_dir=str(tmp_path))
    return CsvDataAccess(data_dir=tmp_path)


def add(da, user_id, name, quantity=1, price="1.00", sku=None, low_stock_at=None):
    record = da.create_product(
        user_id,
        ProductCreate(name=name, price=price, quantity=quantity, sku=sku, low_stock_at=low_stock_at),
    )
    # keep created_at strictly increasing between inserts
    time.sleep(0.002)
    return record


def test_creates_empty_file(tmp_path):
    da = CsvDataAccess(data_dir=tmp_path / "nested")
    assert (tmp_path / "nested" / PRODUCTS_FILE).exists()
    assert da.get_all_products("anyone") == []
    assert da.count_products(ProductFilters(user_id="anyone")) == 0


def test_round_trip_preserves_fields(da):
    created = add(da, "u1", "Blue Mug", quantity=7, price="12.50", sku="MUG-1", low_stock_at=3)
    [loaded] = da.get_all_products("u1")
    assert loaded == created
    assert loaded.price == Decimal("12.50")
    assert loaded.created_at.tzinfo is not None


def test_optional_fields_round_trip_as_none(da):
    add(da, "u1", "Plain", quantity=0)
    [loaded] = da.get_all_products("u1")
    assert loaded.sku is None
    assert loaded.low_stock_at is None


def test_queries_are_user_scoped(da):
    add(da, "u1", "Mine")
    add(da, "u2", "Theirs")
    assert [p.name for p in da.get_all_products("u1")] == ["Mine"]
    assert da.count_products(ProductFilters(user_id="u2")) == 1


def test_search_is_case_insensitive_substring(da):
    add(da, "u1", "Red Mug")
    add(da, "u1", "red plate")
    add(da, "u1", "Blue Mug")
    add(da, "u1", "Mug (large)")
    assert da.count_products(ProductFilters(user_id="u1", name_contains="RED")) == 2
    assert da.count_products(ProductFilters(user_id="u1", name_contains="mug")) == 3
    # regex metacharacters are matched literally
    assert da.count_products(ProductFilters(user_id="u1", name_contains="(large")) == 1


def test_list_products_pages_newest_first(da):
    for i in range(7):
        add(da, "u1", f"Item {i}")
    first = da.list_products(ProductFilters(user_id="u1", page=1, page_size=5))
    second = da.list_products(ProductFilters(user_id="u1", page=2, page_size=5))
    assert [p.name for p in first.items] == ["Item 6", "Item 5", "Item 4", "Item 3", "Item 2"]
    assert [p.name for p in second.items] == ["Item 1", "Item 0"]
    beyond = da.list_products(ProductFilters(user_id="u1", page=3, page_size=5))
    assert beyond.items == []


def test_recent_products(da):
    for i in range(7):
        add(da, "u1", f"Item {i}")
    assert [p.name for p in da.get_recent_products("u1", limit=2)] == ["Item 6", "Item 5"]


def test_flagged_low_stock_ignores_products_without_threshold(da):
    add(da, "u1", "No threshold", quantity=2)
    add(da, "u1", "Flagged", quantity=5, low_stock_at=1)
    add(da, "u1", "Flagged empty", quantity=0, low_stock_at=10)
    add(da, "u1", "Plenty", quantity=6, low_stock_at=10)
    assert da.count_flagged_low_stock("u1") == 2


def test_delete_is_scoped_to_owner(da):
    mine = add(da, "u1", "Mine")
    theirs = add(da, "u2", "Theirs")
    assert da.delete_product("u1", theirs.id) == 0
    assert da.delete_product("u1", "does-not-exist") == 0
    assert da.delete_product("u1", mine.id) == 1
    assert da.get_all_products("u1") == []
    assert [p.id for p in da.get_all_products("u2")] == [theirs.id]


def test_factory_uses_configured_dir(tmp_path):
    set_config_for_test(data_dir=str(tmp_path))
    da = get_data_access("csv")
    assert da.path == tmp_path / PRODUCTS_FILE


def test_factory_rejects_unknown_kind():
    with pytest.raises(ValueError):
        get_data_access("sqlite")


def test_unreadable_file_raises(tmp_path):
    da = CsvDataAccess(data_dir=tmp_path)
    (tmp_path / PRODUCTS_FILE).write_bytes(b"\x00\x01 not,a\ncsv")
    with pytest.raises(RuntimeError):
        da.get_all_products("u1")
