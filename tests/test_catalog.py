import dataclasses

import pytest

from catalog_pipeline.models import Catalog, ProductRecord, RATING_LABELS


def test_product_record_defaults():
    record = ProductRecord()
    assert record.name == "Unknown item"
    assert record.price is None
    assert record.description == ""
    assert record.category == "Uncategorized"
    assert record.media_path == ""


@pytest.mark.parametrize("price", [-1.0, float("nan"), float("inf")])
def test_product_record_rejects_invalid_price(price):
    with pytest.raises(ValueError):
        ProductRecord(name="X", price=price)


def test_product_record_rejects_unknown_rating():
    with pytest.raises(ValueError):
        ProductRecord(name="X", rating="Six")


def test_product_record_is_immutable_and_updated_returns_copy():
    record = ProductRecord(name="X", price=3)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.price = 4.0
    changed = record.updated(price=4.5)
    assert record.price == 3.0
    assert changed.price == 4.5
    with pytest.raises(ValueError):
        record.updated(price=-2)


def test_product_record_orders_by_price_with_absent_as_zero():
    cheap, free, dear = ProductRecord(price=5), ProductRecord(), ProductRecord(price=10)
    assert sorted([dear, cheap, free]) == [free, cheap, dear]
    with pytest.raises(TypeError):
        cheap < 5


def test_product_record_dict_round_trip_and_info():
    record = ProductRecord(name="X", price=1.5, rating="Two", url="https://x.test/")
    assert ProductRecord.from_dict({**record.to_dict(), "extra": "ignored"}) == record
    assert list(record.to_dict()) == ["name", "price", "description", "category", "media_path", "rating", "availability", "url"]
    assert "name='X'" in record.info()
    assert "price=1.5" in str(record)


def test_generate_fake_is_valid():
    record = ProductRecord.generate_fake()
    assert record.rating in RATING_LABELS
    assert record.price is not None and record.price >= 0


def test_add_preserves_order_allows_duplicates_and_counts(sample_records):
    before = Catalog.class_info()["items_created_count"]
    catalog = Catalog(sample_records)
    catalog.add(sample_records[0])

    assert list(catalog) == sample_records + [sample_records[0]]
    assert len(catalog) == 4
    assert Catalog.class_info()["items_created_count"] == before + 4
    assert Catalog.class_info()["name"] == "Catalog"


def test_remove_first_match_or_none(sample_records):
    catalog = Catalog(sample_records + [sample_records[0]])
    assert catalog.remove(sample_records[0]) == sample_records[0]
    assert list(catalog) == sample_records[1:] + [sample_records[0]]
    assert catalog.remove(ProductRecord(name="missing")) is None
    assert len(catalog) == 3


def test_clear_returns_prior_count(sample_records):
    catalog = Catalog(sample_records)
    assert catalog.clear() == 3
    assert len(catalog) == 0


def test_update_replaces_record_in_place(sample_records):
    catalog = Catalog(sample_records)
    new_record = catalog.update(sample_records[1], price=9.99)

    assert catalog.snapshot()[1] is new_record
    assert new_record.price == 9.99
    assert new_record.name == "Sharp Objects"
    with pytest.raises(LookupError):
        catalog.update(ProductRecord(name="missing"), price=1)


def test_filter_by_min_price_excludes_absent(sample_records):
    catalog = Catalog(sample_records)
    assert [r.name for r in catalog.filter_by_min_price(50.5)] == ["A Light in the Attic"]
    assert [r.name for r in catalog.filter_by_min_price(0)] == ["A Light in the Attic", "Soumission"]


def test_find_by_name_trims_and_is_case_sensitive(sample_records):
    catalog = Catalog(sample_records)
    assert catalog.find_by_name("  Soumission ") is sample_records[2]
    assert catalog.find_by_name("soumission") is None


def test_total_price():
    assert Catalog().total_price() == 0.0
    catalog = Catalog([ProductRecord(name="A", price=19.99), ProductRecord(name="B")])
    assert catalog.total_price() == pytest.approx(19.99)


def test_stock_queries():
    empty = Catalog()
    assert empty.all_in_stock() is True
    assert empty.any_out_of_stock() is False

    mixed = Catalog([ProductRecord(availability="In stock"), ProductRecord(availability="Out of stock")])
    assert mixed.all_in_stock() is False
    assert mixed.any_out_of_stock() is True

    assert Catalog([ProductRecord(availability="IN STOCK (22 available)")]).all_in_stock() is True
    assert Catalog([ProductRecord(availability=None)]).all_in_stock() is False


def test_distinct_categories_first_seen_order(sample_records):
    assert Catalog(sample_records).distinct_categories() == ["Books", "Mystery"]


def test_sorted_by_price_is_stable(sample_records):
    tie = ProductRecord(name="Also free")
    catalog = Catalog(sample_records + [tie])
    assert [r.name for r in catalog.sorted_by_price()] == ["Sharp Objects", "Also free", "Soumission", "A Light in the Attic"]


def test_show_all_items_and_snapshot_are_read_only(sample_records):
    catalog = Catalog(sample_records)
    lines = catalog.show_all_items()
    assert len(lines) == 3
    assert lines[0].startswith("ProductRecord(name='A Light in the Attic'")
    assert isinstance(catalog.snapshot(), tuple)


def test_generate_test_items_adds_records():
    catalog = Catalog()
    assert len(catalog.generate_test_items(3)) == 3
