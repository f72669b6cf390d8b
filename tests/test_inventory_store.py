"""
Tests for the SQLite inventory store.
"""
from datetime import date

import pytest

from inventory_store import (
    InventoryError,
    add_item,
    delete_item,
    list_items,
    update_item,
)


@pytest.fixture
def db(tmp_path):
    return tmp_path / "matspar.sqlite"


class TestAddItem:

    def test_add_and_list(self, db):
        item_id = add_item(food_id="01.001", name="Melk", expiration_date=date(2026, 5, 1), db_path=db)
        rows = list_items(db_path=db)
        assert rows == [
            {
                "id": item_id,
                "user_id": None,
                "name": "Melk",
                "quantity": 1,
                "expiration_date": date(2026, 5, 1),
            }
        ]

    def test_product_is_upserted_by_food_id(self, db):
        add_item(food_id="01.001", name="Melk", expiration_date=date(2026, 5, 1), db_path=db)
        add_item(food_id="01.001", name="Helmelk", expiration_date=date(2026, 5, 2), quantity=2, db_path=db)
        rows = list_items(db_path=db)
        assert [r["name"] for r in rows] == ["Helmelk", "Helmelk"]
        assert [r["quantity"] for r in rows] == [1, 2]

    def test_bad_location_raises_inventory_error(self, tmp_path):
        with pytest.raises(InventoryError):
            add_item(food_id="x", name="x", expiration_date=date(2026, 1, 1), db_path=tmp_path)


class TestListItems:

    def test_sorted_by_expiration(self, db):
        add_item(food_id="a", name="Ost", expiration_date=date(2026, 6, 1), db_path=db)
        add_item(food_id="b", name="Melk", expiration_date=date(2026, 4, 1), db_path=db)
        add_item(food_id="c", name="Egg", expiration_date=date(2026, 5, 1), db_path=db)
        assert [r["name"] for r in list_items(db_path=db)] == ["Melk", "Egg", "Ost"]

    def test_filter_by_user(self, db):
        add_item(food_id="a", name="Ost", expiration_date=date(2026, 6, 1), user_id="u1", db_path=db)
        add_item(food_id="b", name="Melk", expiration_date=date(2026, 4, 1), user_id="u2", db_path=db)
        assert [r["name"] for r in list_items("u1", db_path=db)] == ["Ost"]

    def test_limit(self, db):
        for i in range(5):
            add_item(food_id=str(i), name=f"Vare {i}", expiration_date=date(2026, 1, i + 1), db_path=db)
        assert len(list_items(limit=3, db_path=db)) == 3

    def test_empty_database(self, db):
        assert list_items(db_path=db) == []


class TestUpdateDelete:

    def test_update_quantity_and_date(self, db):
        item_id = add_item(food_id="a", name="Ost", expiration_date=date(2026, 6, 1), db_path=db)
        assert update_item(item_id, quantity=4, db_path=db) == 1
        assert update_item(item_id, expiration_date=date(2026, 7, 1), db_path=db) == 1
        row = list_items(db_path=db)[0]
        assert (row["quantity"], row["expiration_date"]) == (4, date(2026, 7, 1))

    def test_update_requires_a_field(self, db):
        item_id = add_item(food_id="a", name="Ost", expiration_date=date(2026, 6, 1), db_path=db)
        with pytest.raises(ValueError):
            update_item(item_id, db_path=db)

    def test_update_unknown_item(self, db):
        assert update_item(999, quantity=2, db_path=db) == 0

    def test_delete(self, db):
        item_id = add_item(food_id="a", name="Ost", expiration_date=date(2026, 6, 1), db_path=db)
        assert delete_item(item_id, db_path=db) == 1
        assert delete_item(item_id, db_path=db) == 0
        assert list_items(db_path=db) == []
