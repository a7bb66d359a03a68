"""Tests for the Wishlist aggregate."""

import json

import pytest
from protean.exceptions import ValidationError
from shopping.wishlist.commands import ClearWishlist, LoadWishlist, SaveItem, UnsaveItem, apply_command
from shopping.wishlist.events import WishlistCleared, WishlistItemRemoved, WishlistItemSaved, WishlistLoaded
from shopping.wishlist.snapshot import WishlistSnapshot, decode_wishlist_items, encode_wishlist_items
from shopping.wishlist.wishlist import Wishlist


def _make_wishlist():
    return Wishlist.create()


def _save(wishlist, product_id="tee-001", **overrides):
    fields = {"product_id": product_id, "name": f"Product {product_id}", "unit_price": 25.99}
    fields.update(overrides)
    return wishlist.save_item(**fields)


class TestSaveItem:
    def test_save_adds_product(self):
        wishlist = _make_wishlist()
        assert _save(wishlist) is True
        assert wishlist.is_in_wishlist("tee-001")
        assert wishlist.item_count == 1

    def test_save_twice_is_noop(self):
        wishlist = _make_wishlist()
        _save(wishlist)
        wishlist._events.clear()
        assert _save(wishlist) is False
        assert wishlist.item_count == 1
        assert wishlist._events == []

    def test_save_raises_event(self):
        wishlist = _make_wishlist()
        _save(wishlist)
        event = wishlist._events[-1]
        assert isinstance(event, WishlistItemSaved)
        assert event.product_id == "tee-001"

    def test_empty_product_id_rejected(self):
        wishlist = _make_wishlist()
        with pytest.raises(ValidationError) as exc_info:
            _save(wishlist, product_id="")
        assert "product_id" in exc_info.value.messages

    def test_infinite_price_rejected(self):
        wishlist = _make_wishlist()
        with pytest.raises(ValidationError) as exc_info:
            _save(wishlist, unit_price=float("inf"))
        assert "unit_price" in exc_info.value.messages
        assert wishlist.item_count == 0


class TestRemoveAndClear:
    def test_remove(self):
        wishlist = _make_wishlist()
        _save(wishlist)
        assert wishlist.remove_item("tee-001") is True
        assert wishlist.item_count == 0
        assert isinstance(wishlist._events[-1], WishlistItemRemoved)

    def test_remove_absent_is_noop(self):
        wishlist = _make_wishlist()
        assert wishlist.remove_item("tee-001") is False

    def test_clear(self):
        wishlist = _make_wishlist()
        _save(wishlist, "a")
        _save(wishlist, "b")
        wishlist.clear()
        assert wishlist.item_count == 0
        assert wishlist._events[-1].items_removed == 2
        assert isinstance(wishlist._events[-1], WishlistCleared)


class TestLoad:
    def test_load_drops_later_duplicates(self):
        wishlist = _make_wishlist()
        wishlist.load(
            [
                {"product_id": "a", "name": "First", "unit_price": 1.0},
                {"product_id": "a", "name": "Second", "unit_price": 2.0},
                {"product_id": "b", "name": "B", "unit_price": 3.0},
            ]
        )
        assert wishlist.item_count == 2
        assert wishlist.find_item("a").name == "First"
        assert isinstance(wishlist._events[-1], WishlistLoaded)

    def test_load_rejects_entry_without_name(self):
        wishlist = _make_wishlist()
        with pytest.raises(ValidationError):
            wishlist.load([{"product_id": "a", "unit_price": 1.0}])

    def test_load_rejects_infinite_price(self):
        wishlist = _make_wishlist()
        with pytest.raises(ValidationError):
            wishlist.load([{"product_id": "a", "name": "A", "unit_price": float("inf")}])
        assert wishlist.item_count == 0


class TestWishlistCommands:
    def test_transitions(self):
        wishlist = _make_wishlist()
        apply_command(wishlist, SaveItem(product_id="a", name="A", unit_price=1.0))
        apply_command(wishlist, SaveItem(product_id="b", name="B", unit_price=2.0))
        apply_command(wishlist, UnsaveItem(product_id="a"))
        assert [str(i.product_id) for i in wishlist.items] == ["b"]
        apply_command(wishlist, ClearWishlist())
        assert wishlist.item_count == 0

    def test_load_command(self):
        wishlist = _make_wishlist()
        apply_command(wishlist, LoadWishlist(items=json.dumps([{"id": "a", "name": "A", "price": 4.0}])))
        assert wishlist.find_item("a").unit_price == 4.0

    def test_unknown_command_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            apply_command(_make_wishlist(), object())
        assert "command" in exc_info.value.messages


class TestWishlistWireFormat:
    def test_encode_uses_camel_case(self):
        wishlist = _make_wishlist()
        _save(wishlist, "a", original_price=30.0)
        assert json.loads(encode_wishlist_items(wishlist.items)) == [
            {"id": "a", "name": "Product a", "unitPrice": 25.99, "originalPrice": 30.0}
        ]

    def test_round_trip(self):
        wishlist = _make_wishlist()
        _save(wishlist, "a", category="women")
        restored = _make_wishlist()
        restored.load(decode_wishlist_items(encode_wishlist_items(wishlist.items)))
        assert WishlistSnapshot.from_wishlist(restored) == WishlistSnapshot.from_wishlist(wishlist)
