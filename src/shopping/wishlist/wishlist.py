"""Wishlist aggregate: a deduplicated set of saved products.

Same shape as the cart without the arithmetic: saving an already-saved product
is a no-op (nothing is counted), and ``item_count`` is just the number of
saved products.
"""

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, String

from shopping.cart.cart import validate_candidate
from shopping.domain import shopping
from shopping.wishlist.events import (
    WishlistCleared,
    WishlistItemRemoved,
    WishlistItemSaved,
    WishlistLoaded,
)


@shopping.entity(part_of="Wishlist")
class WishlistItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    image = String(max_length=2048)
    original_price = Float(min_value=0.0)
    category = String(max_length=100)


@shopping.aggregate
class Wishlist:
    items = HasMany(WishlistItem)

    @invariant.post
    def saved_products_must_be_unique(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can be saved only once"]})

    @classmethod
    def create(cls):
        return cls()

    @property
    def item_count(self):
        return len(self.items)

    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def is_in_wishlist(self, product_id):
        return self.find_item(product_id) is not None

    def save_item(self, product_id, name, unit_price, image=None, original_price=None, category=None):
        """Save a product. Returns False when it was already saved."""
        validate_candidate(product_id, unit_price, original_price)

        if self.is_in_wishlist(product_id):
            return False

        self.add_items(
            WishlistItem(
                product_id=product_id,
                name=name,
                unit_price=unit_price,
                image=image,
                original_price=original_price,
                category=category,
            )
        )
        self.raise_(WishlistItemSaved(wishlist_id=str(self.id), product_id=str(product_id)))
        return True

    def remove_item(self, product_id):
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.raise_(WishlistItemRemoved(wishlist_id=str(self.id), product_id=str(product_id)))
        return True

    def clear(self):
        items_removed = len(self.items)
        with atomic_change(self):
            for item in list(self.items):
                self.remove_items(item)

        self.raise_(WishlistCleared(wishlist_id=str(self.id), items_removed=items_removed))

    def load(self, entries):
        """Replace the saved products with snapshot entries; later duplicates are dropped."""
        items = []
        seen = set()
        for entry in entries:
            validate_candidate(entry.get("product_id"), entry.get("unit_price"), entry.get("original_price"))
            item = WishlistItem(**entry)
            if str(item.product_id) in seen:
                continue
            seen.add(str(item.product_id))
            items.append(item)

        with atomic_change(self):
            for item in list(self.items):
                self.remove_items(item)
            for item in items:
                self.add_items(item)

        self.raise_(WishlistLoaded(wishlist_id=str(self.id), item_count=self.item_count))
