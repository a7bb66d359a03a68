"""Wishlist engine: one visitor's saved products, persisted like the cart."""

import structlog

from shopping.snapshot.engine import SnapshotEngine
from shopping.wishlist.commands import (
    ClearWishlist,
    LoadWishlist,
    SaveItem,
    UnsaveItem,
    apply_command,
)
from shopping.wishlist.snapshot import WishlistSnapshot, encode_wishlist_items
from shopping.wishlist.wishlist import Wishlist

logger = structlog.get_logger(__name__)

WISHLIST_STORAGE_KEY = "wishlist"


class WishlistEngine(SnapshotEngine):
    storage_key = WISHLIST_STORAGE_KEY

    def _new_aggregate(self):
        return Wishlist.create()

    def _load_command(self, raw):
        return LoadWishlist(items=raw)

    def _apply(self, command):
        apply_command(self.aggregate, command)

    def _encode(self):
        return encode_wishlist_items(self.aggregate.items)

    @property
    def wishlist(self) -> Wishlist:
        return self.aggregate

    def save_item(self, **product):
        return self.dispatch(SaveItem(**product))

    def remove_item(self, product_id):
        return self.dispatch(UnsaveItem(product_id=product_id))

    def clear(self):
        return self.dispatch(ClearWishlist())

    def is_in_wishlist(self, product_id) -> bool:
        return self.aggregate.is_in_wishlist(product_id)

    @property
    def item_count(self) -> int:
        return self.aggregate.item_count

    def snapshot(self) -> WishlistSnapshot:
        return WishlistSnapshot.from_wishlist(self.aggregate)

    def move_to_cart(self, product_id, cart_engine, currency="PKR") -> bool:
        """Add a saved product to ``cart_engine`` and drop it from the wishlist.

        Returns False when the product is not saved. Saved products carry no
        currency, so the cart line is tagged with ``currency``.
        """
        item = self.aggregate.find_item(product_id)
        if item is None:
            return False

        cart_engine.add_item(
            product_id=str(item.product_id),
            name=item.name,
            unit_price=item.unit_price,
            currency=currency,
            image=item.image,
            original_price=item.original_price,
            category=item.category,
        )
        self.remove_item(product_id)
        logger.info("wishlist_item_moved_to_cart", product_id=str(product_id))
        return True
