"""Cart engine: one visitor's cart for the duration of a session.

The engine is instantiated once per session with a snapshot store and passed
to whatever needs the cart (catalogue pages, cart page, checkout). It owns a
single Cart aggregate, routes every mutation through ``dispatch`` and writes
the lines to the store under the ``cart`` key after each one.

Usage::

    engine = CartEngine(get_store())
    engine.add_item(product_id="p1", name="Tee", unit_price=25.99, currency="PKR")
    engine.snapshot().total
"""

import structlog
from protean.exceptions import ValidationError

from shopping.cart.cart import Cart, validate_quantity
from shopping.cart.commands import (
    AddItem,
    ClearCart,
    LoadCart,
    RemoveItem,
    UpdateQuantity,
    apply_command,
)
from shopping.cart.snapshot import CartSnapshot, encode_items
from shopping.checkout.address import ShippingAddress
from shopping.snapshot.engine import SnapshotEngine
from shopping.snapshot.port import SnapshotStoreError

logger = structlog.get_logger(__name__)

CART_STORAGE_KEY = "cart"
SHIPPING_ADDRESS_KEY = "shippingAddress"


class CartEngine(SnapshotEngine):
    storage_key = CART_STORAGE_KEY

    def _new_aggregate(self):
        return Cart.create()

    def _load_command(self, raw):
        return LoadCart(items=raw)

    def _apply(self, command):
        apply_command(self.aggregate, command)

    def _encode(self):
        return encode_items(self.aggregate.items)

    @property
    def cart(self) -> Cart:
        return self.aggregate

    # -------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------
    def add_item(self, **candidate):
        """Add one unit of ``candidate`` (LineItem fields without quantity)."""
        events = self.dispatch(AddItem(**candidate))
        logger.info("cart_item_added", product_id=candidate.get("product_id"), item_count=self.item_count)
        return events

    def remove_item(self, product_id):
        return self.dispatch(RemoveItem(product_id=product_id))

    def update_quantity(self, product_id, quantity):
        # Checked before the command, whose Integer field would coerce "3" to 3
        validate_quantity(quantity)
        return self.dispatch(UpdateQuantity(product_id=product_id, quantity=quantity))

    def clear(self):
        events = self.dispatch(ClearCart())
        logger.info("cart_cleared")
        return events

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def is_in_cart(self, product_id) -> bool:
        return self.aggregate.is_in_cart(product_id)

    def quantity_of(self, product_id) -> int:
        return self.aggregate.quantity_of(product_id)

    @property
    def total(self) -> float:
        return self.aggregate.total

    @property
    def item_count(self) -> int:
        return self.aggregate.item_count

    def snapshot(self) -> CartSnapshot:
        return CartSnapshot.from_cart(self.aggregate)

    # -------------------------------------------------------------------
    # Checkout side channel
    # -------------------------------------------------------------------
    def update_shipping_address(self, address: ShippingAddress) -> bool:
        """Remember the shipping address for the later checkout pages.

        Best effort: returns False when the store rejects the write.
        """
        try:
            self.store.set(SHIPPING_ADDRESS_KEY, address.to_json())
        except SnapshotStoreError as exc:
            logger.error("shipping_address_write_failed", error=str(exc))
            return False
        return True

    def shipping_address(self) -> ShippingAddress | None:
        try:
            raw = self.store.get(SHIPPING_ADDRESS_KEY)
        except SnapshotStoreError as exc:
            logger.warning("shipping_address_read_failed", error=str(exc))
            return None

        if raw is None:
            return None

        try:
            return ShippingAddress.from_json(raw)
        except ValidationError as exc:
            logger.warning("shipping_address_discarded", errors=exc.messages)
            return None
