"""Domain events for the Cart aggregate."""

from protean.fields import Float, Identifier, Integer, String

from shopping.domain import shopping


@shopping.event(part_of="Cart")
class CartItemAdded:
    """A product was added to the cart, or its line was bumped by one unit."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    name = String()
    unit_price = Float(required=True)
    quantity = Integer(required=True)  # Line quantity after the add


@shopping.event(part_of="Cart")
class CartQuantityUpdated:
    """The quantity of a cart line was set to a new value."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    previous_quantity = Integer(required=True)
    new_quantity = Integer(required=True)


@shopping.event(part_of="Cart")
class CartItemRemoved:
    """A line was removed from the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@shopping.event(part_of="Cart")
class CartCleared:
    """Every line was removed from the cart."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    lines_removed = Integer(required=True)


@shopping.event(part_of="Cart")
class CartLoaded:
    """The cart was replaced with lines restored from a snapshot."""

    __version__ = "v1"

    cart_id = Identifier(required=True)
    line_count = Integer(required=True)
    item_count = Integer(required=True)
