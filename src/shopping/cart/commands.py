"""Cart transitions: commands and the transition function.

Every change to a cart is expressed as one of five commands:
AddItem | RemoveItem | UpdateQuantity | ClearCart | LoadCart.
``apply_command`` dispatches a command to the matching Cart method. It is
the only path by which a CartEngine mutates its cart.
"""

from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Integer, String, Text

from shopping.cart.cart import Cart
from shopping.cart.snapshot import decode_items
from shopping.domain import shopping


@shopping.command(part_of="Cart")
class AddItem:
    """Add one unit of a catalogue product (a line item without quantity)."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    currency = String(required=True, max_length=10)
    image = String(max_length=2048)
    original_price = Float(min_value=0.0)
    category = String(max_length=100)
    size = String(max_length=50)
    color = String(max_length=50)


@shopping.command(part_of="Cart")
class RemoveItem:
    product_id = Identifier(required=True)


@shopping.command(part_of="Cart")
class UpdateQuantity:
    """Set a line's quantity; zero removes the line."""

    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@shopping.command(part_of="Cart")
class ClearCart:
    """Remove every line from the cart."""


@shopping.command(part_of="Cart")
class LoadCart:
    """Replace the cart's lines with a persisted snapshot."""

    items = Text(required=True)  # JSON: snapshot array of line items


def _add_item(cart, command):
    cart.add_item(
        product_id=command.product_id,
        name=command.name,
        unit_price=command.unit_price,
        currency=command.currency,
        image=command.image,
        original_price=command.original_price,
        category=command.category,
        size=command.size,
        color=command.color,
    )


def _remove_item(cart, command):
    cart.remove_item(command.product_id)


def _update_quantity(cart, command):
    cart.update_quantity(command.product_id, command.quantity)


def _clear_cart(cart, command):
    cart.clear()


def _load_cart(cart, command):
    cart.load(decode_items(command.items))


_TRANSITIONS = {
    AddItem: _add_item,
    RemoveItem: _remove_item,
    UpdateQuantity: _update_quantity,
    ClearCart: _clear_cart,
    LoadCart: _load_cart,
}


def apply_command(cart: Cart, command) -> None:
    """Apply one transition command to ``cart``."""
    transition = _TRANSITIONS.get(type(command))
    if transition is None:
        raise ValidationError({"command": [f"Unsupported cart command: {type(command).__name__}"]})
    transition(cart, command)
