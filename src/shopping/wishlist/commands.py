"""Wishlist transitions: commands and the transition function."""

from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, String, Text

from shopping.domain import shopping
from shopping.wishlist.snapshot import decode_wishlist_items
from shopping.wishlist.wishlist import Wishlist


@shopping.command(part_of="Wishlist")
class SaveItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    unit_price = Float(required=True, min_value=0.0)
    image = String(max_length=2048)
    original_price = Float(min_value=0.0)
    category = String(max_length=100)


@shopping.command(part_of="Wishlist")
class UnsaveItem:
    product_id = Identifier(required=True)


@shopping.command(part_of="Wishlist")
class ClearWishlist:
    """Remove every saved product."""


@shopping.command(part_of="Wishlist")
class LoadWishlist:
    items = Text(required=True)  # JSON: snapshot array of saved products


def _save_item(wishlist, command):
    wishlist.save_item(
        product_id=command.product_id,
        name=command.name,
        unit_price=command.unit_price,
        image=command.image,
        original_price=command.original_price,
        category=command.category,
    )


_TRANSITIONS = {
    SaveItem: _save_item,
    UnsaveItem: lambda wishlist, command: wishlist.remove_item(command.product_id),
    ClearWishlist: lambda wishlist, command: wishlist.clear(),
    LoadWishlist: lambda wishlist, command: wishlist.load(decode_wishlist_items(command.items)),
}


def apply_command(wishlist: Wishlist, command) -> None:
    """Apply one transition command to ``wishlist``."""
    transition = _TRANSITIONS.get(type(command))
    if transition is None:
        raise ValidationError({"command": [f"Unsupported wishlist command: {type(command).__name__}"]})
    transition(wishlist, command)
