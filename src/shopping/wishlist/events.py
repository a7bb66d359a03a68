"""Domain events for the Wishlist aggregate."""

from protean.fields import Identifier, Integer

from shopping.domain import shopping


@shopping.event(part_of="Wishlist")
class WishlistItemSaved:
    __version__ = "v1"

    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopping.event(part_of="Wishlist")
class WishlistItemRemoved:
    __version__ = "v1"

    wishlist_id = Identifier(required=True)
    product_id = Identifier(required=True)


@shopping.event(part_of="Wishlist")
class WishlistCleared:
    __version__ = "v1"

    wishlist_id = Identifier(required=True)
    items_removed = Integer(required=True)


@shopping.event(part_of="Wishlist")
class WishlistLoaded:
    __version__ = "v1"

    wishlist_id = Identifier(required=True)
    item_count = Integer(required=True)
