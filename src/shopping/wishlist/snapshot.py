"""Read-only wishlist views and the snapshot wire format.

Persisted as a JSON array of ``{id, name, unitPrice, image, originalPrice,
category}`` objects; the legacy ``price`` key is accepted on read.
"""

from dataclasses import dataclass, field

from shopping.snapshot.codec import decode_records, encode_records

WISHLIST_ITEM_WIRE_FIELDS = (
    ("product_id", "id"),
    ("name", "name"),
    ("unit_price", "unitPrice"),
    ("image", "image"),
    ("original_price", "originalPrice"),
    ("category", "category"),
)


@dataclass(frozen=True)
class WishlistItemView:
    product_id: str
    name: str
    unit_price: float
    image: str | None = None
    original_price: float | None = None
    category: str | None = None

    @classmethod
    def from_entity(cls, item) -> "WishlistItemView":
        return cls(
            product_id=str(item.product_id),
            name=item.name,
            unit_price=item.unit_price,
            image=item.image,
            original_price=item.original_price,
            category=item.category,
        )


@dataclass(frozen=True)
class WishlistSnapshot:
    items: tuple[WishlistItemView, ...] = field(default_factory=tuple)
    item_count: int = 0

    @classmethod
    def from_wishlist(cls, wishlist) -> "WishlistSnapshot":
        return cls(
            items=tuple(WishlistItemView.from_entity(item) for item in wishlist.items),
            item_count=wishlist.item_count,
        )


def encode_wishlist_items(items) -> str:
    return encode_records([WishlistItemView.from_entity(item) for item in items], WISHLIST_ITEM_WIRE_FIELDS)


def decode_wishlist_items(raw: str) -> list[dict]:
    return decode_records(raw, WISHLIST_ITEM_WIRE_FIELDS, {"price": "unit_price"})
