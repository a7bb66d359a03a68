"""Read-only cart views and the snapshot wire format.

``CartSnapshot`` is what the UI renders: the lines plus the derived total and
item count, frozen at the moment it was taken.

The snapshot store holds only the lines, as a JSON array of camelCase objects
(``id``, ``name``, ``image``, ``unitPrice``, ``originalPrice``, ``currency``,
``quantity``, ``category``, ``size``, ``color``). Snapshots written by the
legacy browser client use ``price`` instead of ``unitPrice``; both are
accepted on read.
"""

from dataclasses import dataclass, field

from shopping.snapshot.codec import decode_records, encode_records

LINE_ITEM_WIRE_FIELDS = (
    ("product_id", "id"),
    ("name", "name"),
    ("image", "image"),
    ("unit_price", "unitPrice"),
    ("original_price", "originalPrice"),
    ("currency", "currency"),
    ("quantity", "quantity"),
    ("category", "category"),
    ("size", "size"),
    ("color", "color"),
)

LEGACY_WIRE_KEYS = {"price": "unit_price"}


@dataclass(frozen=True)
class LineItemView:
    """Immutable copy of one cart line."""

    product_id: str
    name: str
    unit_price: float
    currency: str
    quantity: int
    image: str | None = None
    original_price: float | None = None
    category: str | None = None
    size: str | None = None
    color: str | None = None

    @classmethod
    def from_entity(cls, item) -> "LineItemView":
        return cls(
            product_id=str(item.product_id),
            name=item.name,
            unit_price=item.unit_price,
            currency=item.currency,
            quantity=item.quantity,
            image=item.image,
            original_price=item.original_price,
            category=item.category,
            size=item.size,
            color=item.color,
        )

    @property
    def line_total(self) -> float:
        return round(self.unit_price * self.quantity, 2)

    def to_dict(self) -> dict:
        return {key: getattr(self, attr) for attr, key in LINE_ITEM_WIRE_FIELDS if getattr(self, attr) is not None}


@dataclass(frozen=True)
class CartSnapshot:
    """Read-only view of a cart for rendering."""

    items: tuple[LineItemView, ...] = field(default_factory=tuple)
    total: float = 0.0
    item_count: int = 0

    @classmethod
    def from_cart(cls, cart) -> "CartSnapshot":
        return cls(
            items=tuple(LineItemView.from_entity(item) for item in cart.items),
            total=cart.total,
            item_count=cart.item_count,
        )

    def to_dict(self) -> dict:
        return {
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "itemCount": self.item_count,
        }


def encode_items(items) -> str:
    """Serialize cart lines to the snapshot JSON array."""
    return encode_records([LineItemView.from_entity(item) for item in items], LINE_ITEM_WIRE_FIELDS)


def decode_items(raw: str) -> list[dict]:
    """Parse a snapshot JSON array into LineItem keyword dicts.

    Raises ValidationError when the payload is not a JSON array of objects.
    Field-level problems (missing name, zero quantity, ...) surface when the
    dicts are turned into LineItem entities.
    """
    return decode_records(raw, LINE_ITEM_WIRE_FIELDS, LEGACY_WIRE_KEYS)
