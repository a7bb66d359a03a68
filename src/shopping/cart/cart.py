"""Cart aggregate: the session's line items and their derived totals.

The cart is a plain in-memory aggregate (not stored through a repository):
one instance lives inside a CartEngine for the duration of a session, and the
engine mirrors its lines to a snapshot store after every transition.

Lines are unique by product_id. Variant-specific products encode size and
colour into the product_id upstream; the cart never tells apart two lines
that share one. ``total`` and ``item_count`` are computed from the lines on
every read and are never stored.
"""

import math

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, Integer, String

from shopping.cart.events import (
    CartCleared,
    CartItemAdded,
    CartItemRemoved,
    CartLoaded,
    CartQuantityUpdated,
)
from shopping.domain import shopping


@shopping.entity(part_of="Cart")
class LineItem:
    """One distinct purchasable entry in the cart.

    Price, name and the other descriptive fields are fixed when the line is
    first added; repeat adds only bump the quantity.
    """

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    image = String(max_length=2048)
    unit_price = Float(required=True, min_value=0.0)
    original_price = Float(min_value=0.0)
    currency = String(required=True, max_length=10)
    quantity = Integer(required=True, min_value=1)
    category = String(max_length=100)
    size = String(max_length=50)
    color = String(max_length=50)

    @property
    def line_total(self):
        return self.unit_price * self.quantity


def _price_error(price, label):
    if isinstance(price, bool) or not isinstance(price, int | float):
        return [f"{label} must be a number"]
    if not math.isfinite(price):
        return [f"{label} must be finite"]
    if price < 0:
        return [f"{label} cannot be negative"]
    return None


def validate_candidate(product_id, unit_price, original_price=None):
    """Reject a product with no id or with a price that is not a finite, non-negative number."""
    errors = {}
    if product_id is None or not str(product_id).strip():
        errors["product_id"] = ["Product ID is required"]
    if unit_price is None:
        errors["unit_price"] = ["Unit price is required"]
    elif price_error := _price_error(unit_price, "Unit price"):
        errors["unit_price"] = price_error
    if original_price is not None and (price_error := _price_error(original_price, "Original price")):
        errors["original_price"] = price_error
    if errors:
        raise ValidationError(errors)


def validate_quantity(quantity):
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError({"quantity": ["Quantity must be a whole number"]})
    if quantity < 0:
        raise ValidationError({"quantity": ["Quantity cannot be negative"]})


@shopping.aggregate
class Cart:
    items = HasMany(LineItem)

    @invariant.post
    def line_items_must_be_unique(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["A product can appear only once in the cart"]})

    @invariant.post
    def line_quantities_must_be_positive(self):
        if any(item.quantity < 1 for item in self.items):
            raise ValidationError({"items": ["Line quantities must be at least 1"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls):
        return cls()

    # -------------------------------------------------------------------
    # Derived aggregates
    # -------------------------------------------------------------------
    @property
    def total(self):
        return round(sum(item.unit_price * item.quantity for item in self.items), 2)

    @property
    def item_count(self):
        return sum(item.quantity for item in self.items)

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def is_in_cart(self, product_id):
        return self.find_item(product_id) is not None

    def quantity_of(self, product_id):
        item = self.find_item(product_id)
        return item.quantity if item else 0

    # -------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------
    def add_item(
        self,
        product_id,
        name,
        unit_price,
        currency,
        image=None,
        original_price=None,
        category=None,
        size=None,
        color=None,
    ):
        """Add one unit of a product.

        An unknown product_id is appended as a new line with quantity 1. A known
        one has its quantity bumped by 1 and keeps every other field it was first
        added with, even if the candidate carries a different price or name.
        """
        validate_candidate(product_id, unit_price, original_price)

        existing = self.find_item(product_id)
        if existing:
            existing.quantity += 1
            line = existing
        else:
            line = LineItem(
                product_id=product_id,
                name=name,
                image=image,
                unit_price=unit_price,
                original_price=original_price,
                currency=currency,
                quantity=1,
                category=category,
                size=size,
                color=color,
            )
            self.add_items(line)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(line.product_id),
                name=line.name,
                unit_price=line.unit_price,
                quantity=line.quantity,
            )
        )
        return line

    def remove_item(self, product_id):
        """Remove a line. Returns False (and does nothing) when it is absent."""
        item = self.find_item(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                product_id=str(product_id),
                quantity=item.quantity,
            )
        )
        return True

    def update_quantity(self, product_id, quantity):
        """Set a line's quantity to an absolute value.

        Zero removes the line; an absent line is left alone; negative values are
        rejected.
        """
        validate_quantity(quantity)

        if quantity == 0:
            return self.remove_item(product_id)

        item = self.find_item(product_id)
        if item is None:
            return False

        previous_quantity = item.quantity
        if previous_quantity == quantity:
            return False

        item.quantity = quantity
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
            )
        )
        return True

    def clear(self):
        lines_removed = len(self.items)
        with atomic_change(self):
            for item in list(self.items):
                self.remove_items(item)

        self.raise_(CartCleared(cart_id=str(self.id), lines_removed=lines_removed))

    def load(self, entries):
        """Replace every line with the given entries (restored from a snapshot).

        Entries are keyword dicts for LineItem. Repeated product_ids are merged:
        the first entry's fields win and quantities add up. Every entry is
        validated before the cart is touched, so a bad entry leaves it unchanged.
        """
        lines = []
        by_product = {}
        for entry in entries:
            validate_candidate(entry.get("product_id"), entry.get("unit_price"), entry.get("original_price"))
            key = str(entry["product_id"])
            if key in by_product:
                by_product[key].quantity += LineItem(**entry).quantity
                continue
            line = LineItem(**entry)
            by_product[key] = line
            lines.append(line)

        with atomic_change(self):
            for item in list(self.items):
                self.remove_items(item)
            for line in lines:
                self.add_items(line)

        self.raise_(
            CartLoaded(
                cart_id=str(self.id),
                line_count=len(self.items),
                item_count=self.item_count,
            )
        )
