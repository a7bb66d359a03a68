"""Catalogue → cart pricing.

The catalogue lists prices in USD or PKR; the cart always holds PKR. Conversion
uses a fixed multiplier, rounded half-up to whole rupees, and happens here,
before a product reaches the cart engine (which never converts).
"""

from decimal import ROUND_HALF_UP, Decimal

from protean.exceptions import ValidationError

USD_TO_PKR = 280
CART_CURRENCY = "PKR"


def to_pkr(price, currency=None):
    """Return ``price`` in PKR. Prices already tagged PKR pass through unchanged."""
    if price is None:
        raise ValidationError({"price": ["Price is required"]})
    if currency == CART_CURRENCY:
        return price
    converted = (Decimal(str(price)) * USD_TO_PKR).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return float(converted)


def variant_product_id(product_id, size=None, color=None):
    """Fold the chosen size and colour into the line identity.

    ``variant_product_id("42", "M", "red") == "42-M-red"``; with no variant the
    catalogue id is used as-is.
    """
    parts = [str(product_id)] + [str(part) for part in (size, color) if part]
    return "-".join(parts)


def line_item_candidate(product, size=None, color=None):
    """Build ``CartEngine.add_item`` keyword arguments from a catalogue product.

    ``product`` is a catalogue mapping with ``id``, ``name``, ``price`` and
    optionally ``currency``, ``originalPrice``, ``image`` and ``category``.
    """
    if product.get("id") in (None, ""):
        raise ValidationError({"id": ["Product ID is required"]})

    currency = product.get("currency")
    original_price = product.get("originalPrice")

    return {
        "product_id": variant_product_id(product["id"], size, color),
        "name": product.get("name"),
        "unit_price": to_pkr(product.get("price"), currency),
        "original_price": to_pkr(original_price, currency) if original_price is not None else None,
        "currency": CART_CURRENCY,
        "image": product.get("image"),
        "category": product.get("category"),
        "size": size,
        "color": color,
    }
