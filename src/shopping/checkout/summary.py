"""Order summary shown on the checkout pages."""

from dataclasses import dataclass

FREE_SHIPPING_THRESHOLD = 50
SHIPPING_FEE = 9.99
TAX_RATE = 0.10


@dataclass(frozen=True)
class OrderSummary:
    subtotal: float
    shipping: float
    tax: float
    total: float
    item_count: int
    currency: str | None = None

    @property
    def free_shipping(self) -> bool:
        return self.shipping == 0

    @classmethod
    def from_cart(cls, snapshot) -> "OrderSummary":
        """Price a cart snapshot: free shipping from the threshold up, flat tax on the subtotal."""
        subtotal = snapshot.total
        shipping = 0.0 if subtotal >= FREE_SHIPPING_THRESHOLD else SHIPPING_FEE
        tax = round(subtotal * TAX_RATE, 2)
        currencies = {item.currency for item in snapshot.items}
        return cls(
            subtotal=subtotal,
            shipping=shipping,
            tax=tax,
            total=round(subtotal + shipping + tax, 2),
            item_count=snapshot.item_count,
            currency=currencies.pop() if len(currencies) == 1 else None,
        )
