"""Shopping bounded context: Cart, Wishlist and Checkout.

Holds the session-scoped shopping state of a storefront visitor: the cart
(line items with derived totals), the wishlist, and the checkout flow that
consumes the cart. State is mirrored to a key-value snapshot store so it
survives page reloads.
"""

import structlog
from protean.domain import Domain

shopping = Domain(name="shopping")

logger = structlog.get_logger(__name__)
