"""Checkout flow: Address → Payment → Confirmation.

Drives one checkout attempt over a CartEngine. The cart is only read until
payment succeeds; at that point it is cleared and the flow reaches its
terminal Confirmation stage. A failed payment keeps the flow at the Payment
stage with the cart intact, so the visitor can retry.

Stages cannot be skipped: paying before an address was submitted, or touching
a finished checkout, raises ValidationError.
"""

import time
from dataclasses import dataclass
from enum import Enum

import structlog
from protean.exceptions import ValidationError

from shopping.checkout.address import ShippingAddress
from shopping.checkout.payment import get_gateway
from shopping.checkout.payment.details import validate_payment_details
from shopping.checkout.payment.port import PaymentGateway
from shopping.checkout.summary import OrderSummary

logger = structlog.get_logger(__name__)


class CheckoutStage(Enum):
    ADDRESS = "Address"
    PAYMENT = "Payment"
    CONFIRMATION = "Confirmation"


@dataclass(frozen=True)
class Confirmation:
    """Outcome of a payment attempt."""

    success: bool
    summary: OrderSummary
    order_id: str | None = None
    transaction_id: str | None = None
    failure_reason: str | None = None


def generate_order_id(now: float) -> str:
    """``ORD-`` followed by the last 8 digits of the epoch time in milliseconds."""
    return f"ORD-{str(int(now * 1000))[-8:]}"


class CheckoutFlow:
    def __init__(self, cart_engine, gateway: PaymentGateway | None = None, clock=time.time) -> None:
        self.cart_engine = cart_engine
        self.gateway = gateway or get_gateway()
        self.clock = clock
        self.stage = CheckoutStage.ADDRESS
        self.address: ShippingAddress | None = None
        self.confirmation: Confirmation | None = None

    def _require_stage(self, *stages: CheckoutStage) -> None:
        if self.stage not in stages:
            expected = " or ".join(stage.value for stage in stages)
            raise ValidationError(
                {"stage": [f"Checkout is at the {self.stage.value} stage; expected {expected}"]}
            )

    def _require_items(self) -> None:
        if self.cart_engine.item_count == 0:
            raise ValidationError({"cart": ["Your cart is empty"]})

    def summary(self) -> OrderSummary:
        return OrderSummary.from_cart(self.cart_engine.snapshot())

    def submit_address(self, address: ShippingAddress) -> None:
        """Record the shipping address and move on to payment.

        Allowed again from the Payment stage, for a visitor who goes back to
        change the address.
        """
        self._require_stage(CheckoutStage.ADDRESS, CheckoutStage.PAYMENT)
        self._require_items()

        self.cart_engine.update_shipping_address(address)
        self.address = address
        self.stage = CheckoutStage.PAYMENT
        logger.info("checkout_address_submitted", city=address.city)

    def pay(self, method, details=None) -> Confirmation:
        """Attempt payment for the current cart."""
        self._require_stage(CheckoutStage.PAYMENT)
        self._require_items()

        payment_method = validate_payment_details(method, details)
        summary = self.summary()
        result = self.gateway.charge(summary.total, summary.currency, payment_method)

        if not result.success:
            logger.warning("checkout_payment_failed", method=payment_method.value, reason=result.failure_reason)
            return Confirmation(success=False, summary=summary, failure_reason=result.failure_reason)

        order_id = generate_order_id(self.clock())
        self.cart_engine.clear()
        self.stage = CheckoutStage.CONFIRMATION
        self.confirmation = Confirmation(
            success=True,
            summary=summary,
            order_id=order_id,
            transaction_id=result.transaction_id,
        )
        logger.info("checkout_completed", order_id=order_id, total=summary.total)
        return self.confirmation
