"""Simulated payment gateway: every charge is a weighted coin flip.

Mirrors the storefront's demo checkout, where nine payments in ten go
through. The random source is injectable so tests can make it deterministic.
"""

import random
from uuid import uuid4

import structlog

from shopping.checkout.payment.port import ChargeResult, PaymentGateway, PaymentMethod

logger = structlog.get_logger(__name__)

PAYMENT_SUCCESS_RATE = 0.9


class CoinFlipGateway(PaymentGateway):
    def __init__(self, success_rate: float = PAYMENT_SUCCESS_RATE, rng: random.Random | None = None) -> None:
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    def charge(self, amount: float, currency: str | None, method: PaymentMethod) -> ChargeResult:
        # random() is in [0, 1): a rate of 1.0 always succeeds, 0.0 never does
        succeeded = self.rng.random() < self.success_rate
        logger.info("simulated_charge", amount=amount, currency=currency, method=method.value, success=succeeded)

        if succeeded:
            return ChargeResult(success=True, transaction_id=f"sim_txn_{uuid4().hex[:12]}")
        return ChargeResult(
            success=False,
            failure_reason="Payment failed. Please try again or use a different payment method.",
        )
