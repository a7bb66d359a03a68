"""Configurable fake payment gateway for testing.

Always succeeds or always fails, as configured, and records every call.
"""

from uuid import uuid4

from shopping.checkout.payment.port import ChargeResult, PaymentGateway, PaymentMethod


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Card declined"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Card declined") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def charge(self, amount: float, currency: str | None, method: PaymentMethod) -> ChargeResult:
        self.calls.append({"method": method.value, "amount": amount, "currency": currency})

        if self.should_succeed:
            return ChargeResult(success=True, transaction_id=f"fake_txn_{uuid4().hex[:12]}")
        return ChargeResult(success=False, failure_reason=self.failure_reason)
