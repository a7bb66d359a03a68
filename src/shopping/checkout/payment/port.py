"""Payment gateway port (abstract interface).

The storefront only simulates payment; this port keeps the checkout flow
unaware of whether the outcome comes from a coin flip or a scripted fake.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum


class PaymentMethod(Enum):
    JAZZCASH = "jazzcash"
    CARD = "card"
    EASYPAISA = "easypaisa"


@dataclass(frozen=True)
class ChargeResult:
    """Result of a payment charge attempt."""

    success: bool
    transaction_id: str | None = None
    failure_reason: str | None = None


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def charge(self, amount: float, currency: str | None, method: PaymentMethod) -> ChargeResult:
        """Charge ``amount`` using ``method``."""
        ...
