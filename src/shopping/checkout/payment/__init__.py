"""Payment gateway factory.

Provides get_gateway() / set_gateway() / reset_gateway() to swap implementations:
- CoinFlipGateway, the storefront's simulated payment (default)
- FakeGateway for deterministic tests

Selected with the PAYMENT_GATEWAY environment variable ("coin_flip" or "fake").
"""

import os

from shopping.checkout.payment.port import PaymentGateway

_current_gateway: PaymentGateway | None = None


def get_gateway() -> PaymentGateway:
    """Return the current payment gateway. Defaults to CoinFlipGateway."""
    global _current_gateway
    if _current_gateway is None:
        adapter = os.environ.get("PAYMENT_GATEWAY", "coin_flip")
        if adapter == "coin_flip":
            from shopping.checkout.payment.coin_flip_adapter import CoinFlipGateway

            _current_gateway = CoinFlipGateway()
        elif adapter == "fake":
            from shopping.checkout.payment.fake_adapter import FakeGateway

            _current_gateway = FakeGateway()
        else:
            raise ValueError(f"Unknown payment gateway: {adapter}")
    return _current_gateway


def set_gateway(gateway: PaymentGateway) -> None:
    """Override the active payment gateway (useful for tests)."""
    global _current_gateway
    _current_gateway = gateway


def reset_gateway() -> None:
    """Reset to default gateway."""
    global _current_gateway
    _current_gateway = None
