"""Payment details validation, using the storefront's payment form rules."""

import re

from protean.exceptions import ValidationError

from shopping.checkout.payment.port import PaymentMethod

_CARD_NUMBER = re.compile(r"^\d{4} \d{4} \d{4} \d{4}$")
_EXPIRY = re.compile(r"^\d{2}/\d{2}$")
_CVV = re.compile(r"^\d{3,4}$")
_PK_MOBILE = re.compile(r"^03\d{9}$")


def format_card_number(raw: str) -> str:
    """Group a card number in fours: ``"4111111111111111"`` -> ``"4111 1111 1111 1111"``."""
    digits = re.sub(r"\s", "", raw or "")
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


def validate_payment_details(method, details=None) -> PaymentMethod:
    """Check the form fields required by ``method``; returns the parsed method.

    Card payments need ``card_number``, ``expiry_date``, ``cvv`` and
    ``card_holder``; JazzCash needs ``phone_number`` and ``email``. EasyPaisa
    needs nothing.
    """
    try:
        method = PaymentMethod(method)
    except ValueError as exc:
        raise ValidationError({"method": [f"Unsupported payment method: {method}"]}) from exc

    details = details or {}
    errors = {}

    if method == PaymentMethod.CARD:
        card_number = format_card_number(details.get("card_number", ""))
        if not _CARD_NUMBER.match(card_number):
            errors["card_number"] = ["Please enter a valid 16-digit card number"]
        if not _EXPIRY.match(details.get("expiry_date") or ""):
            errors["expiry_date"] = ["Please enter a valid expiry date (MM/YY)"]
        if not _CVV.match(details.get("cvv") or ""):
            errors["cvv"] = ["Please enter a valid CVV"]
        if not (details.get("card_holder") or "").strip():
            errors["card_holder"] = ["Card holder name is required"]

    elif method == PaymentMethod.JAZZCASH:
        if not _PK_MOBILE.match(details.get("phone_number") or ""):
            errors["phone_number"] = ["Please enter a valid Pakistani mobile number (03XXXXXXXXX)"]
        if not (details.get("email") or "").strip():
            errors["email"] = ["Email is required"]

    if errors:
        raise ValidationError(errors)
    return method
