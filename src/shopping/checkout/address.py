"""Shipping address captured at the Address stage of checkout."""

import json

from protean.exceptions import ValidationError
from protean.fields import String

from shopping.domain import shopping


@shopping.value_object
class ShippingAddress:
    """Where the order should be delivered.

    Written to the snapshot store as a display aid for the later checkout
    stages; the cart itself never reads or validates it.
    """

    street = String(required=True, max_length=255)
    city = String(required=True, max_length=100)
    state = String(max_length=100)
    zip_code = String(required=True, max_length=20)

    def to_json(self) -> str:
        return json.dumps(
            {
                "street": self.street,
                "city": self.city,
                "state": self.state,
                "zip": self.zip_code,
            }
        )

    @classmethod
    def from_json(cls, raw: str) -> "ShippingAddress":
        try:
            data = json.loads(raw)
        except (TypeError, ValueError) as exc:
            raise ValidationError({"address": [f"Address is not valid JSON: {exc}"]}) from exc
        if not isinstance(data, dict):
            raise ValidationError({"address": ["Address must be a JSON object"]})

        return cls(
            street=data.get("street"),
            city=data.get("city"),
            state=data.get("state"),
            zip_code=data.get("zip") or data.get("zip_code"),
        )
