"""Tests for the Address -> Payment -> Confirmation checkout flow."""

import json

import pytest
from protean.exceptions import ValidationError
from shopping.cart.engine import CART_STORAGE_KEY, SHIPPING_ADDRESS_KEY
from shopping.checkout.address import ShippingAddress
from shopping.checkout.flow import CheckoutFlow, CheckoutStage, generate_order_id
from shopping.checkout.payment import set_gateway

CARD = {"card_number": "4111 1111 1111 1111", "expiry_date": "12/27", "cvv": "123", "card_holder": "Ayesha Khan"}


@pytest.fixture()
def address():
    return ShippingAddress(street="12 Mall Road", city="Lahore", state="Punjab", zip_code="54000")


@pytest.fixture()
def flow(cart_engine, gateway, tee, cap):
    cart_engine.add_item(**tee)
    cart_engine.add_item(**tee)
    cart_engine.add_item(**cap)
    return CheckoutFlow(cart_engine, gateway=gateway, clock=lambda: 1718000000.5)


class TestOrderId:
    def test_last_eight_digits_of_epoch_millis(self):
        assert generate_order_id(1718000000.5) == "ORD-00000500"
        assert generate_order_id(1718012345.25) == "ORD-12345250"


class TestAddressStage:
    def test_starts_at_address(self, flow):
        assert flow.stage == CheckoutStage.ADDRESS
        assert flow.summary().total == 68.18

    def test_submit_address_moves_to_payment(self, flow, store, address):
        flow.submit_address(address)
        assert flow.stage == CheckoutStage.PAYMENT
        assert flow.address == address
        assert json.loads(store.data[SHIPPING_ADDRESS_KEY])["city"] == "Lahore"

    def test_address_can_be_changed_from_payment(self, flow, cart_engine, address):
        flow.submit_address(address)
        other = ShippingAddress(street="1 Clifton", city="Karachi", zip_code="75600")
        flow.submit_address(other)
        assert flow.stage == CheckoutStage.PAYMENT
        assert cart_engine.shipping_address() == other

    def test_empty_cart_cannot_check_out(self, cart_engine, gateway, address):
        flow = CheckoutFlow(cart_engine, gateway=gateway)
        with pytest.raises(ValidationError) as exc_info:
            flow.submit_address(address)
        assert "cart" in exc_info.value.messages
        assert flow.stage == CheckoutStage.ADDRESS

    def test_address_requires_street_city_and_zip(self):
        with pytest.raises(ValidationError) as exc_info:
            ShippingAddress(city="Lahore")
        assert "street" in exc_info.value.messages
        assert "zip_code" in exc_info.value.messages


class TestPaymentStage:
    def test_cannot_pay_before_address(self, flow):
        with pytest.raises(ValidationError) as exc_info:
            flow.pay("easypaisa")
        assert "stage" in exc_info.value.messages

    def test_successful_payment_clears_cart(self, flow, cart_engine, store, gateway, address):
        flow.submit_address(address)
        confirmation = flow.pay("card", CARD)

        assert confirmation.success is True
        assert confirmation.order_id == "ORD-00000500"
        assert confirmation.transaction_id.startswith("fake_txn_")
        assert confirmation.summary.total == 68.18
        assert flow.stage == CheckoutStage.CONFIRMATION
        assert flow.confirmation is confirmation
        assert cart_engine.item_count == 0
        assert json.loads(store.data[CART_STORAGE_KEY]) == []
        assert gateway.calls == [{"method": "card", "amount": 68.18, "currency": "PKR"}]

    def test_failed_payment_keeps_cart(self, flow, cart_engine, gateway, address):
        gateway.configure(should_succeed=False, failure_reason="Insufficient funds")
        flow.submit_address(address)
        confirmation = flow.pay("easypaisa")

        assert confirmation.success is False
        assert confirmation.failure_reason == "Insufficient funds"
        assert confirmation.order_id is None
        assert flow.stage == CheckoutStage.PAYMENT
        assert cart_engine.item_count == 3

    def test_retry_after_failure(self, flow, gateway, address):
        gateway.configure(should_succeed=False)
        flow.submit_address(address)
        flow.pay("easypaisa")

        gateway.configure(should_succeed=True)
        assert flow.pay("easypaisa").success is True
        assert len(gateway.calls) == 2

    def test_invalid_details_do_not_charge(self, flow, gateway, address):
        flow.submit_address(address)
        with pytest.raises(ValidationError):
            flow.pay("jazzcash", {"phone_number": "123"})
        assert gateway.calls == []
        assert flow.stage == CheckoutStage.PAYMENT

    def test_cart_emptied_elsewhere_blocks_payment(self, flow, cart_engine, gateway, address):
        flow.submit_address(address)
        cart_engine.clear()
        with pytest.raises(ValidationError) as exc_info:
            flow.pay("easypaisa")
        assert "cart" in exc_info.value.messages
        assert gateway.calls == []


class TestConfirmationStage:
    def test_finished_checkout_is_terminal(self, flow, address):
        flow.submit_address(address)
        flow.pay("easypaisa")
        with pytest.raises(ValidationError):
            flow.pay("easypaisa")
        with pytest.raises(ValidationError):
            flow.submit_address(address)


class TestGatewaySelection:
    def test_uses_factory_gateway_by_default(self, cart_engine, gateway):
        set_gateway(gateway)
        assert CheckoutFlow(cart_engine).gateway is gateway
