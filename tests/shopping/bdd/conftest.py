"""Shared BDD fixtures and step definitions for the Shopping domain."""

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, then
from shopping.cart.engine import CartEngine


class Visit:
    """One visitor's browser session: a store and the engine rendered from it."""

    def __init__(self, store):
        self.store = store
        self.cart = CartEngine(store)

    def reload(self):
        self.cart = CartEngine(self.store)

    def add(self, product_id, price):
        self.cart.add_item(product_id=product_id, name=product_id, unit_price=price, currency="PKR")


@pytest.fixture()
def visit(store):
    return Visit(store)


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("an empty cart")
def empty_cart(visit):
    assert visit.cart.item_count == 0


@given(parsers.cfparse('the cart holds "{product_id}" priced {price:g}'))
def cart_holds(visit, product_id, price):
    visit.add(product_id, price)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart total is {total:g}"))
def cart_total_is(visit, total):
    assert visit.cart.total == pytest.approx(total)


@then(parsers.cfparse("the cart holds {count:d} items"))
def cart_holds_n_items(visit, count):
    assert visit.cart.item_count == count


@then("the cart action fails with a validation error")
def cart_action_fails(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)
