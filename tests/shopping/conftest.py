import random

import pytest
from protean.integrations.pytest import DomainFixture

# Register every domain element before the domain is initialized
import shopping.cart.engine  # noqa: F401
import shopping.checkout.flow  # noqa: F401
import shopping.wishlist.engine  # noqa: F401
from shopping.checkout.payment.fake_adapter import FakeGateway
from shopping.snapshot.memory_adapter import InMemorySnapshotStore


@pytest.fixture(scope="session")
def shopping_bed():
    from shopping.domain import shopping

    bed = DomainFixture(shopping)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(shopping_bed):
    with shopping_bed.domain_context():
        yield


@pytest.fixture()
def store():
    return InMemorySnapshotStore()


@pytest.fixture()
def cart_engine(store):
    from shopping.cart.engine import CartEngine

    return CartEngine(store)


@pytest.fixture()
def wishlist_engine(store):
    from shopping.wishlist.engine import WishlistEngine

    return WishlistEngine(store)


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def rng():
    return random.Random(20240601)


@pytest.fixture()
def tee():
    return {
        "product_id": "tee-001",
        "name": "Classic Cotton T-Shirt",
        "unit_price": 25.99,
        "currency": "PKR",
        "image": "https://images.example.com/tee.jpg",
        "original_price": 35.99,
        "category": "men",
    }


@pytest.fixture()
def cap():
    return {
        "product_id": "cap-001",
        "name": "Baseball Cap",
        "unit_price": 10.0,
        "currency": "PKR",
        "image": "https://images.example.com/cap.jpg",
    }
