"""Tests for the client-side cart holder."""

import json

import pytest

from storefront.client.cart import CART_STORAGE_KEY, CartHolder
from storefront.client.storage import MemoryStorage
from storefront.schemas import ProductRead

RUG = ProductRead(id="p1", name="Berber Rug", price=100.0, discount=10.0)
OIL = ProductRead(id="p2", name="Argan Oil", price=24.0, weight=0.3)
TAGINE = ProductRead(id="p3", name="Ceramic Tagine", price=45.0, weight=2.0)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def cart(storage):
    return CartHolder(storage)


class TestMutations:
    def test_add_merges_same_product(self, cart):
        cart.add(OIL, 2)
        cart.add(OIL, 3)
        assert len(cart) == 1
        assert cart.items[0].quantity == 5

    def test_add_distinct_products(self, cart):
        cart.add(OIL, 1)
        cart.add(TAGINE, 1)
        assert [it.product_id for it in cart.items] == ["p2", "p3"]

    def test_add_snapshots_product_fields(self, cart):
        cart.add(RUG, 1)
        line = cart.items[0]
        assert line.unit_price == 100.0
        assert line.discount_percent == 10.0
        assert line.weight_kg is None

    def test_add_rejects_zero_quantity(self, cart):
        with pytest.raises(ValueError):
            cart.add(OIL, 0)

    def test_set_quantity(self, cart):
        cart.add(OIL, 1)
        cart.set_quantity("p2", 4)
        assert cart.items[0].quantity == 4

    def test_set_quantity_below_one_ignored(self, cart):
        cart.add(OIL, 2)
        cart.set_quantity("p2", 0)
        assert cart.items[0].quantity == 2

    def test_remove(self, cart):
        cart.add(OIL, 1)
        cart.add(TAGINE, 1)
        cart.remove("p2")
        assert [it.product_id for it in cart.items] == ["p3"]

    def test_clear(self, cart, storage):
        cart.add(OIL, 1)
        cart.clear()
        assert len(cart) == 0
        assert json.loads(storage.get_item(CART_STORAGE_KEY)) == []


class TestTotals:
    def test_no_discount_total_equals_subtotal(self, cart):
        cart.add(OIL, 2)
        cart.add(TAGINE, 1)
        assert cart.subtotal == pytest.approx(93.0)
        assert cart.total == pytest.approx(cart.subtotal)
        assert cart.item_count == 3

    def test_discount_lowers_total(self, cart):
        cart.add(RUG, 2)
        cart.add(OIL, 1)
        assert cart.subtotal == pytest.approx(224.0)
        assert cart.total == pytest.approx(204.0)
        assert cart.total < cart.subtotal

    def test_total_weight_defaults_missing_weights(self, cart):
        cart.add(RUG, 2)  # no weight: 0.5 kg each
        cart.add(TAGINE, 1)
        assert cart.total_weight() == pytest.approx(3.0)

    def test_total_weight_minimum(self, cart):
        cart.add(ProductRead(id="p9", name="Postcard", price=2.0, weight=0.01), 1)
        assert cart.total_weight() == 0.5

    def test_same_product_quantity(self, cart):
        cart.add(OIL, 4)
        assert cart.same_product_quantity() == 4
        cart.add(TAGINE, 1)
        assert cart.same_product_quantity() == 1


class TestPersistence:
    def test_rehydrates_from_storage(self, cart, storage):
        cart.add(RUG, 2)
        cart.add(OIL, 1)
        reloaded = CartHolder(storage)
        assert [(it.product_id, it.quantity) for it in reloaded.items] == [("p1", 2), ("p2", 1)]
        assert reloaded.total == pytest.approx(cart.total)

    def test_stored_with_browser_keys(self, cart, storage):
        cart.add(RUG, 1)
        stored = json.loads(storage.get_item(CART_STORAGE_KEY))
        assert stored == [{"id": "p1", "name": "Berber Rug", "price": 100.0, "quantity": 1, "discount": 10.0}]

    def test_corrupt_storage_starts_empty(self):
        storage = MemoryStorage({CART_STORAGE_KEY: "{not json"})
        assert len(CartHolder(storage)) == 0

    def test_invalid_line_starts_empty(self):
        storage = MemoryStorage({CART_STORAGE_KEY: json.dumps([{"id": "p1", "price": 5, "quantity": 0}])})
        assert len(CartHolder(storage)) == 0


def test_total_uses_whole_cent_line_prices(cart):
    cart.add(ProductRead(id="p9", name="Mint Tea", price=9.99, discount=15.0), 1000)
    # 9.99 at 15% off is 8.4915, recorded as 8.49
    assert cart.total == pytest.approx(8490.0)
