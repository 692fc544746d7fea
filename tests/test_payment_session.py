"""Tests for the client-side payment session."""

import json

import httpx
import pytest

from storefront.client.payment import (
    CART_SNAPSHOT_KEY,
    CART_TOTAL_KEY,
    PaymentSession,
    PaymentState,
    snapshot_cart,
)
from storefront.client.storage import MemoryStorage
from storefront.errors import InvalidAmount, MissingCartSnapshot, ProcessorError

CART = [{"id": "p2", "name": "Argan Oil", "price": 24.0, "quantity": 2}]


class StorefrontStub:
    def __init__(self, create=None, capture=None):
        self.requests: list[httpx.Request] = []
        self.create = create or httpx.Response(200, json={"id": "PP-1", "status": "CREATED"})
        self.capture = capture or httpx.Response(200, json={"success": True, "order": {"id": "o-1"}})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/api/checkout":
            return self.create
        if request.url.path == "/api/checkout/capture":
            return self.capture
        return httpx.Response(404)


def make_session(stub, storage=None):
    http = httpx.Client(base_url="http://storefront.test", transport=httpx.MockTransport(stub.handler))
    return PaymentSession(http, storage if storage is not None else MemoryStorage())


class TestCreateOrder:
    @pytest.mark.parametrize("amount", [0, -5, float("nan")])
    def test_invalid_amount_rejected_locally(self, amount):
        stub = StorefrontStub()
        session = make_session(stub)
        with pytest.raises(InvalidAmount):
            session.create_order(amount)
        assert stub.requests == []
        assert session.state == PaymentState.ERRORED
        assert session.error == "Cannot process payment: invalid amount"
        assert session.processing is False

    def test_success(self):
        stub = StorefrontStub()
        session = make_session(stub)
        assert session.create_order(52.5, CART) == "PP-1"
        assert session.external_order_id == "PP-1"
        assert session.state == PaymentState.CREATED
        assert session.error is None
        sent = json.loads(stub.requests[0].content)
        assert sent == {"amount": 52.5, "items": CART}

    def test_non_2xx(self):
        stub = StorefrontStub(create=httpx.Response(500, text="boom"))
        session = make_session(stub)
        with pytest.raises(ProcessorError) as exc_info:
            session.create_order(10)
        assert "API error: 500" in exc_info.value.message
        assert session.error.startswith("API error: 500")
        assert session.external_order_id is None

    def test_missing_order_id(self):
        stub = StorefrontStub(create=httpx.Response(200, json={"status": "CREATED"}))
        session = make_session(stub)
        with pytest.raises(ProcessorError, match="No order ID"):
            session.create_order(10)
        assert session.state == PaymentState.ERRORED

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        http = httpx.Client(base_url="http://storefront.test", transport=httpx.MockTransport(handler))
        session = PaymentSession(http, MemoryStorage())
        with pytest.raises(ProcessorError):
            session.create_order(10)
        assert session.processing is False


class TestCaptureOrder:
    def test_missing_snapshot(self):
        stub = StorefrontStub()
        session = make_session(stub)
        with pytest.raises(MissingCartSnapshot):
            session.capture_order("PP-1")
        assert stub.requests == []
        assert session.state == PaymentState.ERRORED

    @pytest.mark.parametrize("raw", ["[]", "{}", "not json"])
    def test_empty_or_invalid_snapshot(self, raw):
        stub = StorefrontStub()
        session = make_session(stub, MemoryStorage({CART_SNAPSHOT_KEY: raw}))
        with pytest.raises(MissingCartSnapshot):
            session.capture_order("PP-1")
        assert stub.requests == []

    def test_posts_snapshot(self):
        stub = StorefrontStub()
        storage = MemoryStorage()
        snapshot_cart(storage, CART, 83.0)
        session = make_session(stub, storage)

        result = session.capture_order("PP-1")

        assert result["success"] is True
        assert session.state == PaymentState.CAPTURED
        request = stub.requests[0]
        assert request.url.params["orderID"] == "PP-1"
        assert json.loads(request.content) == {"cartItems": CART, "total": 83.0}

    def test_server_rejection_surfaces_as_error(self):
        body = {"detail": {"error": "Some products not found in database", "missing_product_ids": ["p2"]}}
        stub = StorefrontStub(capture=httpx.Response(400, json=body))
        storage = MemoryStorage()
        snapshot_cart(storage, CART, 83.0)
        session = make_session(stub, storage)
        with pytest.raises(ProcessorError) as exc_info:
            session.capture_order("PP-1")
        assert "Some products not found" in exc_info.value.message
        assert session.error == exc_info.value.message


def test_snapshot_writes_both_keys():
    storage = MemoryStorage()
    snapshot_cart(storage, CART, 83.0)
    assert json.loads(storage.get_item(CART_SNAPSHOT_KEY)) == CART
    assert storage.get_item(CART_TOTAL_KEY) == "83.0"


def test_reset():
    stub = StorefrontStub(create=httpx.Response(500, text="boom"))
    session = make_session(stub)
    with pytest.raises(ProcessorError):
        session.create_order(10)
    session.reset()
    assert session.state == PaymentState.IDLE
    assert session.error is None
    assert session.external_order_id is None
    assert session.processing is False
