"""Client-side payment session: create and capture a PayPal order through the
storefront API.

Buyer approval happens in a detached PayPal window that may reload the
page, so capture never relies on in-memory cart state. The checkout flow
writes a cart snapshot to storage right before each processor call and
``capture_order`` reads it back from there.
"""
import json
import logging
from enum import Enum
from typing import Any, List, Optional

import httpx

from storefront.client.storage import Storage
from storefront.errors import CheckoutError, InvalidAmount, MissingCartSnapshot, ProcessorError

logger = logging.getLogger(__name__)

CART_SNAPSHOT_KEY = "cart"
CART_TOTAL_KEY = "cartTotal"


class PaymentState(str, Enum):
    IDLE = "idle"
    CREATING = "creating"
    CREATED = "created"
    CAPTURING = "capturing"
    CAPTURED = "captured"
    ERRORED = "errored"


def snapshot_cart(storage: Storage, items: List[dict], total: float) -> None:
    storage.set_item(CART_SNAPSHOT_KEY, json.dumps(items))
    storage.set_item(CART_TOTAL_KEY, str(total))


def read_cart_snapshot(storage: Storage) -> tuple[list, float]:
    raw = storage.get_item(CART_SNAPSHOT_KEY)
    if not raw:
        raise MissingCartSnapshot()
    try:
        items = json.loads(raw)
    except ValueError as exc:
        raise MissingCartSnapshot("Failed to retrieve cart data: invalid JSON") from exc
    if not isinstance(items, list) or not items:
        raise MissingCartSnapshot("Cart is empty or invalid")
    try:
        total = float(storage.get_item(CART_TOTAL_KEY) or 0)
    except ValueError:
        total = 0.0
    return items, total


class PaymentSession:
    def __init__(self, http: httpx.Client, storage: Storage):
        self.http = http
        self.storage = storage
        self.state = PaymentState.IDLE
        self.processing = False
        self.error: Optional[str] = None
        self.external_order_id: Optional[str] = None

    def _fail(self, exc: CheckoutError) -> None:
        logger.error("Payment %s failed: %s", self.state.value, exc.message)
        self.error = exc.message
        self.state = PaymentState.ERRORED

    def _post(self, url: str, **kwargs) -> Any:
        try:
            resp = self.http.post(url, **kwargs)
        except httpx.RequestError as exc:
            raise ProcessorError(f"Network error: {exc}", status_code=503) from exc
        if resp.status_code >= 400:
            raise ProcessorError(f"API error: {resp.status_code} - {resp.text}", status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as exc:
            raise ProcessorError("Malformed response from payment API") from exc

    def create_order(self, amount: float, items: Optional[List[dict]] = None) -> str:
        self.processing = True
        self.error = None
        self.state = PaymentState.CREATING
        try:
            if amount is None or not amount > 0:
                raise InvalidAmount()
            data = self._post("/api/checkout", json={"amount": amount, "items": items})
            order_id = data.get("id") if isinstance(data, dict) else None
            if not order_id:
                raise ProcessorError("No order ID returned from PayPal")
        except CheckoutError as exc:
            self._fail(exc)
            raise
        finally:
            self.processing = False
        self.external_order_id = order_id
        self.state = PaymentState.CREATED
        return order_id

    def capture_order(self, order_id: str) -> dict:
        self.processing = True
        self.error = None
        self.state = PaymentState.CAPTURING
        try:
            items, total = read_cart_snapshot(self.storage)
            data = self._post(
                "/api/checkout/capture",
                params={"orderID": order_id},
                json={"cartItems": items, "total": total},
            )
        except CheckoutError as exc:
            self._fail(exc)
            raise
        finally:
            self.processing = False
        self.state = PaymentState.CAPTURED
        return data

    def reset(self) -> None:
        self.external_order_id = None
        self.error = None
        self.processing = False
        self.state = PaymentState.IDLE
