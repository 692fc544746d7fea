import logging
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from storefront.client.cart import CartHolder
from storefront.client.payment import PaymentSession, snapshot_cart
from storefront.client.storage import Storage
from storefront.core.config import settings
from storefront.errors import InvalidCartData
from storefront.shipping import ShippingMethod, calculate_shipping_cost, get_delivery_estimate

logger = logging.getLogger(__name__)


@dataclass
class CheckoutQuote:
    subtotal: float
    shipping: float
    total: float
    delivery_estimate: str


class CheckoutFlow:
    """Drives one checkout: quote, create, approve, capture, clear.

    ``approve`` stands in for the buyer approving the order in the PayPal
    window; it receives the PayPal order id and returns once approved.
    """

    def __init__(self, cart: CartHolder, payment: PaymentSession, storage: Storage):
        self.cart = cart
        self.payment = payment
        self.storage = storage

    @classmethod
    def connect(cls, storage: Storage, access_token: str, base_url: Optional[str] = None) -> "CheckoutFlow":
        http = httpx.Client(
            base_url=base_url or settings.STOREFRONT_BASE,
            headers={"Authorization": f"Bearer {access_token}"},
            timeout=15.0,
        )
        return cls(CartHolder(storage), PaymentSession(http, storage), storage)

    def quote(self, country: str, method: ShippingMethod) -> CheckoutQuote:
        subtotal = self.cart.total
        shipping = calculate_shipping_cost(
            country,
            method,
            self.cart.total_weight(),
            subtotal,
            self.cart.same_product_quantity(),
        )
        return CheckoutQuote(
            subtotal=round(subtotal, 2),
            shipping=round(shipping, 2),
            total=round(subtotal + shipping, 2),
            delivery_estimate=get_delivery_estimate(country, method),
        )

    def _snapshot(self, total: float) -> None:
        snapshot_cart(self.storage, self.cart.to_storage(), total)

    def pay(self, country: str, method: ShippingMethod, approve: Callable[[str], None]) -> dict:
        if not len(self.cart):
            raise InvalidCartData("Cart is empty")
        quote = self.quote(country, method)

        self._snapshot(quote.total)
        order_id = self.payment.create_order(quote.total, self.cart.to_storage())
        approve(order_id)

        self._snapshot(quote.total)
        result = self.payment.capture_order(order_id)

        logger.info("Checkout complete for PayPal order %s", order_id)
        self.cart.clear()
        return result
