"""Browser-side pieces of the checkout: cart, payment session, workflow."""
from storefront.client.cart import CartHolder
from storefront.client.checkout import CheckoutFlow, CheckoutQuote
from storefront.client.payment import PaymentSession, PaymentState
from storefront.client.storage import MemoryStorage, RedisStorage

__all__ = [
    "CartHolder",
    "CheckoutFlow",
    "CheckoutQuote",
    "MemoryStorage",
    "PaymentSession",
    "PaymentState",
    "RedisStorage",
]
