"""PayPal REST client for the checkout flow (order create / capture).

The client owns an ``httpx.Client``; tests hand it one built on
``httpx.MockTransport``.
"""
import logging
import time
import uuid

import httpx

from storefront.core.config import settings
from storefront.errors import ProcessorError

logger = logging.getLogger(__name__)

# Refresh the OAuth token a little before PayPal expires it
_TOKEN_LEEWAY_SECONDS = 60


def _json_object(resp: httpx.Response, action: str) -> dict:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if not isinstance(data, dict):
        logger.error("Malformed PayPal %s response (%s): %s", action, resp.status_code, resp.text[:200])
        raise ProcessorError(f"Malformed response from PayPal {action}", status_code=502)
    return data


class PayPalClient:
    def __init__(self, client_id: str, client_secret: str, http: httpx.Client):
        self.client_id = client_id
        self.client_secret = client_secret
        self.http = http
        self._token: str | None = None
        self._token_expires_at = 0.0

    def access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token
        try:
            resp = self.http.post(
                "/v1/oauth2/token",
                auth=(self.client_id, self.client_secret),
                data={"grant_type": "client_credentials"},
            )
        except httpx.RequestError as exc:
            logger.error("PayPal token request failed: %s", exc)
            raise ProcessorError("Payment processor unavailable", status_code=503) from exc
        if resp.status_code != 200:
            logger.error("PayPal token request returned %s: %s", resp.status_code, resp.text)
            raise ProcessorError(f"Failed to get access token: {resp.status_code}", status_code=500)
        data = _json_object(resp, "token")
        token = data.get("access_token")
        if not token:
            logger.error("No access token in PayPal response: %s", data)
            raise ProcessorError("No access token in response", status_code=500)
        self._token = token
        self._token_expires_at = time.monotonic() + max(int(data.get("expires_in", 0)) - _TOKEN_LEEWAY_SECONDS, 0)
        return token

    def _auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.access_token()}"}

    def create_order(self, amount: float, currency: str = "USD") -> dict:
        # PayPal rejects more than two decimals (DECIMAL_PRECISION)
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [{"amount": {"currency_code": currency, "value": f"{amount:.2f}"}}],
        }
        headers = self._auth_headers()
        headers["PayPal-Request-Id"] = f"order-{uuid.uuid4().hex}"
        try:
            resp = self.http.post("/v2/checkout/orders", json=payload, headers=headers)
        except httpx.RequestError as exc:
            logger.error("PayPal create order failed: %s", exc)
            raise ProcessorError("Payment processor unavailable", status_code=503) from exc
        if resp.status_code >= 400:
            logger.error("PayPal create order returned %s: %s", resp.status_code, resp.text)
            raise ProcessorError(f"Failed to create PayPal order: {resp.text}", status_code=resp.status_code)
        data = _json_object(resp, "create order")
        if not data.get("id"):
            logger.error("No order ID in PayPal response: %s", data)
            raise ProcessorError("No order ID in PayPal response", status_code=500)
        logger.info("Created PayPal order %s for %s %s", data["id"], payload["purchase_units"][0]["amount"]["value"], currency)
        return data

    def capture_order(self, order_id: str) -> dict:
        try:
            resp = self.http.post(f"/v2/checkout/orders/{order_id}/capture", headers=self._auth_headers(), json={})
        except httpx.RequestError as exc:
            logger.error("PayPal capture of %s failed: %s", order_id, exc)
            raise ProcessorError("Payment processor unavailable", status_code=503) from exc
        if resp.status_code >= 400:
            logger.error("PayPal capture of %s returned %s: %s", order_id, resp.status_code, resp.text)
            raise ProcessorError(f"Error capturing PayPal order: {resp.text}", status_code=500)
        data = _json_object(resp, "capture")
        if data.get("error"):
            logger.error("PayPal capture of %s reported an error: %s", order_id, data["error"])
            raise ProcessorError(f"Error capturing PayPal order: {data['error']}", status_code=500)
        logger.info("Captured PayPal order %s (status=%s)", order_id, data.get("status"))
        return data


_paypal: PayPalClient | None = None

def get_paypal() -> PayPalClient:
    global _paypal
    if _paypal is None:
        http = httpx.Client(base_url=settings.PAYPAL_API_BASE, timeout=settings.PAYPAL_TIMEOUT)
        _paypal = PayPalClient(settings.PAYPAL_CLIENT_ID, settings.PAYPAL_CLIENT_SECRET, http)
    return _paypal
