import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from kafka.errors import KafkaError
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, http_error
from storefront.core.auth import get_current_identity
from storefront.core.config import settings
from storefront.errors import CheckoutError, InvalidAmount
from storefront.kafka.producer import get_event_sink
from storefront.schemas import CaptureResult, CreateCheckout, OrderRead
from storefront.services import orders as order_service
from storefront.services.paypal import PayPalClient, get_paypal

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post("/checkout")
def create_checkout(payload: CreateCheckout, paypal: PayPalClient = Depends(get_paypal)) -> dict:
    if payload.amount is None:
        raise HTTPException(status_code=400, detail={"error": "Amount is required"})
    if payload.amount <= 0:
        raise http_error(InvalidAmount())
    try:
        return paypal.create_order(payload.amount, payload.currency or settings.CURRENCY)
    except CheckoutError as exc:
        raise http_error(exc)

def publish_order_created(order, publish: Callable[[dict], None]) -> None:
    try:
        publish(order_service.order_created_event(order))
    except KafkaError:
        # order is already committed
        logger.exception("Failed to publish order.created for order %s", order.id)

@router.post("/checkout/capture", response_model=CaptureResult)
def capture_checkout(
    order_id: Optional[str] = Query(default=None, alias="orderID"),
    payload: Any = Body(default=None),
    identity: dict = Depends(get_current_identity),
    db: Session = Depends(get_db),
    paypal: PayPalClient = Depends(get_paypal),
    publish: Callable[[dict], None] = Depends(get_event_sink),
):
    if not order_id:
        raise HTTPException(status_code=400, detail={"error": "Order ID is required"})
    user_id = identity.get("sub")
    paypal_data = None
    try:
        cart = order_service.parse_capture_payload(payload)
        paypal_data = paypal.capture_order(order_id)
        order = order_service.create_order_from_capture(db, user_id, order_id, cart)
    except CheckoutError as exc:
        if paypal_data is not None:
            # No refund is issued; this needs manual reconciliation
            logger.error("Payment %s captured but order not saved for user %s: %s", order_id, user_id, exc.message)
        raise http_error(exc)

    publish_order_created(order, publish)
    return CaptureResult(paypal_data=paypal_data, order=OrderRead.model_validate(order))
