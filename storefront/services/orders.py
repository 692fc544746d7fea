"""Order persistence.

Orders are written once, at capture time, from the cart snapshot the
browser posted. Prices come from the snapshot, never from the current
product rows, so later price edits leave placed orders alone.
"""
import logging
from typing import Iterable, Optional

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from storefront.db.models import Order, OrderItem, OrderStatus, Product, User
from storefront.errors import (
    DatabaseWriteError,
    InvalidCartData,
    ProductsNotFound,
    Unauthenticated,
    UserNotFound,
)
from storefront.schemas import CapturePayload, OrderLine

logger = logging.getLogger(__name__)

PAYMENT_PROVIDER = "PAYPAL"


def parse_capture_payload(raw) -> CapturePayload:
    if not isinstance(raw, dict) or not raw.get("cartItems"):
        raise InvalidCartData("No cart items provided")
    try:
        return CapturePayload.model_validate(raw)
    except ValidationError as exc:
        logger.warning("Invalid cart items format: %s", exc.errors())
        raise InvalidCartData() from exc


def _order_query():
    return select(Order).options(selectinload(Order.items).selectinload(OrderItem.product))


def verify_references(db: Session, user_id: str, product_ids: Iterable[str]) -> None:
    """Raise unless the user and every product exist."""
    if db.get(User, user_id) is None:
        logger.error("User not found in database: %s", user_id)
        raise UserNotFound(user_id)

    wanted = list(dict.fromkeys(product_ids))
    found = set(db.execute(select(Product.id).where(Product.id.in_(wanted))).scalars())
    missing = [pid for pid in wanted if pid not in found]
    if missing:
        logger.error("Some products not found in database: %s", missing)
        raise ProductsNotFound(missing)


def create_order(
    db: Session,
    user_id: Optional[str],
    lines: list[OrderLine],
    total: float,
    payment_id: str = "",
    payment_provider: str = PAYMENT_PROVIDER,
) -> Order:
    if not user_id:
        raise Unauthenticated()
    if not lines:
        raise InvalidCartData("No items in order")

    try:
        verify_references(db, user_id, (line.id for line in lines))
        order = Order(
            user_id=user_id,
            status=OrderStatus.PENDING,
            total=float(total),
            payment_id=payment_id,
            payment_provider=payment_provider,
            items=[OrderItem(product_id=line.id, quantity=line.quantity, price=line.price) for line in lines],
        )
        db.add(order)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(
            "Error saving order to database (user=%s payment=%s products=%s)",
            user_id, payment_id, [line.id for line in lines],
        )
        raise DatabaseWriteError(details=str(exc)) from exc

    logger.info("Order %s saved for user %s (payment %s)", order.id, user_id, payment_id)
    return get_order(db, order.id)


def create_order_from_capture(db: Session, user_id: Optional[str], payment_id: str, payload: CapturePayload) -> Order:
    lines = [
        OrderLine(id=item.product_id, quantity=item.quantity, price=item.line_price)
        for item in payload.cart_items
    ]
    return create_order(db, user_id, lines, payload.total, payment_id=payment_id)


def get_order(db: Session, order_id: str) -> Optional[Order]:
    return db.execute(_order_query().where(Order.id == order_id)).scalar_one_or_none()


def list_orders_for_user(db: Session, user_id: str) -> list[Order]:
    stmt = _order_query().where(Order.user_id == user_id).order_by(Order.created_at.desc())
    return list(db.execute(stmt).scalars())


def list_orders(db: Session, status: Optional[OrderStatus] = None) -> list[Order]:
    stmt = _order_query().order_by(Order.created_at.desc())
    if status is not None:
        stmt = stmt.where(Order.status == status)
    return list(db.execute(stmt).scalars())


def update_status(db: Session, order: Order, status: OrderStatus) -> Order:
    order.status = status
    db.add(order); db.commit()
    return get_order(db, order.id)


def delete_order(db: Session, order: Order) -> None:
    db.delete(order); db.commit()


def order_created_event(order: Order) -> dict:
    return {
        "type": "order.created",
        "order_id": order.id,
        "user_id": order.user_id,
        "total": order.total,
        "payment_id": order.payment_id,
        "payment_provider": order.payment_provider,
        "items": [
            {"product_id": it.product_id, "quantity": it.quantity, "price": it.price}
            for it in order.items
        ],
    }
