from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_db, http_error
from storefront.core.auth import ADMIN_ROLE, get_current_identity, require_admin
from storefront.db.models import OrderStatus
from storefront.errors import CheckoutError
from storefront.schemas import CreateOrder, OrderRead, OrderStatusUpdate
from storefront.services import orders as order_service

router = APIRouter()

@router.get("/orders", response_model=List[OrderRead])
def list_my_orders(identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)):
    return order_service.list_orders_for_user(db, identity["sub"])

@router.post("/orders", response_model=OrderRead, status_code=201)
def create_order(payload: CreateOrder, identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)):
    try:
        return order_service.create_order(
            db,
            identity["sub"],
            payload.items,
            payload.total,
            payment_id=payload.payment_id or "",
            payment_provider=payload.payment_method or order_service.PAYMENT_PROVIDER,
        )
    except CheckoutError as exc:
        raise http_error(exc)

@router.get("/orders/{order_id}", response_model=OrderRead)
def get_order(order_id: str, identity: dict = Depends(get_current_identity), db: Session = Depends(get_db)):
    order = order_service.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail={"error": "Order not found"})
    if order.user_id != identity["sub"] and identity.get("role") != ADMIN_ROLE:
        raise HTTPException(status_code=403, detail={"error": "Not authorized to view this order"})
    return order

# --- admin ---

@router.get("/admin/orders", response_model=List[OrderRead])
def admin_list_orders(status: Optional[OrderStatus] = None, db: Session = Depends(get_db), _=Depends(require_admin)):
    return order_service.list_orders(db, status)

@router.put("/admin/orders/{order_id}", response_model=OrderRead)
def admin_update_order(order_id: str, payload: OrderStatusUpdate, db: Session = Depends(get_db), _=Depends(require_admin)):
    order = order_service.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail={"error": "Order not found"})
    return order_service.update_status(db, order, payload.status)

@router.delete("/admin/orders/{order_id}", status_code=204)
def admin_delete_order(order_id: str, db: Session = Depends(get_db), _=Depends(require_admin)):
    order = order_service.get_order(db, order_id)
    if not order:
        raise HTTPException(status_code=404, detail={"error": "Order not found"})
    order_service.delete_order(db, order)
    return Response(status_code=204)
