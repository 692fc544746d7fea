from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from storefront.db.models import OrderStatus


class CartLineItem(BaseModel):
    """One cart line as the browser stores it and posts it at capture time."""

    product_id: str = Field(alias="id", min_length=1)
    name: str = ""
    unit_price: float = Field(alias="price", ge=0)
    quantity: int = Field(ge=1)
    discount_percent: Optional[float] = Field(default=None, alias="discount", ge=0, le=100)
    weight_kg: Optional[float] = Field(default=None, alias="weight", ge=0)
    image: Optional[str] = None

    class Config:
        populate_by_name = True

    @property
    def effective_price(self) -> float:
        if self.discount_percent:
            return self.unit_price * (1 - self.discount_percent / 100)
        return self.unit_price

    @property
    def line_price(self) -> float:
        """Discounted unit price in whole cents, as the order records it."""
        return round(self.effective_price, 2)

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateCheckout(BaseModel):
    amount: Optional[float] = None
    currency: Optional[str] = None
    items: Optional[List[dict]] = None


class CheckoutCreated(BaseModel):
    id: str
    status: Optional[str] = None


class CapturePayload(BaseModel):
    cart_items: List[CartLineItem] = Field(alias="cartItems", min_length=1)
    total: float = Field(ge=0)

    class Config:
        populate_by_name = True


class OrderLine(BaseModel):
    id: str
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)


class CreateOrder(BaseModel):
    items: List[OrderLine] = []
    total: float = Field(ge=0)
    payment_method: Optional[str] = Field(default=None, alias="paymentMethod")
    payment_id: Optional[str] = Field(default=None, alias="paymentId")

    class Config:
        populate_by_name = True


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class ProductRead(BaseModel):
    id: str
    name: str
    price: float
    discount: Optional[float] = None
    weight: Optional[float] = None
    image_url: Optional[str] = None
    in_stock: bool = True
    class Config: from_attributes = True


class OrderItemRead(BaseModel):
    id: str
    product_id: str
    quantity: int
    price: float
    product: Optional[ProductRead] = None
    class Config: from_attributes = True


class OrderRead(BaseModel):
    id: str
    user_id: str
    status: OrderStatus
    total: float
    payment_id: str
    payment_provider: str
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemRead] = []
    class Config: from_attributes = True


class CaptureResult(BaseModel):
    success: bool = True
    paypal_data: dict
    order: OrderRead


class ShippingQuote(BaseModel):
    country: str
    method: Literal["express", "economy"]
    cost: float
    delivery_estimate: str
