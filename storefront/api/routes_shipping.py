from typing import List, Literal

from fastapi import APIRouter, Query

from storefront.schemas import ShippingQuote
from storefront.shipping import calculate_shipping_cost, get_all_countries, get_delivery_estimate

router = APIRouter()

@router.get("/shipping/countries", response_model=List[str])
def list_countries():
    return get_all_countries()

@router.get("/shipping/quote", response_model=ShippingQuote)
def quote(
    country: str,
    method: Literal["express", "economy"] = "economy",
    weight: float = Query(default=0.5, ge=0),
    subtotal: float = Query(default=0, ge=0),
    quantity: int = Query(default=1, ge=1),
):
    cost = calculate_shipping_cost(country, method, weight, subtotal, quantity)
    return ShippingQuote(
        country=country,
        method=method,
        cost=round(cost, 2),
        delivery_estimate=get_delivery_estimate(country, method),
    )
