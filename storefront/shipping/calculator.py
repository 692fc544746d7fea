from typing import Literal

from storefront.shipping.rates import REGIONS, SHIPPING_RATES, DEFAULT_SHIPPING_RATE, ShippingRate

ShippingMethod = Literal["express", "economy"]
SHIPPING_METHODS = ("express", "economy")

DOMESTIC_COUNTRY = "Morocco"
DOMESTIC_FREE_SHIPPING_THRESHOLD = 50.0
# Never reached: the lower domestic threshold always returns first.
DOMESTIC_FREE_SHIPPING_THRESHOLD_HIGH = 100.0
ECONOMY_FREE_SHIPPING_THRESHOLD = 300.0
MIN_BILLABLE_WEIGHT_KG = 0.5

# (max quantity, multiplier); anything above the last bound gets 0.7
_QUANTITY_DISCOUNTS = ((1, 1.0), (3, 0.9), (5, 0.85), (10, 0.8))
_BULK_MULTIPLIER = 0.7


def _check_method(method: str) -> None:
    if method not in SHIPPING_METHODS:
        raise ValueError(f"Unknown shipping method: {method!r}")


def get_shipping_rate(country: str) -> ShippingRate:
    return SHIPPING_RATES.get(country, DEFAULT_SHIPPING_RATE)


def apply_quantity_discount(base_cost: float, quantity: int) -> float:
    """Scale ``base_cost`` down for larger quantities of the same product."""
    for bound, multiplier in _QUANTITY_DISCOUNTS:
        if quantity <= bound:
            return base_cost * multiplier
    return base_cost * _BULK_MULTIPLIER


def calculate_shipping_cost(
    country: str,
    method: ShippingMethod,
    total_weight_kg: float,
    order_subtotal: float,
    item_quantity: int = 1,
) -> float:
    """Shipping price in USD.

    ``item_quantity`` is the quantity of a single repeated product; callers
    pass 1 for carts that mix products, so those get no quantity discount.
    """
    _check_method(method)

    if country == DOMESTIC_COUNTRY and order_subtotal >= DOMESTIC_FREE_SHIPPING_THRESHOLD:
        return 0.0
    if country == DOMESTIC_COUNTRY and order_subtotal >= DOMESTIC_FREE_SHIPPING_THRESHOLD_HIGH:
        return 0.0
    if method == "economy" and order_subtotal >= ECONOMY_FREE_SHIPPING_THRESHOLD:
        return 0.0

    rate = get_shipping_rate(country)
    if method == "express":
        base_rate, weight_rate = rate.express_base_rate, rate.express_weight_rate
    else:
        base_rate, weight_rate = rate.economy_base_rate, rate.economy_weight_rate

    weight = max(total_weight_kg, MIN_BILLABLE_WEIGHT_KG)
    cost = base_rate + weight_rate * weight
    return apply_quantity_discount(cost, item_quantity)


def get_delivery_estimate(country: str, method: ShippingMethod) -> str:
    _check_method(method)
    rate = get_shipping_rate(country)
    return rate.express_delivery_days if method == "express" else rate.economy_delivery_days


def get_all_countries() -> list[str]:
    return sorted({c for countries in REGIONS.values() for c in countries})
