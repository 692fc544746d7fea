from storefront.shipping.calculator import (
    SHIPPING_METHODS,
    ShippingMethod,
    apply_quantity_discount,
    calculate_shipping_cost,
    get_all_countries,
    get_delivery_estimate,
    get_shipping_rate,
)
from storefront.shipping.rates import DEFAULT_SHIPPING_RATE, ShippingRate

__all__ = [
    "SHIPPING_METHODS",
    "ShippingMethod",
    "ShippingRate",
    "DEFAULT_SHIPPING_RATE",
    "apply_quantity_discount",
    "calculate_shipping_cost",
    "get_all_countries",
    "get_delivery_estimate",
    "get_shipping_rate",
]
