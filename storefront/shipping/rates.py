"""Shipping rate reference data.

Rates are for delivery from Morocco, in USD. Express covers the courier
services (DHL, UPS, FedEx, Aramex); economy is postal.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ShippingRate:
    country: str
    express_base_rate: float
    economy_base_rate: float
    express_weight_rate: float  # per kg
    economy_weight_rate: float  # per kg
    express_delivery_days: str
    economy_delivery_days: str


REGIONS: dict[str, list[str]] = {
    "north_america": ["United States", "Canada", "Mexico"],
    "europe": [
        "United Kingdom", "France", "Germany", "Spain", "Italy", "Netherlands", "Belgium",
        "Portugal", "Sweden", "Norway", "Denmark", "Finland", "Switzerland", "Ireland",
        "Austria", "Greece", "Poland", "Czech Republic", "Hungary", "Romania", "Bulgaria",
        "Croatia", "Slovakia", "Slovenia",
    ],
    "asia": [
        "China", "Japan", "South Korea", "India", "Singapore", "Malaysia", "Thailand",
        "Indonesia", "Philippines", "Vietnam", "Taiwan", "Hong Kong", "Pakistan",
        "Bangladesh", "Sri Lanka", "Nepal",
    ],
    "africa": [
        "South Africa", "Nigeria", "Egypt", "Kenya", "Morocco", "Algeria", "Tunisia", "Ghana",
        "Senegal", "Cameroon", "Ethiopia", "Tanzania", "Uganda", "Ivory Coast", "Angola",
    ],
    "oceania": ["Australia", "New Zealand", "Fiji", "Papua New Guinea"],
    "middle_east": [
        "UAE", "Saudi Arabia", "Qatar", "Kuwait", "Bahrain", "Oman", "Israel", "Jordan",
        "Lebanon", "Iraq",
    ],
    "south_america": [
        "Brazil", "Argentina", "Chile", "Colombia", "Peru", "Venezuela", "Ecuador", "Bolivia",
        "Uruguay", "Paraguay",
    ],
}


def _rate(country, express_base, economy_base, express_kg, economy_kg, express_days, economy_days):
    return ShippingRate(country, express_base, economy_base, express_kg, economy_kg, express_days, economy_days)


_RATES = [
    # North America
    _rate("United States", 50, 30, 10, 5, "2-5 days", "10-30 days"),
    _rate("Canada", 45, 25, 9, 5, "2-5 days", "10-30 days"),
    _rate("Mexico", 40, 25, 9, 5, "2-5 days", "10-30 days"),
    # Europe
    _rate("United Kingdom", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("France", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Germany", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Spain", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Italy", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Netherlands", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Belgium", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Portugal", 35, 20, 7, 3, "1-3 days", "5-15 days"),
    _rate("Sweden", 40, 25, 8, 4, "2-4 days", "6-18 days"),
    # Asia
    _rate("China", 60, 35, 12, 6, "2-7 days", "10-25 days"),
    _rate("India", 60, 35, 12, 6, "2-7 days", "10-25 days"),
    _rate("Japan", 65, 40, 13, 7, "2-7 days", "10-25 days"),
    _rate("South Korea", 60, 35, 12, 6, "2-7 days", "10-25 days"),
    _rate("Singapore", 55, 30, 11, 6, "2-7 days", "10-25 days"),
    # Africa
    _rate("South Africa", 50, 30, 10, 5, "2-7 days", "7-20 days"),
    _rate("Nigeria", 50, 30, 10, 5, "2-7 days", "7-20 days"),
    _rate("Morocco", 10, 5, 1, 0.5, "1-2 days", "2-4 days"),
    # Oceania
    _rate("Australia", 70, 45, 15, 8, "3-7 days", "15-30 days"),
    _rate("New Zealand", 70, 45, 15, 8, "3-7 days", "15-30 days"),
    # South America
    _rate("Brazil", 65, 40, 12, 7, "3-8 days", "15-35 days"),
    _rate("Argentina", 65, 40, 12, 7, "3-8 days", "15-35 days"),
    # Middle East
    _rate("UAE", 55, 30, 11, 6, "2-5 days", "8-20 days"),
    _rate("Saudi Arabia", 55, 30, 11, 6, "2-5 days", "8-20 days"),
]

SHIPPING_RATES: dict[str, ShippingRate] = {r.country: r for r in _RATES}

# Used for every country without its own entry
DEFAULT_SHIPPING_RATE = _rate("Other", 70, 40, 15, 8, "3-10 days", "15-45 days")
