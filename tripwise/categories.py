"""
Place categories for TripWise.

Place search results carry a provider type such as ``restaurant`` or
``museum``. The planner groups them into four broad categories, each
drawn on the map in its own colour. Both Google Places type names and
their OpenStreetMap counterparts are recognised.
"""

from __future__ import annotations

from typing import Iterable, Optional

FOOD_AND_DRINK = "Food & Drink"
SHOPPING = "Shopping"
THINGS_TO_DO = "Things to Do"
SERVICES = "Services"
OTHER = "Other"

CATEGORY_MAP = {
    "restaurant": FOOD_AND_DRINK, "cafe": FOOD_AND_DRINK, "bar": FOOD_AND_DRINK,
    "pub": FOOD_AND_DRINK, "bakery": FOOD_AND_DRINK, "fast_food": FOOD_AND_DRINK,
    "meal_takeaway": FOOD_AND_DRINK, "meal_delivery": FOOD_AND_DRINK, "ice_cream": FOOD_AND_DRINK,
    "clothing_store": SHOPPING, "clothes": SHOPPING, "shoe_store": SHOPPING, "shoes": SHOPPING,
    "jewelry_store": SHOPPING, "jewelry": SHOPPING, "shopping_mall": SHOPPING, "mall": SHOPPING,
    "department_store": SHOPPING, "book_store": SHOPPING, "books": SHOPPING,
    "home_goods_store": SHOPPING, "store": SHOPPING, "supermarket": SHOPPING,
    "movie_theater": THINGS_TO_DO, "cinema": THINGS_TO_DO, "museum": THINGS_TO_DO,
    "park": THINGS_TO_DO, "tourist_attraction": THINGS_TO_DO, "attraction": THINGS_TO_DO,
    "gallery": THINGS_TO_DO, "viewpoint": THINGS_TO_DO, "gym": THINGS_TO_DO,
    "fitness_centre": THINGS_TO_DO,
    "spa": SERVICES, "hair_care": SERVICES, "hairdresser": SERVICES, "laundry": SERVICES,
    "bank": SERVICES, "atm": SERVICES, "post_office": SERVICES,
}

MARKER_COLOURS = {
    FOOD_AND_DRINK: "#1e6fd9",
    THINGS_TO_DO: "#d93025",
    SHOPPING: "#f2b600",
    SERVICES: "#188038",
    OTHER: "#5f6368",
}


def categorise(types: Iterable[Optional[str]]) -> str:
    """Return the category of the first recognised place type, or ``Other``."""
    for place_type in types:
        if place_type and place_type.lower() in CATEGORY_MAP:
            return CATEGORY_MAP[place_type.lower()]
    return OTHER


def marker_colour(category: str) -> str:
    return MARKER_COLOURS.get(category, MARKER_COLOURS[OTHER])
