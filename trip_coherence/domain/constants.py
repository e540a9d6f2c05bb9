"""Domain constants shared by deterministic logic."""

import re

from trip_coherence.domain.enums import ItemRole, ItemType, MealKind

LOGISTICS_TYPES = frozenset(
    {
        ItemType.FLIGHT,
        ItemType.TRANSPORT,
        ItemType.CHECKIN,
        ItemType.HOTEL,
        ItemType.CHECKOUT,
        ItemType.PARKING,
        ItemType.LUGGAGE,
    }
)
CONTENT_TYPES = frozenset({ItemType.ACTIVITY, ItemType.RESTAURANT})

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE = MINUTES_PER_DAY - 1

EARLIEST_CONTENT_MINUTES = 7 * 60
LATEST_END_MINUTES = 23 * 60
EARLIEST_RESCHEDULE_MINUTES = 8 * 60
MIN_LOGISTICS_START_MINUTES = 5 * 60
LOGISTICS_FALLBACK_START_MINUTES = 8 * 60
MAX_CROSS_MIDNIGHT_MINUTES = 120

ARRIVAL_GAP_MINUTES = 30
OVERLAP_GAP_MINUTES = 15
DEPARTURE_MARGIN_MINUTES = 30

MEAL_WINDOWS = {
    MealKind.BREAKFAST: (8 * 60, 9 * 60 + 30),
    MealKind.LUNCH: (12 * 60 + 30, 14 * 60),
    MealKind.DINNER: (19 * 60 + 30, 21 * 60),
}

FIRST_DAY_LOGISTICS_RANK = {
    ItemRole.PRE_TRANSFER: 0.0,
    ItemRole.PARKING: 1.0,
    ItemRole.AIRPORT_CHECKIN: 2.0,
    ItemRole.MAIN_TRANSPORT: 3.0,
    ItemRole.LOCAL_TRANSFER: 4.0,
    ItemRole.LUGGAGE: 4.5,
    ItemRole.LODGING_CHECKIN: 5.0,
}

LAST_DAY_LOGISTICS_RANK = {
    ItemRole.LODGING_CHECKOUT: 1.0,
    ItemRole.PRE_TRANSFER: 2.0,
    ItemRole.LOCAL_TRANSFER: 2.0,
    ItemRole.AIRPORT_CHECKIN: 2.5,
    ItemRole.MAIN_TRANSPORT: 3.0,
    ItemRole.PARKING: 4.0,
}

UNRANKED = 99.0

# Filler titles an itinerary generator tends to invent instead of real places.
GENERIC_ACTIVITY_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"^pause caf[eé]",
        r"^shopping local",
        r"^quartier historique",
        r"^point de vue",
        r"^promenade digestive",
        r"^glace artisanale",
        r"^parc et jardins",
        r"^march[eé] de ",
        r"^place centrale",
        r"^galerie d'art locale",
        r"^librairie-caf[eé]",
        r"^ap[eé]ritif local",
        r"^promenade nocturne",
        r"^bar [àa] ",
        r"^rooftop bar",
        r"^jazz club",
        r"^coffee break",
        r"^local market",
        r"^local shopping",
        r"^historic quarter",
        r"^viewpoint",
        r"^digestive walk",
        r"^night walk",
        r"^local art gallery",
    )
)

MAIN_TRANSPORT_KEYWORDS = ("train", "tgv", "ouigo", "sncf", "flixbus", "blablacar", "eurostar", "intercit")
ROUTED_MODE_PATTERN = re.compile(r"\b(bus|car|coach|voiture|ferry)\b")
ROUTE_ARROWS = ("→", "->")

LODGING_KEYWORDS = ("hotel", "hebergement", "lodging", "accommodation", "airbnb")
STATION_KEYWORDS = ("aeroport", "airport", "gare", "station", "terminal")
PRE_TRANSFER_KEYWORDS = ("trajet", "navette", "shuttle", "drive to")

BREAKFAST_KEYWORDS = ("petit", "breakfast", "brunch")
LUNCH_KEYWORDS = ("dejeuner", "lunch")
DINNER_KEYWORDS = ("diner", "dinner", "souper")

# Alternate upstream spellings of item types.
ITEM_TYPE_ALIASES = {
    "hotel-checkin": ItemType.HOTEL,
    "lodging-checkin": ItemType.HOTEL,
    "hotel-checkout": ItemType.CHECKOUT,
    "lodging-checkout": ItemType.CHECKOUT,
    "airport-checkin": ItemType.CHECKIN,
}
