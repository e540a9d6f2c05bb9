"""Title-keyword classification of schedule items.

Upstream items only carry a coarse ``type``; whether a ``transport`` is an
intercity leg or a hop to the hotel, or which meal a ``restaurant`` is,
can only be guessed from the free-text title. Every such guess lives here
so the validators and repair strategies only ever see closed enums.
"""

from __future__ import annotations

import unicodedata
from typing import Optional

from trip_coherence.domain.constants import (
    BREAKFAST_KEYWORDS,
    CONTENT_TYPES,
    DINNER_KEYWORDS,
    GENERIC_ACTIVITY_PATTERNS,
    LODGING_KEYWORDS,
    LOGISTICS_TYPES,
    LUNCH_KEYWORDS,
    MAIN_TRANSPORT_KEYWORDS,
    PRE_TRANSFER_KEYWORDS,
    ROUTE_ARROWS,
    ROUTED_MODE_PATTERN,
    STATION_KEYWORDS,
)
from trip_coherence.domain.enums import ItemRole, ItemType, MealKind
from trip_coherence.domain.models import TripItem

_FIXED_ROLES = {
    ItemType.FLIGHT: ItemRole.MAIN_TRANSPORT,
    ItemType.CHECKIN: ItemRole.AIRPORT_CHECKIN,
    ItemType.HOTEL: ItemRole.LODGING_CHECKIN,
    ItemType.CHECKOUT: ItemRole.LODGING_CHECKOUT,
    ItemType.PARKING: ItemRole.PARKING,
    ItemType.LUGGAGE: ItemRole.LUGGAGE,
    ItemType.ACTIVITY: ItemRole.ACTIVITY,
    ItemType.RESTAURANT: ItemRole.MEAL,
}

TRANSFER_ROLES = frozenset({ItemRole.LOCAL_TRANSFER, ItemRole.PRE_TRANSFER})


def fold(text: str) -> str:
    """Lowercase and strip accents: "Dîner" -> "diner"."""
    decomposed = unicodedata.normalize("NFKD", text or "")
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch)).lower()


def normalize_title(title: str) -> str:
    return (title or "").strip().lower()


def _has_any(text: str, keywords: tuple[str, ...]) -> bool:
    return any(keyword in text for keyword in keywords)


def _split_route(text: str) -> Optional[tuple[str, str]]:
    for arrow in ROUTE_ARROWS:
        if arrow in text:
            origin, destination = text.split(arrow, 1)
            return origin, destination
    return None


def is_logistics(item: TripItem) -> bool:
    return item.type in LOGISTICS_TYPES


def is_content(item: TripItem) -> bool:
    return item.type in CONTENT_TYPES


def is_main_transport_title(title: str) -> bool:
    text = fold(title)
    if _has_any(text, MAIN_TRANSPORT_KEYWORDS):
        return True
    route = _split_route(text)
    if route is None or _has_any(text, LODGING_KEYWORDS):
        return False
    return ROUTED_MODE_PATTERN.search(text) is not None


def _transfer_role(title: str) -> ItemRole:
    text = fold(title)
    route = _split_route(text)
    if route is None or _has_any(text, LODGING_KEYWORDS):
        return ItemRole.LOCAL_TRANSFER
    origin, destination = route
    if _has_any(origin, STATION_KEYWORDS):
        return ItemRole.LOCAL_TRANSFER
    if _has_any(destination, STATION_KEYWORDS) or _has_any(text, PRE_TRANSFER_KEYWORDS):
        return ItemRole.PRE_TRANSFER
    return ItemRole.LOCAL_TRANSFER


def classify_item(item: TripItem) -> ItemRole:
    if item.type == ItemType.TRANSPORT:
        if is_main_transport_title(item.title):
            return ItemRole.MAIN_TRANSPORT
        return _transfer_role(item.title)
    return _FIXED_ROLES[item.type]


def meal_kind(item: TripItem) -> Optional[MealKind]:
    if item.type != ItemType.RESTAURANT:
        return None
    text = fold(item.title)
    if _has_any(text, BREAKFAST_KEYWORDS):
        return MealKind.BREAKFAST
    if _has_any(text, LUNCH_KEYWORDS):
        return MealKind.LUNCH
    if _has_any(text, DINNER_KEYWORDS):
        return MealKind.DINNER
    return None


def is_generic_title(title: str) -> bool:
    text = unicodedata.normalize("NFC", (title or "").strip())
    return any(pattern.search(text) for pattern in GENERIC_ACTIVITY_PATTERNS)


def transport_label(title: str) -> str:
    text = fold(title)
    if _has_any(text, ("train", "tgv", "ouigo", "eurostar")):
        return "train"
    if _has_any(text, ("bus", "coach")):
        return "bus"
    if _has_any(text, ("voiture", "car")):
        return "car"
    return "transport"


__all__ = [
    "TRANSFER_ROLES",
    "classify_item",
    "fold",
    "is_content",
    "is_generic_title",
    "is_logistics",
    "is_main_transport_title",
    "meal_kind",
    "normalize_title",
    "transport_label",
]
