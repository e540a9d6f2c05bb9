"""Domain enums."""

from enum import Enum


class ItemType(str, Enum):
    FLIGHT = "flight"
    TRANSPORT = "transport"
    CHECKIN = "checkin"
    HOTEL = "hotel"
    CHECKOUT = "checkout"
    PARKING = "parking"
    LUGGAGE = "luggage"
    ACTIVITY = "activity"
    RESTAURANT = "restaurant"


class ItemRole(str, Enum):
    MAIN_TRANSPORT = "main_transport"
    PRE_TRANSFER = "pre_transfer"
    LOCAL_TRANSFER = "local_transfer"
    AIRPORT_CHECKIN = "airport_checkin"
    LODGING_CHECKIN = "lodging_checkin"
    LODGING_CHECKOUT = "lodging_checkout"
    PARKING = "parking"
    LUGGAGE = "luggage"
    ACTIVITY = "activity"
    MEAL = "meal"


class MealKind(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class Severity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"


class FindingKind(str, Enum):
    ACTIVITY_BEFORE_ARRIVAL = "ACTIVITY_BEFORE_ARRIVAL"
    ACTIVITY_AFTER_DEPARTURE = "ACTIVITY_AFTER_DEPARTURE"
    DEPARTURE_TOO_TIGHT = "DEPARTURE_TOO_TIGHT"
    TRANSFER_AFTER_ACTIVITY = "TRANSFER_AFTER_ACTIVITY"
    CHECKIN_BEFORE_TRANSFER = "CHECKIN_BEFORE_TRANSFER"
    CHECKOUT_AFTER_TRANSFER = "CHECKOUT_AFTER_TRANSFER"
    ILLOGICAL_SEQUENCE = "ILLOGICAL_SEQUENCE"
    OVERLAP = "OVERLAP"
    MEAL_WRONG_ORDER = "MEAL_WRONG_ORDER"
    DUPLICATE_ATTRACTION = "DUPLICATE_ATTRACTION"
    ACTIVITY_IMPOSSIBLE_HOUR = "ACTIVITY_IMPOSSIBLE_HOUR"
    GENERIC_ACTIVITY = "GENERIC_ACTIVITY"
