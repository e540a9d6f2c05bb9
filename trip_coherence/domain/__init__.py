"""Domain package exports."""

from trip_coherence.domain.classification import (
    classify_item,
    is_content,
    is_generic_title,
    is_logistics,
    meal_kind,
    normalize_title,
)
from trip_coherence.domain.enums import FindingKind, ItemRole, ItemType, MealKind, Severity
from trip_coherence.domain.exceptions import DomainError, InvalidSettings, InvalidTripError
from trip_coherence.domain.models import CoherenceResult, Finding, Trip, TripDay, TripItem, load_trip

__all__ = [
    "CoherenceResult",
    "DomainError",
    "Finding",
    "FindingKind",
    "InvalidSettings",
    "InvalidTripError",
    "ItemRole",
    "ItemType",
    "MealKind",
    "Severity",
    "Trip",
    "TripDay",
    "TripItem",
    "classify_item",
    "is_content",
    "is_generic_title",
    "is_logistics",
    "load_trip",
    "meal_kind",
    "normalize_title",
]
