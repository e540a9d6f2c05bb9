"""Itinerary coherence validation and auto-repair."""

from trip_coherence.domain.models import CoherenceResult, Finding, Trip, TripDay, TripItem
from trip_coherence.services.coherence_service import validate, validate_and_fix

__all__ = [
    "CoherenceResult",
    "Finding",
    "Trip",
    "TripDay",
    "TripItem",
    "validate",
    "validate_and_fix",
]
