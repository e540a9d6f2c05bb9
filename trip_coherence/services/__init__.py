"""Application services."""

from trip_coherence.services.coherence_service import validate, validate_and_fix

__all__ = ["validate", "validate_and_fix"]
