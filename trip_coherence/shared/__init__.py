"""Shared cross-layer helpers."""

from trip_coherence.shared.timeutils import duration_minutes, sort_items, to_minutes, to_time

__all__ = ["duration_minutes", "sort_items", "to_minutes", "to_time"]
