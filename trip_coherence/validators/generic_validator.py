"""Generic-activity validator: flag invented filler activities."""

from __future__ import annotations

from trip_coherence.domain.classification import is_generic_title
from trip_coherence.domain.enums import FindingKind, ItemType
from trip_coherence.domain.models import Finding, TripItem
from trip_coherence.validators.common import make_finding


def validate_generic_activities(day_number: int, items: list[TripItem]) -> list[Finding]:
    return [
        make_finding(
            FindingKind.GENERIC_ACTIVITY,
            day_number,
            f'"{item.title}" is a generic placeholder, not a real place',
            [item],
        )
        for item in items
        if item.type == ItemType.ACTIVITY and is_generic_title(item.title)
    ]


__all__ = ["validate_generic_activities"]
