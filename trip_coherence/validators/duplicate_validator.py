"""Duplicate validator: the same attraction must not be visited twice in a trip."""

from __future__ import annotations

from trip_coherence.domain.classification import normalize_title
from trip_coherence.domain.enums import FindingKind, ItemType, Severity
from trip_coherence.domain.models import Finding, Trip, TripItem
from trip_coherence.shared.timeutils import sort_items
from trip_coherence.validators.common import make_finding


def validate_duplicates(trip: Trip) -> list[Finding]:
    findings: list[Finding] = []
    seen: dict[str, tuple[int, TripItem]] = {}

    for day in sorted(trip.days, key=lambda row: row.day_number):
        for item in sort_items(day.items):
            if item.type != ItemType.ACTIVITY:
                continue
            key = normalize_title(item.title)
            if not key:
                continue
            if key not in seen:
                seen[key] = (day.day_number, item)
                continue
            first_day, first_item = seen[key]
            findings.append(
                make_finding(
                    FindingKind.DUPLICATE_ATTRACTION,
                    day.day_number,
                    f'Attraction "{item.title}" appears twice (day {first_day} and day {day.day_number})',
                    [first_item, item],
                    severity=Severity.WARNING,
                    reference_day=first_day,
                )
            )
    return findings


__all__ = ["validate_duplicates"]
