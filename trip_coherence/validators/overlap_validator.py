"""Overlap validator: no two items of a day may share wall-clock time."""

from __future__ import annotations

from itertools import combinations

from trip_coherence.domain.enums import FindingKind
from trip_coherence.domain.models import Finding, TripItem
from trip_coherence.shared.timeutils import to_minutes
from trip_coherence.validators.common import describe, make_finding


def validate_overlaps(day_number: int, items: list[TripItem]) -> list[Finding]:
    findings: list[Finding] = []
    for first, second in combinations(items, 2):
        if to_minutes(first.start_time) < to_minutes(second.end_time) and to_minutes(second.start_time) < to_minutes(
            first.end_time
        ):
            findings.append(
                make_finding(
                    FindingKind.OVERLAP,
                    day_number,
                    f"Overlap: {describe(first)} and {describe(second)}",
                    [first, second],
                )
            )
    return findings


__all__ = ["validate_overlaps"]
