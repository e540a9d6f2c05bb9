"""Realistic-hour validator: no sightseeing or meals between 00:00 and 06:59."""

from __future__ import annotations

from trip_coherence.domain.classification import is_content
from trip_coherence.domain.constants import EARLIEST_CONTENT_MINUTES
from trip_coherence.domain.enums import FindingKind
from trip_coherence.domain.models import Finding, TripItem
from trip_coherence.shared.timeutils import to_minutes
from trip_coherence.validators.common import make_finding


def validate_hours(day_number: int, items: list[TripItem]) -> list[Finding]:
    findings: list[Finding] = []
    for item in items:
        # logistics may legitimately run early (dawn flights, airport check-in)
        if not is_content(item):
            continue
        start = to_minutes(item.start_time)
        if 0 <= start < EARLIEST_CONTENT_MINUTES:
            findings.append(
                make_finding(
                    FindingKind.ACTIVITY_IMPOSSIBLE_HOUR,
                    day_number,
                    f'"{item.title}" scheduled at {item.start_time}, an impossible hour for a visit',
                    [item],
                )
            )
    return findings


__all__ = ["validate_hours"]
