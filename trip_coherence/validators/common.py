"""Shared helpers for coherence validators."""

from __future__ import annotations

from typing import Iterable, Optional

from trip_coherence.domain.enums import FindingKind, Severity
from trip_coherence.domain.models import Finding, TripItem


def make_finding(
    kind: FindingKind,
    day_number: int,
    message: str,
    items: Iterable[TripItem],
    *,
    severity: Severity = Severity.CRITICAL,
    auto_fixable: bool = True,
    reference_day: Optional[int] = None,
) -> Finding:
    return Finding(
        kind=kind,
        day_number=day_number,
        message=message,
        items=[item.model_copy() for item in items],
        severity=severity,
        auto_fixable=auto_fixable,
        reference_day=reference_day,
    )


def describe(item: TripItem) -> str:
    return f'"{item.title}" ({item.start_time}-{item.end_time})'


__all__ = ["describe", "make_finding"]
