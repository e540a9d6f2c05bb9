"""Meal order validator: breakfast, then lunch, then dinner."""

from __future__ import annotations

from trip_coherence.domain.classification import meal_kind
from trip_coherence.domain.enums import FindingKind, MealKind, Severity
from trip_coherence.domain.models import Finding, TripItem
from trip_coherence.shared.timeutils import to_minutes
from trip_coherence.validators.common import make_finding

_ORDERED_PAIRS = (
    (MealKind.BREAKFAST, MealKind.LUNCH),
    (MealKind.LUNCH, MealKind.DINNER),
)


def validate_meal_order(day_number: int, items: list[TripItem]) -> list[Finding]:
    findings: list[Finding] = []
    by_kind: dict[MealKind, list[TripItem]] = {}
    for item in items:
        kind = meal_kind(item)
        if kind is not None:
            by_kind.setdefault(kind, []).append(item)

    for earlier, later in _ORDERED_PAIRS:
        if earlier not in by_kind or later not in by_kind:
            continue
        earlier_start = to_minutes(by_kind[earlier][0].start_time)
        later_start = to_minutes(by_kind[later][0].start_time)
        if earlier_start > later_start:
            findings.append(
                make_finding(
                    FindingKind.MEAL_WRONG_ORDER,
                    day_number,
                    f"{earlier.value.capitalize()} scheduled after {later.value}",
                    [*by_kind[earlier], *by_kind[later]],
                    severity=Severity.WARNING,
                )
            )
    return findings


__all__ = ["validate_meal_order"]
