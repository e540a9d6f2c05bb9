"""Validator orchestration."""

from __future__ import annotations

from trip_coherence.domain.models import Finding, Trip, TripItem
from trip_coherence.shared.timeutils import sort_items
from trip_coherence.validators.duplicate_validator import validate_duplicates
from trip_coherence.validators.generic_validator import validate_generic_activities
from trip_coherence.validators.hour_validator import validate_hours
from trip_coherence.validators.meal_validator import validate_meal_order
from trip_coherence.validators.overlap_validator import validate_overlaps
from trip_coherence.validators.sequence_validator import validate_arrival, validate_departure


def run_day_validators(
    day_number: int,
    items: list[TripItem],
    *,
    is_first_day: bool,
    is_last_day: bool,
) -> list[Finding]:
    ordered = sort_items(items)
    findings: list[Finding] = []
    findings.extend(validate_hours(day_number, ordered))
    findings.extend(validate_generic_activities(day_number, ordered))
    if is_first_day:
        findings.extend(validate_arrival(day_number, ordered, is_last_day=is_last_day))
    if is_last_day:
        findings.extend(validate_departure(day_number, ordered, is_first_day=is_first_day))
    findings.extend(validate_overlaps(day_number, ordered))
    findings.extend(validate_meal_order(day_number, ordered))
    return findings


def run_all_validators(trip: Trip) -> list[Finding]:
    findings: list[Finding] = []
    total_days = trip.last_day_number
    for day in trip.days:
        findings.extend(
            run_day_validators(
                day.day_number,
                day.items,
                is_first_day=day.day_number == 1,
                is_last_day=day.day_number == total_days,
            )
        )
    findings.extend(validate_duplicates(trip))
    return findings


__all__ = ["run_all_validators", "run_day_validators"]
