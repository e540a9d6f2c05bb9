"""Repair strategies, one per finding kind.

Each strategy mutates the working copy in place and returns the actions it
took as ``day<N>:<verb>:<detail>`` strings. Items are looked up by id in the
working copy, so strategies always act on current times rather than on the
snapshots stored in the finding.
"""

from __future__ import annotations

from typing import Callable, Optional

from trip_coherence.domain.classification import classify_item, is_content, is_logistics, meal_kind
from trip_coherence.domain.constants import (
    ARRIVAL_GAP_MINUTES,
    DEPARTURE_MARGIN_MINUTES,
    EARLIEST_RESCHEDULE_MINUTES,
    FIRST_DAY_LOGISTICS_RANK,
    LAST_DAY_LOGISTICS_RANK,
    LATEST_END_MINUTES,
    LOGISTICS_FALLBACK_START_MINUTES,
    MAX_CROSS_MIDNIGHT_MINUTES,
    MEAL_WINDOWS,
    MIN_LOGISTICS_START_MINUTES,
    OVERLAP_GAP_MINUTES,
    UNRANKED,
)
from trip_coherence.domain.enums import FindingKind
from trip_coherence.domain.models import Finding, Trip, TripDay, TripItem
from trip_coherence.domain.schedule import arrival_chain, content_items, departure_chain
from trip_coherence.shared.timeutils import duration_minutes, sort_items, to_minutes, to_time

RepairFn = Callable[[Trip, Finding], list[str]]


def _locate(day: TripDay, item_id: str) -> Optional[TripItem]:
    return next((item for item in day.items if item.id == item_id), None)


def _present(day: TripDay, item: TripItem) -> bool:
    return any(row is item for row in day.items)


def _remove(day: TripDay, item: TripItem, reason: str) -> str:
    day.items.remove(item)
    return f"day{day.day_number}:removed:{reason}:{item.title}"


def _move(day: TripDay, item: TripItem, start: int, duration: int) -> str:
    item.start_time = to_time(start)
    item.end_time = to_time(start + duration)
    return f"day{day.day_number}:moved:{item.title}:{item.start_time}-{item.end_time}"


def _kept_duration(item: TripItem) -> int:
    return max(0, duration_minutes(item))


def _shift_after(day: TripDay, item: TripItem, start: int) -> str:
    """Place ``item`` at ``start``; drop it when it would end past 23:00."""
    duration = _kept_duration(item)
    if start + duration > LATEST_END_MINUTES:
        return _remove(day, item, "no_slot")
    return _move(day, item, start, duration)


def _shift_before(day: TripDay, item: TripItem, end: int) -> str:
    """Make ``item`` end at ``end``; drop it when it would start before 08:00."""
    duration = _kept_duration(item)
    start = end - duration
    if start < EARLIEST_RESCHEDULE_MINUTES:
        return _remove(day, item, "no_slot")
    return _move(day, item, start, duration)


def _day_for(trip: Trip, finding: Finding) -> Optional[TripDay]:
    return trip.find_day(finding.day_number)


def _flags(trip: Trip, day: TripDay) -> tuple[bool, bool]:
    return day.day_number == 1, day.day_number == trip.last_day_number


def repair_activity_before_arrival(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    target = _locate(day, finding.items[-1].id)
    anchor = arrival_chain(day.items).anchor
    if target is None or anchor is None:
        return []
    return [_shift_after(day, target, to_minutes(anchor.end_time) + ARRIVAL_GAP_MINUTES)]


def repair_activity_after_departure(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    target = _locate(day, finding.items[-1].id)
    is_first_day, _ = _flags(trip, day)
    chain = departure_chain(day.items, is_first_day=is_first_day)
    reference = chain.main_transport if finding.kind == FindingKind.DEPARTURE_TOO_TIGHT else chain.anchor
    if target is None or reference is None:
        return []
    return [_shift_before(day, target, to_minutes(reference.start_time) - DEPARTURE_MARGIN_MINUTES)]


def repair_overlap(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    first = _locate(day, finding.items[0].id)
    second = _locate(day, finding.items[1].id)
    if first is None or second is None:
        return []

    earlier, later = sort_items([first, second])
    # bookings keep their times: move the visit, not the flight
    if is_logistics(later) and is_content(earlier):
        earlier, later = later, earlier

    start = to_minutes(earlier.end_time) + OVERLAP_GAP_MINUTES
    if is_logistics(later) and start + _kept_duration(later) > LATEST_END_MINUTES:
        return [f"day{day.day_number}:unresolved:overlap:{later.title}"]
    return [_shift_after(day, later, start)]


def _replay_start(item: TripItem, cursor: int) -> int:
    own_start = to_minutes(item.start_time)
    if own_start < MIN_LOGISTICS_START_MINUTES:
        return cursor
    return max(cursor, own_start)


def _replay_duration(item: TripItem) -> int:
    duration = duration_minutes(item)
    if duration >= 0:
        return duration
    # crossed midnight upstream
    return min(MAX_CROSS_MIDNIGHT_MINUTES, abs(duration))


def _reanchor_first_day(day: TripDay) -> list[str]:
    anchor = arrival_chain(day.items).anchor
    if anchor is None:
        return []
    arrival_end = to_minutes(anchor.end_time)
    cursor = arrival_end + ARRIVAL_GAP_MINUTES
    actions: list[str] = []
    for item in sort_items(content_items(day.items)):
        if to_minutes(item.start_time) >= arrival_end:
            continue
        action = _shift_after(day, item, cursor)
        actions.append(action)
        if _present(day, item):
            cursor = to_minutes(item.end_time) + OVERLAP_GAP_MINUTES
    return actions


def _reanchor_last_day(day: TripDay, *, is_first_day: bool) -> list[str]:
    anchor = departure_chain(day.items, is_first_day=is_first_day).anchor
    if anchor is None:
        return []
    limit = to_minutes(anchor.start_time) - DEPARTURE_MARGIN_MINUTES
    actions: list[str] = []
    for item in reversed(sort_items(content_items(day.items))):
        if to_minutes(item.end_time) <= limit:
            continue
        action = _shift_before(day, item, limit)
        actions.append(action)
        if _present(day, item):
            limit = to_minutes(item.start_time) - OVERLAP_GAP_MINUTES
    return actions


def repair_logistics_order(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    is_first_day, is_last_day = _flags(trip, day)
    if not (is_first_day or is_last_day):
        return []

    ranks = FIRST_DAY_LOGISTICS_RANK if is_first_day else LAST_DAY_LOGISTICS_RANK
    if is_first_day and is_last_day:
        # single-day trip: only the arrival half is replayed
        departure = departure_chain(day.items, is_first_day=True)
        skip = {item.id for item in (departure.checkout, departure.transfer, departure.main_transport) if item}
    else:
        skip = set()

    ranked = [
        item
        for item in sort_items(day.items)
        if is_logistics(item) and item.id not in skip and ranks.get(classify_item(item), UNRANKED) < UNRANKED
    ]
    ranked.sort(key=lambda item: ranks[classify_item(item)])

    actions: list[str] = []
    if ranked:
        cursor = to_minutes(ranked[0].start_time)
        if cursor < MIN_LOGISTICS_START_MINUTES:
            cursor = LOGISTICS_FALLBACK_START_MINUTES
        for item in ranked:
            start = _replay_start(item, cursor)
            duration = _replay_duration(item)
            if (start, start + duration) != (to_minutes(item.start_time), to_minutes(item.end_time)):
                actions.append(_move(day, item, start, duration))
            cursor = start + duration
        actions.append(f"day{day.day_number}:reordered_logistics:{len(ranked)}")

    if is_first_day:
        actions.extend(_reanchor_first_day(day))
    if is_last_day:
        actions.extend(_reanchor_last_day(day, is_first_day=is_first_day))
    return actions


def repair_duplicate(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    duplicate = _locate(day, finding.items[-1].id)
    if duplicate is None:
        return []
    return [_remove(day, duplicate, f"duplicate_of_day{finding.reference_day}")]


def repair_invalid_activity(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    reason = "generic" if finding.kind == FindingKind.GENERIC_ACTIVITY else "impossible_hour"
    actions: list[str] = []
    for snapshot in finding.items:
        item = _locate(day, snapshot.id)
        if item is not None:
            actions.append(_remove(day, item, reason))
    return actions


def repair_meal_order(trip: Trip, finding: Finding) -> list[str]:
    day = _day_for(trip, finding)
    if day is None:
        return []
    actions: list[str] = []
    for snapshot in finding.items:
        item = _locate(day, snapshot.id)
        kind = meal_kind(item) if item is not None else None
        if kind is None:
            continue
        window_start, window_end = MEAL_WINDOWS[kind]
        duration = _kept_duration(item) or window_end - window_start
        actions.append(_move(day, item, window_start, duration))
    return actions


REPAIR_DISPATCH: dict[FindingKind, RepairFn] = {
    FindingKind.ACTIVITY_BEFORE_ARRIVAL: repair_activity_before_arrival,
    FindingKind.ACTIVITY_AFTER_DEPARTURE: repair_activity_after_departure,
    FindingKind.DEPARTURE_TOO_TIGHT: repair_activity_after_departure,
    FindingKind.OVERLAP: repair_overlap,
    FindingKind.TRANSFER_AFTER_ACTIVITY: repair_logistics_order,
    FindingKind.CHECKIN_BEFORE_TRANSFER: repair_logistics_order,
    FindingKind.CHECKOUT_AFTER_TRANSFER: repair_logistics_order,
    FindingKind.ILLOGICAL_SEQUENCE: repair_logistics_order,
    FindingKind.DUPLICATE_ATTRACTION: repair_duplicate,
    FindingKind.GENERIC_ACTIVITY: repair_invalid_activity,
    FindingKind.ACTIVITY_IMPOSSIBLE_HOUR: repair_invalid_activity,
    FindingKind.MEAL_WRONG_ORDER: repair_meal_order,
}


__all__ = ["REPAIR_DISPATCH", "RepairFn"]
