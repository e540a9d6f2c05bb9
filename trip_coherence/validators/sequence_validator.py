"""Arrival/departure sequencing validator.

Day 1 runs main transport -> local transfer -> hotel check-in before any
sightseeing; the last day runs checkout -> transfer -> main transport after
it. Hotel check-in on day 1 is deliberately exempt from "must precede
content": travellers landing early sightsee while waiting for check-in.
"""

from __future__ import annotations

from trip_coherence.domain.classification import TRANSFER_ROLES, classify_item, transport_label
from trip_coherence.domain.constants import DEPARTURE_MARGIN_MINUTES
from trip_coherence.domain.enums import FindingKind, ItemRole, ItemType, Severity
from trip_coherence.domain.models import Finding, TripItem
from trip_coherence.domain.schedule import arrival_chain, content_items, departure_chain
from trip_coherence.shared.timeutils import to_minutes
from trip_coherence.validators.common import make_finding

_DAY1_SEQUENCED_ROLES = frozenset({ItemRole.MAIN_TRANSPORT, *TRANSFER_ROLES})


def _leg_label(item: TripItem) -> str:
    if classify_item(item) != ItemRole.MAIN_TRANSPORT:
        return "transfer"
    return "flight" if item.type == ItemType.FLIGHT else transport_label(item.title)


def validate_arrival(day_number: int, items: list[TripItem], *, is_last_day: bool = False) -> list[Finding]:
    findings: list[Finding] = []
    chain = arrival_chain(items)
    departure_ids: set[str] = set()
    if is_last_day:
        departure = departure_chain(items, is_first_day=True)
        departure_ids = {
            item.id for item in (departure.checkout, departure.transfer, departure.main_transport) if item is not None
        }
    main, transfer, checkin = chain.main_transport, chain.transfer, chain.lodging_checkin

    if main and transfer and to_minutes(transfer.start_time) < to_minutes(main.end_time):
        findings.append(
            make_finding(
                FindingKind.TRANSFER_AFTER_ACTIVITY,
                day_number,
                f'Transfer "{transfer.title}" ({transfer.start_time}) starts before the '
                f"{_leg_label(main)} lands ({main.end_time})",
                [main, transfer],
            )
        )

    if transfer and checkin and to_minutes(checkin.start_time) < to_minutes(transfer.end_time):
        findings.append(
            make_finding(
                FindingKind.CHECKIN_BEFORE_TRANSFER,
                day_number,
                f"Hotel check-in ({checkin.start_time}) starts before the transfer ends ({transfer.end_time})",
                [transfer, checkin],
            )
        )

    anchor = chain.anchor
    contents = content_items(items)
    if anchor is not None:
        arrival_end = to_minutes(anchor.end_time)
        for item in contents:
            if to_minutes(item.start_time) < arrival_end:
                findings.append(
                    make_finding(
                        FindingKind.ACTIVITY_BEFORE_ARRIVAL,
                        day_number,
                        f'"{item.title}" ({item.start_time}) is scheduled before arrival '
                        f"({_leg_label(anchor)} ends {anchor.end_time})",
                        [anchor, item],
                    )
                )

    if contents:
        first_content = min(contents, key=lambda row: to_minutes(row.start_time))
        first_start = to_minutes(first_content.start_time)
        for item in items:
            if item.id in departure_ids or classify_item(item) not in _DAY1_SEQUENCED_ROLES:
                continue
            if to_minutes(item.start_time) > first_start:
                findings.append(
                    make_finding(
                        FindingKind.ILLOGICAL_SEQUENCE,
                        day_number,
                        f'Illogical sequence: "{item.title}" ({item.start_time}) comes after '
                        f'"{first_content.title}" ({first_content.start_time})',
                        [first_content, item],
                    )
                )

    return findings


def validate_departure(day_number: int, items: list[TripItem], *, is_first_day: bool = False) -> list[Finding]:
    findings: list[Finding] = []
    chain = departure_chain(items, is_first_day=is_first_day)
    checkout, transfer, main = chain.checkout, chain.transfer, chain.main_transport

    if checkout and transfer and to_minutes(checkout.end_time) > to_minutes(transfer.start_time):
        findings.append(
            make_finding(
                FindingKind.CHECKOUT_AFTER_TRANSFER,
                day_number,
                f"Checkout ends ({checkout.end_time}) after the transfer starts ({transfer.start_time})",
                [checkout, transfer],
            )
        )

    if main:
        main_start = to_minutes(main.start_time)
        for before in (transfer, checkout):
            if before is not None and main_start < to_minutes(before.end_time):
                findings.append(
                    make_finding(
                        FindingKind.ILLOGICAL_SEQUENCE,
                        day_number,
                        f"Return {_leg_label(main)} ({main.start_time}) leaves before "
                        f'"{before.title}" ends ({before.end_time})',
                        [before, main],
                    )
                )

    anchor = chain.anchor
    if anchor is None:
        return findings

    departure_start = to_minutes(anchor.start_time)
    for item in content_items(items):
        item_end = to_minutes(item.end_time)
        if item_end > departure_start:
            findings.append(
                make_finding(
                    FindingKind.ACTIVITY_AFTER_DEPARTURE,
                    day_number,
                    f'"{item.title}" ends at {item.end_time}, after "{anchor.title}" starts ({anchor.start_time})',
                    [anchor, item],
                )
            )
        elif main and item_end > to_minutes(main.start_time) - DEPARTURE_MARGIN_MINUTES:
            findings.append(
                make_finding(
                    FindingKind.DEPARTURE_TOO_TIGHT,
                    day_number,
                    f'"{item.title}" ends at {item.end_time}, too close to the {_leg_label(main)} '
                    f"departure ({main.start_time})",
                    [main, item],
                    severity=Severity.WARNING,
                )
            )

    return findings


__all__ = ["validate_arrival", "validate_departure"]
