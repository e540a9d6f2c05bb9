"""Read-only helpers over a day's items: partitions and arrival/departure anchors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from trip_coherence.domain.classification import TRANSFER_ROLES, classify_item, is_content
from trip_coherence.domain.enums import ItemRole
from trip_coherence.domain.models import TripItem
from trip_coherence.shared.timeutils import sort_items


@dataclass(frozen=True)
class ArrivalChain:
    main_transport: Optional[TripItem]
    transfer: Optional[TripItem]
    lodging_checkin: Optional[TripItem]

    @property
    def anchor(self) -> Optional[TripItem]:
        """Item whose end marks arrival at the destination (never the hotel check-in)."""
        return self.main_transport or self.transfer


@dataclass(frozen=True)
class DepartureChain:
    checkout: Optional[TripItem]
    transfer: Optional[TripItem]
    main_transport: Optional[TripItem]

    @property
    def anchor(self) -> Optional[TripItem]:
        """Item whose start opens the departure chain."""
        return self.checkout or self.transfer or self.main_transport


def content_items(items: Iterable[TripItem]) -> list[TripItem]:
    return [item for item in items if is_content(item)]


def _with_role(items: list[TripItem], roles: frozenset[ItemRole] | set[ItemRole]) -> list[TripItem]:
    return [item for item in items if classify_item(item) in roles]


def arrival_chain(items: Iterable[TripItem]) -> ArrivalChain:
    ordered = sort_items(items)
    mains = _with_role(ordered, {ItemRole.MAIN_TRANSPORT})
    transfers = _with_role(ordered, {ItemRole.LOCAL_TRANSFER})
    checkins = _with_role(ordered, {ItemRole.LODGING_CHECKIN})
    return ArrivalChain(
        main_transport=mains[0] if mains else None,
        transfer=transfers[0] if transfers else None,
        lodging_checkin=checkins[0] if checkins else None,
    )


def departure_chain(items: Iterable[TripItem], *, is_first_day: bool = False) -> DepartureChain:
    """Locate checkout -> transfer -> main transport on a departure day.

    On a single-day trip the arrival legs are excluded so the same flight is
    not read as both arrival and departure.
    """
    ordered = sort_items(items)
    excluded: set[str] = set()
    if is_first_day:
        arrival = arrival_chain(ordered)
        excluded = {item.id for item in (arrival.main_transport, arrival.transfer) if item is not None}

    mains = [item for item in _with_role(ordered, {ItemRole.MAIN_TRANSPORT}) if item.id not in excluded]
    transfers = [item for item in _with_role(ordered, TRANSFER_ROLES) if item.id not in excluded]
    checkouts = _with_role(ordered, {ItemRole.LODGING_CHECKOUT})
    return DepartureChain(
        checkout=checkouts[0] if checkouts else None,
        transfer=transfers[-1] if transfers else None,
        main_transport=mains[-1] if mains else None,
    )


__all__ = [
    "ArrivalChain",
    "DepartureChain",
    "arrival_chain",
    "content_items",
    "departure_chain",
]
