"""Wall-clock helpers: "HH:MM" strings <-> minutes since midnight."""

from __future__ import annotations

from typing import Iterable, Optional, Protocol, TypeVar

from trip_coherence.infrastructure.logging import get_logger

LAST_MINUTE = 23 * 60 + 59


class _Timed(Protocol):
    start_time: str
    end_time: str


T = TypeVar("T", bound=_Timed)


def _field(raw: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        return 0


def to_minutes(value: Optional[str]) -> int:
    """Parse "HH:MM" leniently; missing or garbled fields count as 0."""
    if not value:
        return 0
    parts = str(value).split(":")
    hours = _field(parts[0])
    minutes = _field(parts[1]) if len(parts) > 1 else 0
    return hours * 60 + minutes


def to_time(minutes: int | float) -> str:
    """Format minutes as "HH:MM", clamped to [00:00, 23:59]."""
    value = int(minutes)
    if value < 0:
        get_logger().warning("timeutils", f"negative time {value}min clamped to 00:00", event_kind="time_clamped")
        value = 0
    elif value > LAST_MINUTE:
        get_logger().warning(
            "timeutils",
            f"time {value}min ({value // 60}h{value % 60:02d}) past midnight clamped to 23:59",
            event_kind="time_clamped",
        )
        value = LAST_MINUTE
    return f"{value // 60:02d}:{value % 60:02d}"


def duration_minutes(item: _Timed) -> int:
    return to_minutes(item.end_time) - to_minutes(item.start_time)


def sort_items(items: Iterable[T]) -> list[T]:
    return sorted(items, key=lambda item: to_minutes(item.start_time))


__all__ = ["duration_minutes", "sort_items", "to_minutes", "to_time"]
