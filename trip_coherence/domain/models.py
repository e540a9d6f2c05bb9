"""Pydantic domain models."""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from trip_coherence.domain.constants import ITEM_TYPE_ALIASES
from trip_coherence.domain.enums import FindingKind, ItemType, Severity
from trip_coherence.domain.exceptions import InvalidTripError
from trip_coherence.shared.timeutils import to_time


class TripItem(BaseModel):
    id: str
    type: ItemType
    title: str = ""
    start_time: str = "00:00"
    end_time: str = "00:00"
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    order_index: int = 0
    description: str = ""
    location_name: str = ""

    @field_validator("type", mode="before")
    @classmethod
    def _resolve_type_alias(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip().lower().replace("_", "-")
            return ITEM_TYPE_ALIASES.get(key, key)
        return value

    @field_validator("start_time", "end_time", mode="before")
    @classmethod
    def _coerce_time(cls, value: Any) -> str:
        """Upstream times may be null or minutes-of-day; garbled strings are left to to_minutes."""
        if value is None:
            return "00:00"
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return to_time(value)
        return str(value)


class TripDay(BaseModel):
    day_number: int = 1
    date: Optional[dt.date] = None
    items: list[TripItem] = Field(default_factory=list)
    theme: str = ""


class Trip(BaseModel):
    id: str = ""
    title: str = ""
    destination: str = ""
    days: list[TripDay] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def last_day_number(self) -> int:
        return len(self.days)

    def find_day(self, day_number: int) -> Optional[TripDay]:
        return next((day for day in self.days if day.day_number == day_number), None)


class Finding(BaseModel):
    kind: FindingKind
    day_number: int
    message: str = ""
    items: list[TripItem] = Field(default_factory=list)
    severity: Severity = Severity.CRITICAL
    auto_fixable: bool = True
    reference_day: Optional[int] = None

    @property
    def item_ids(self) -> list[str]:
        return [item.id for item in self.items]


class CoherenceResult(BaseModel):
    valid: bool = True
    errors: list[Finding] = Field(default_factory=list)
    warnings: list[Finding] = Field(default_factory=list)
    repaired: Optional[Trip] = None
    actions: list[str] = Field(default_factory=list)
    residual_errors: list[Finding] = Field(default_factory=list)
    residual_warnings: list[Finding] = Field(default_factory=list)

    @property
    def findings(self) -> list[Finding]:
        return [*self.errors, *self.warnings]


def load_trip(payload: Trip | dict[str, Any]) -> Trip:
    if isinstance(payload, Trip):
        return payload
    try:
        return Trip.model_validate(payload)
    except ValidationError as exc:
        raise InvalidTripError(f"trip payload rejected: {exc.error_count()} error(s)\n{exc}") from exc
