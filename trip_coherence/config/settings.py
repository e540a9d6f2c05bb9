"""Runtime settings resolved from the environment."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from trip_coherence.domain.exceptions import InvalidSettings

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

DEFAULT_MAX_REPAIR_ROUNDS = 1


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise InvalidSettings(name, raw)


def resolve_max_repair_rounds() -> int:
    raw = os.getenv("COHERENCE_MAX_REPAIR_ROUNDS")
    if raw is None or not raw.strip():
        return DEFAULT_MAX_REPAIR_ROUNDS
    try:
        rounds = int(raw.strip())
    except ValueError as exc:
        raise InvalidSettings("COHERENCE_MAX_REPAIR_ROUNDS", raw) from exc
    if rounds < 1:
        raise InvalidSettings("COHERENCE_MAX_REPAIR_ROUNDS", raw)
    return rounds


class CoherenceSettings(BaseModel):
    max_repair_rounds: int = Field(default=DEFAULT_MAX_REPAIR_ROUNDS, ge=1)
    repair_warnings: bool = Field(default=True)


def resolve_settings(*, max_repair_rounds: int | None = None) -> CoherenceSettings:
    if max_repair_rounds is not None and max_repair_rounds < 1:
        raise InvalidSettings("max_repair_rounds", max_repair_rounds)
    return CoherenceSettings(
        max_repair_rounds=max_repair_rounds or resolve_max_repair_rounds(),
        repair_warnings=_flag("COHERENCE_REPAIR_WARNINGS", True),
    )


__all__ = [
    "CoherenceSettings",
    "DEFAULT_MAX_REPAIR_ROUNDS",
    "resolve_settings",
]
