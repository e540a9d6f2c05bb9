"""Repair engine: apply per-kind strategies to a copy, re-sort, revalidate."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable

from trip_coherence.domain.enums import Severity
from trip_coherence.domain.models import Finding, Trip
from trip_coherence.infrastructure.logging import get_logger
from trip_coherence.repair.strategies import REPAIR_DISPATCH
from trip_coherence.shared.timeutils import sort_items
from trip_coherence.validators import run_all_validators

ValidateFn = Callable[[Trip], list[Finding]]


@dataclass
class RepairResult:
    trip: Trip
    actions: list[str] = field(default_factory=list)
    remaining: list[Finding] = field(default_factory=list)
    rounds: int = 0

    @property
    def remaining_errors(self) -> list[Finding]:
        return [row for row in self.remaining if row.severity == Severity.CRITICAL]

    @property
    def remaining_warnings(self) -> list[Finding]:
        return [row for row in self.remaining if row.severity == Severity.WARNING]


def _signature(finding: Finding) -> tuple:
    return finding.kind, finding.day_number, tuple(sorted(finding.item_ids))


def normalize_order(trip: Trip) -> None:
    """Sort every day by start time and rewrite the display order."""
    for day in trip.days:
        day.items = sort_items(day.items)
        for index, item in enumerate(day.items):
            item.order_index = index


class RepairEngine:
    """Bounded repair: by default one repair pass followed by one revalidation."""

    def __init__(
        self,
        validate_fn: ValidateFn = run_all_validators,
        *,
        max_rounds: int = 1,
        include_warnings: bool = True,
    ) -> None:
        self._validate = validate_fn
        self._max_rounds = max(1, max_rounds)
        self._include_warnings = include_warnings

    def _fixable(self, findings: Iterable[Finding]) -> list[Finding]:
        return [
            row
            for row in findings
            if row.auto_fixable and (row.severity == Severity.CRITICAL or self._include_warnings)
        ]

    def repair(self, trip: Trip, findings: list[Finding]) -> RepairResult:
        logger = get_logger()
        working = trip.model_copy(deep=True)
        result = RepairResult(trip=working, remaining=list(findings))
        pending = self._fixable(findings)

        while pending and result.rounds < self._max_rounds:
            result.rounds += 1
            logger.node_start("repair", round=result.rounds, pending=len(pending))
            round_actions = self._apply(working, pending)
            normalize_order(working)
            result.actions.extend(round_actions)
            result.remaining = self._validate(working)
            logger.node_end(
                "repair",
                repair_attempts=result.rounds,
                issues_count=len(result.remaining),
                actions=len(round_actions),
            )
            if not round_actions:
                break
            pending = self._fixable(result.remaining)

        return result

    def _apply(self, working: Trip, pending: list[Finding]) -> list[str]:
        logger = get_logger()
        actions: list[str] = []
        for finding in pending:
            # an earlier fix may already have resolved this one
            live = {_signature(row) for row in self._validate(working)}
            if _signature(finding) not in live:
                continue
            strategy = REPAIR_DISPATCH[finding.kind]
            for action in strategy(working, finding):
                logger.repair_action("repair", action, kind=finding.kind.value, day=finding.day_number)
                actions.append(action)
        return actions


__all__ = ["RepairEngine", "RepairResult", "normalize_order"]
