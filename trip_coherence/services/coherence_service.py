"""Application service: validate a trip and repair it when it is incoherent."""

from __future__ import annotations

from typing import Any, Optional

from trip_coherence.config.settings import CoherenceSettings, resolve_settings
from trip_coherence.domain.enums import Severity
from trip_coherence.domain.models import CoherenceResult, Finding, Trip, load_trip
from trip_coherence.infrastructure.logging import get_logger
from trip_coherence.repair.engine import RepairEngine, normalize_order
from trip_coherence.validators import run_all_validators

TripInput = Trip | dict[str, Any]


def _engine(settings: CoherenceSettings) -> RepairEngine:
    return RepairEngine(
        run_all_validators,
        max_rounds=settings.max_repair_rounds,
        include_warnings=settings.repair_warnings,
    )


def _log_findings(node: str, findings: list[Finding]) -> None:
    logger = get_logger()
    for row in findings:
        logger.finding(node, row.kind.value, row.day_number, row.severity.value, row.message)


def validate(trip: TripInput, *, settings: Optional[CoherenceSettings] = None) -> CoherenceResult:
    """Inspect ``trip``; when it has critical errors attach a repaired copy.

    The input is never mutated. ``repaired`` is only set when ``valid`` is
    false, and residual findings from the single revalidation are reported
    instead of retried.
    """
    trip = load_trip(trip)
    settings = settings or resolve_settings()
    logger = get_logger()

    logger.node_start("validate", days=len(trip.days))
    findings = run_all_validators(trip)
    errors = [row for row in findings if row.severity == Severity.CRITICAL]
    warnings = [row for row in findings if row.severity == Severity.WARNING]
    _log_findings("validate", findings)
    logger.node_end("validate", issues_count=len(findings), errors=len(errors), warnings=len(warnings))

    result = CoherenceResult(valid=not errors, errors=errors, warnings=warnings)
    if result.valid:
        return result

    repair = _engine(settings).repair(trip, findings)
    result.repaired = repair.trip
    result.actions = repair.actions
    result.residual_errors = repair.remaining_errors
    result.residual_warnings = repair.remaining_warnings
    return result


def validate_and_fix(trip: TripInput, *, settings: Optional[CoherenceSettings] = None) -> Trip:
    """Return a chronologically sorted, repaired copy of ``trip``. Never raises on bad schedules."""
    trip = load_trip(trip)
    settings = settings or resolve_settings()
    logger = get_logger()

    ordered = trip.model_copy(deep=True)
    normalize_order(ordered)
    result = validate(ordered, settings=settings)

    fixed = ordered
    actions = result.actions
    residual = result.residual_errors
    if result.repaired is not None:
        fixed = result.repaired
    elif settings.repair_warnings and any(row.auto_fixable for row in result.warnings):
        repair = _engine(settings).repair(ordered, result.warnings)
        fixed = repair.trip
        actions = repair.actions
        residual = repair.remaining_errors

    if residual:
        _log_findings("validate_and_fix", residual)
    logger.summary(
        valid=result.valid,
        errors=len(result.errors),
        warnings=len(result.warnings),
        repair_actions=len(actions),
        residual_errors=len(residual),
    )
    return fixed


__all__ = ["validate", "validate_and_fix"]
