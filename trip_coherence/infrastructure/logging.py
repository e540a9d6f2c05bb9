"""Structured logging: one JSON object per line on stderr."""

from __future__ import annotations

import json
import os
import sys
import time
import uuid
from typing import Any, Optional, TextIO

_FALSY = {"0", "false", "no", "off"}


def _logging_enabled() -> bool:
    raw = os.getenv("COHERENCE_LOG_ENABLED")
    return not (raw and raw.strip().lower() in _FALSY)


class StructuredLogger:
    """JSON line logger; every line carries the run's trace id."""

    def __init__(
        self,
        trace_id: Optional[str] = None,
        output: Optional[TextIO] = None,
        enabled: Optional[bool] = None,
    ):
        self.trace_id = trace_id or uuid.uuid4().hex[:8]
        self.enabled = _logging_enabled() if enabled is None else enabled
        self._output = output or sys.stderr
        self._started: dict[str, float] = {}

    def _emit(self, event: str, **fields: Any) -> None:
        if not self.enabled:
            return
        record = {"event": event, **fields, "trace_id": self.trace_id, "timestamp": time.time()}
        try:
            self._output.write(json.dumps(record, ensure_ascii=False, default=str) + "\n")
            self._output.flush()
        except (OSError, ValueError) as exc:
            # closed or broken stream: report once on stderr, never raise into repair
            sys.stderr.write(f'{{"event": "logger_internal_error", "error": {json.dumps(str(exc))}}}\n')

    def node_start(self, node_name: str, **extra: Any) -> None:
        self._started[node_name] = time.perf_counter()
        self._emit("node_start", node=node_name, **extra)

    def node_end(self, node_name: str, *, repair_attempts: int = 0, issues_count: int = 0, **extra: Any) -> None:
        started = self._started.pop(node_name, None)
        elapsed = 0.0 if started is None else (time.perf_counter() - started) * 1000
        self._emit(
            "node_end",
            node=node_name,
            duration_ms=round(elapsed, 1),
            repair_attempts=repair_attempts,
            issues_count=issues_count,
            **extra,
        )

    def finding(self, node_name: str, kind: str, day: int, severity: str, message: str) -> None:
        self._emit("finding", node=node_name, kind=kind, day=day, severity=severity, message=message)

    def repair_action(self, node_name: str, action: str, **extra: Any) -> None:
        self._emit("repair_action", node=node_name, action=action, **extra)

    def warning(self, node_name: str, message: str, **extra: Any) -> None:
        self._emit("warning", node=node_name, message=message, **extra)

    def error(self, node_name: str, error: str, **extra: Any) -> None:
        self._emit("error", node=node_name, error=error, **extra)

    def summary(self, **extra: Any) -> None:
        self._emit("summary", **extra)


# process-wide logger
_logger: Optional[StructuredLogger] = None


def get_logger(trace_id: Optional[str] = None) -> StructuredLogger:
    global _logger
    if _logger is None or (trace_id and _logger.trace_id != trace_id):
        _logger = StructuredLogger(trace_id=trace_id)
    return _logger


def reset_logger() -> None:
    global _logger
    _logger = None


__all__ = ["StructuredLogger", "get_logger", "reset_logger"]
