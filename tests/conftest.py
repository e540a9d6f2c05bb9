"""pytest global fixtures: environment isolation."""

import pytest

from trip_coherence.infrastructure.logging import reset_logger


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Ignore the developer's COHERENCE_* variables and keep stderr quiet."""
    monkeypatch.delenv("COHERENCE_MAX_REPAIR_ROUNDS", raising=False)
    monkeypatch.delenv("COHERENCE_REPAIR_WARNINGS", raising=False)
    monkeypatch.setenv("COHERENCE_LOG_ENABLED", "false")
    # the process-wide logger caches the enabled flag
    reset_logger()
    yield
    reset_logger()
