"""Runtime configuration helpers."""

from trip_coherence.config.settings import CoherenceSettings, resolve_settings

__all__ = ["CoherenceSettings", "resolve_settings"]
