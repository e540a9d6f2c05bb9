"""Auto-repair for coherence findings."""

from trip_coherence.repair.engine import RepairEngine, RepairResult, normalize_order
from trip_coherence.repair.strategies import REPAIR_DISPATCH

__all__ = ["REPAIR_DISPATCH", "RepairEngine", "RepairResult", "normalize_order"]
