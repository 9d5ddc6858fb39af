"""Snapshot storage, comparison and verification.

Each adapter keeps its own snapshot per scenario and scale, enabling:
1. Self-verification: compare against the adapter's previous output (default)
2. Baseline comparison: compare against another adapter's snapshot
"""

from leb.snapshot.comparator import CompareResult, compare_snapshots, generate_diff
from leb.snapshot.store import (
    SnapshotStore,
    default_snapshot_dir,
    make_scenario_key,
)
from leb.snapshot.verification import VerificationEngine

__all__ = [
    "CompareResult",
    "SnapshotStore",
    "VerificationEngine",
    "compare_snapshots",
    "default_snapshot_dir",
    "generate_diff",
    "make_scenario_key",
]
