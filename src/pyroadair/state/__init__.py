"""State/store layer.

This package is the single source of truth for the map data visible to the
renderer.  Each successful load replaces the whole snapshot at once.
"""

from pyroadair.state.store import MapSnapshot, MapStateStore, SnapshotListener

__all__ = ["MapSnapshot", "MapStateStore", "SnapshotListener"]
