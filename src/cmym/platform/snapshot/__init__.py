"""JSON snapshot persistence for track stores."""

from .json_snapshot import SnapshotError, load_snapshot, save_snapshot

__all__ = ["SnapshotError", "load_snapshot", "save_snapshot"]
