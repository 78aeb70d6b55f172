# Where: projscan.features.snapshot.__init__
# What: Expose snapshot building, diffing, and history persistence.
# Why: Provide a cohesive import surface for application and UI layers.

from .domain.categories import CATEGORY_ORDER, Category, category_sort_key, ordered_categories
from .domain.codec import SnapshotDecodeError, decode_snapshot, encode_snapshot
from .domain.models import (
    CategoryFolder,
    CategorySnapshot,
    ChangeKind,
    ChangeSet,
    FileChange,
    FileRecord,
    ProjectSnapshot,
)
from .usecases.diff_engine import diff_snapshots
from .usecases.history_store import ScanHistoryStore, history_key
from .usecases.ports import KeyValueStorePort, RemoteStorageGateway
from .usecases.snapshot_builder import SnapshotBuilder

__all__ = [
    "CATEGORY_ORDER",
    "Category",
    "CategoryFolder",
    "CategorySnapshot",
    "ChangeKind",
    "ChangeSet",
    "FileChange",
    "FileRecord",
    "KeyValueStorePort",
    "ProjectSnapshot",
    "RemoteStorageGateway",
    "ScanHistoryStore",
    "SnapshotBuilder",
    "SnapshotDecodeError",
    "category_sort_key",
    "decode_snapshot",
    "diff_snapshots",
    "encode_snapshot",
    "history_key",
    "ordered_categories",
]
