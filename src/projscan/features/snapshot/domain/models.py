"""src/projscan/features/snapshot/domain/models.py
Where: Snapshot feature domain layer.
What: Immutable snapshot records and the change set derived from two snapshots.
Why: Give the builder, diff engine, history store, and dispatcher one shared vocabulary.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType

from .categories import ordered_categories


@dataclass(frozen=True, slots=True)
class FileRecord:
    """Metadata for one file inside a category folder.

    ``id`` is the identity key; it is stable across scans as long as the
    storage service does not recreate the underlying object.
    """

    id: str
    name: str
    content_type: str
    modified_at: datetime
    size_bytes: int | None = None
    location_hint: str | None = None


@dataclass(frozen=True, slots=True)
class CategoryFolder:
    """A category folder as enumerated by the storage gateway."""

    category_id: str
    folder_ref: str


@dataclass(frozen=True, slots=True)
class CategorySnapshot:
    """Files present in one category folder at scan time."""

    category_id: str
    folder_ref: str
    files: Mapping[str, FileRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    @classmethod
    def from_records(
        cls,
        category_id: str,
        folder_ref: str,
        records: Iterable[FileRecord],
    ) -> "CategorySnapshot":
        """Build a snapshot keyed by record id."""

        return cls(
            category_id=category_id,
            folder_ref=folder_ref,
            files={record.id: record for record in records},
        )

    @property
    def latest_modified_at(self) -> datetime | None:
        """Most recent ``modified_at`` across files, ``None`` when empty."""

        if not self.files:
            return None
        return max(record.modified_at for record in self.files.values())


@dataclass(frozen=True, slots=True)
class ProjectSnapshot:
    """One full inspection of a project's category folders.

    Categories whose folder did not exist at scan time are absent from
    ``categories``; an existing but empty folder has an empty entry.
    """

    project_id: str
    taken_at: datetime
    categories: Mapping[str, CategorySnapshot] = field(default_factory=dict)

    def __post_init__(self) -> None:
        ordered = {name: self.categories[name] for name in ordered_categories(self.categories)}
        object.__setattr__(self, "categories", MappingProxyType(ordered))

    @property
    def file_count(self) -> int:
        return sum(len(category.files) for category in self.categories.values())


class ChangeKind(StrEnum):
    """How a file differs from the previous snapshot."""

    NEW = "new"
    CHANGED = "changed"
    DELETED = "deleted"


@dataclass(frozen=True, slots=True)
class FileChange:
    """A file record tagged with its category and change kind."""

    category_id: str
    record: FileRecord
    kind: ChangeKind
    previous_modified_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class ChangeSet:
    """Differences between a current snapshot and the previous one.

    ``removed_categories`` lists categories whose folder disappeared; they are
    also part of ``changed_categories`` because their files are reported as
    deleted.
    """

    changed_categories: frozenset[str] = frozenset()
    new_files: tuple[FileChange, ...] = ()
    changed_files: tuple[FileChange, ...] = ()
    deleted_files: tuple[FileChange, ...] = ()
    removed_categories: frozenset[str] = frozenset()

    @property
    def total_changes(self) -> int:
        return len(self.new_files) + len(self.changed_files) + len(self.deleted_files)

    @property
    def is_empty(self) -> bool:
        return not self.changed_categories and self.total_changes == 0

    def ordered_changed_categories(self) -> list[str]:
        """Changed categories in canonical category order."""

        return ordered_categories(self.changed_categories)

    def changes_for(self, category_id: str) -> list[FileChange]:
        """All file changes recorded for ``category_id``."""

        return [
            change
            for change in (*self.new_files, *self.changed_files, *self.deleted_files)
            if change.category_id == category_id
        ]


__all__ = [
    "CategoryFolder",
    "CategorySnapshot",
    "ChangeKind",
    "ChangeSet",
    "FileChange",
    "FileRecord",
    "ProjectSnapshot",
]
