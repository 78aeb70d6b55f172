"""Where: src/projscan/features/snapshot/usecases/diff_engine.py
What: Compare two project snapshots and classify file-level changes.
Why: Let the dispatcher run category handlers only where something changed.
Assumptions: - File ids are stable across scans; a recreated object shows up as deleted + new.
Trade-offs: - Equal ``modified_at`` means unchanged even when size or name differ.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from projscan.features.snapshot.domain.categories import ordered_categories
from projscan.features.snapshot.domain.models import (
    CategorySnapshot,
    ChangeKind,
    ChangeSet,
    FileChange,
    FileRecord,
    ProjectSnapshot,
)
from projscan.platform.logging import log_event
from projscan.shared.events import ScanEvent


def diff_snapshots(current: ProjectSnapshot, previous: ProjectSnapshot | None) -> ChangeSet:
    """Compute the ``ChangeSet`` between ``current`` and ``previous``.

    With no previous snapshot every category is changed and every file is new.
    A category absent from ``previous`` is changed even when its folder is
    empty. A category present only in ``previous`` (its folder was removed)
    reports all of its files as deleted and is listed in
    ``removed_categories``.
    """

    if previous is not None and previous.project_id != current.project_id:
        raise ValueError(
            f"Cannot diff snapshots of different projects: {current.project_id} vs {previous.project_id}"
        )

    changed: set[str] = set()
    removed: set[str] = set()
    new_files: list[FileChange] = []
    changed_files: list[FileChange] = []
    deleted_files: list[FileChange] = []

    previous_categories: Mapping[str, CategorySnapshot] = previous.categories if previous else {}

    for name in ordered_categories(current.categories):
        current_category = current.categories[name]
        previous_category = previous_categories.get(name)

        if previous_category is None:
            changed.add(name)
            new_files.extend(_tag(name, current_category.files.values(), ChangeKind.NEW))
            continue

        added, modified, deleted = _diff_files(name, current_category, previous_category)
        if added or modified or deleted:
            changed.add(name)
            new_files.extend(added)
            changed_files.extend(modified)
            deleted_files.extend(deleted)

    for name in ordered_categories(previous_categories):
        if name in current.categories:
            continue
        removed.add(name)
        changed.add(name)
        deleted_files.extend(_tag(name, previous_categories[name].files.values(), ChangeKind.DELETED))

    change_set = ChangeSet(
        changed_categories=frozenset(changed),
        new_files=tuple(new_files),
        changed_files=tuple(changed_files),
        deleted_files=tuple(deleted_files),
        removed_categories=frozenset(removed),
    )
    log_event(
        logging.INFO,
        ScanEvent.DIFF_COMPLETE,
        "Detected %d change(s) across %d categor%s (first scan: %s)",
        change_set.total_changes,
        len(change_set.changed_categories),
        "y" if len(change_set.changed_categories) == 1 else "ies",
        previous is None,
        project_id=current.project_id,
        total_changes=change_set.total_changes,
    )
    return change_set


def _diff_files(
    name: str,
    current: CategorySnapshot,
    previous: CategorySnapshot,
) -> tuple[list[FileChange], list[FileChange], list[FileChange]]:
    added: list[FileChange] = []
    modified: list[FileChange] = []

    for record in _sorted(current.files.values()):
        before = previous.files.get(record.id)
        if before is None:
            added.append(FileChange(name, record, ChangeKind.NEW))
        elif record.modified_at > before.modified_at:
            modified.append(
                FileChange(name, record, ChangeKind.CHANGED, previous_modified_at=before.modified_at)
            )

    deleted = _tag(
        name,
        (record for record_id, record in previous.files.items() if record_id not in current.files),
        ChangeKind.DELETED,
    )
    return added, modified, deleted


def _tag(name: str, records: Iterable[FileRecord], kind: ChangeKind) -> list[FileChange]:
    return [FileChange(name, record, kind) for record in _sorted(records)]


def _sorted(records: Iterable[FileRecord]) -> list[FileRecord]:
    return sorted(records, key=lambda record: (record.name, record.id))


__all__ = ["diff_snapshots"]
