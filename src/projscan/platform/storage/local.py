"""Where: src/projscan/platform/storage/local.py
What: Storage gateway over a local directory tree laid out like a remote project.
Why: Allow offline scans and tests against real files without a remote service.
Assumptions: - A project is a directory whose immediate sub-directories are category folders.
Trade-offs: - File ids are ``<folder>/<name>``, so an overwritten file reports as changed.
"""

from __future__ import annotations

import asyncio
import mimetypes
import os
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Final

from projscan.features.snapshot.domain.models import CategoryFolder, FileRecord
from projscan.platform.logging import logger
from projscan.shared.errors import NotFound, StorageUnavailable

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DEFAULT_CONTENT_TYPE: Final[str] = "application/octet-stream"


class LocalFolderGateway:
    """Expose a directory tree through the remote storage gateway contract.

    ``project_id`` is a directory path, resolved against ``root`` when relative.
    Folder and file references are absolute paths.
    """

    def __init__(self, root: Path | None = None) -> None:
        self._root: Path = (root or Path.cwd()).expanduser().resolve()

    def project_dir(self, project_id: str) -> Path:
        path = Path(project_id).expanduser()
        if not path.is_absolute():
            path = self._root / path
        return path.resolve()

    async def list_category_folders(self, project_id: str) -> list[CategoryFolder]:
        return await asyncio.to_thread(self._list_category_folders, project_id)

    async def project_modified_at(self, project_id: str) -> datetime:
        return await asyncio.to_thread(self._project_modified_at, project_id)

    async def list_files(self, folder_ref: str) -> list[FileRecord]:
        return await asyncio.to_thread(self._list_files, Path(folder_ref))

    async def read_file_content(self, file_ref: str) -> bytes:
        return await asyncio.to_thread(self._read_file, Path(file_ref))

    async def create_file(
        self,
        folder_ref: str,
        name: str,
        content: str | bytes,
        content_type: str = "text/markdown",
    ) -> FileRecord:
        return await asyncio.to_thread(self._write_file, Path(folder_ref), name, content, content_type)

    def _list_category_folders(self, project_id: str) -> list[CategoryFolder]:
        project_dir = self.project_dir(project_id)
        if not project_dir.is_dir():
            raise NotFound(f"Project directory not found: {project_dir}")
        try:
            entries = sorted(project_dir.iterdir())
        except OSError as exc:
            raise StorageUnavailable(f"Unable to list {project_dir}: {exc}") from exc
        return [
            CategoryFolder(category_id=entry.name, folder_ref=str(entry))
            for entry in entries
            if entry.is_dir() and not entry.name.startswith(".")
        ]

    def _project_modified_at(self, project_id: str) -> datetime:
        # Directory mtimes only move on add/remove; direct files cover in-place edits.
        project_dir = self.project_dir(project_id)
        try:
            latest = project_dir.stat().st_mtime_ns
            for folder in self._list_category_folders(project_id):
                with os.scandir(folder.folder_ref) as entries:
                    stamps = [
                        entry.stat().st_mtime_ns
                        for entry in entries
                        if not entry.name.startswith(".") and entry.is_file()
                    ]
                latest = max([latest, Path(folder.folder_ref).stat().st_mtime_ns, *stamps])
        except FileNotFoundError as exc:
            raise NotFound(f"Project directory not found: {project_dir}") from exc
        except OSError as exc:
            raise StorageUnavailable(f"Unable to stat {project_dir}: {exc}") from exc
        return _from_ns(latest)

    def _list_files(self, folder: Path) -> list[FileRecord]:
        if not folder.is_dir():
            raise NotFound(f"Folder not found: {folder}")
        records: list[FileRecord] = []
        try:
            with os.scandir(folder) as entries:
                for entry in entries:
                    if entry.name.startswith(".") or not entry.is_file():
                        continue
                    records.append(self._record(folder, Path(entry.path), entry.stat()))
        except FileNotFoundError as exc:
            raise NotFound(f"Folder not found: {folder}") from exc
        except OSError as exc:
            raise StorageUnavailable(f"Unable to list {folder}: {exc}") from exc
        return records

    def _read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise NotFound(f"File not found: {path}") from exc
        except OSError as exc:
            raise StorageUnavailable(f"Unable to read {path}: {exc}") from exc

    def _write_file(self, folder: Path, name: str, content: str | bytes, content_type: str) -> FileRecord:
        if not name or Path(name).name != name:
            raise ValueError(f"Invalid file name: {name!r}")
        if not folder.is_dir():
            raise NotFound(f"Folder not found: {folder}")
        target = folder / name
        data = content.encode("utf-8") if isinstance(content, str) else content
        try:
            _ = target.write_bytes(data)
            stat = target.stat()
        except OSError as exc:
            raise StorageUnavailable(f"Unable to write {target}: {exc}") from exc
        logger.debug("Wrote %d bytes to %s", len(data), target)
        return self._record(folder, target, stat, content_type=content_type)

    @staticmethod
    def _record(
        folder: Path,
        path: Path,
        stat: os.stat_result,
        *,
        content_type: str | None = None,
    ) -> FileRecord:
        guessed, _ = mimetypes.guess_type(path.name)
        return FileRecord(
            id=f"{folder.name}/{path.name}",
            name=path.name,
            content_type=content_type or guessed or _DEFAULT_CONTENT_TYPE,
            modified_at=_from_ns(stat.st_mtime_ns),
            size_bytes=stat.st_size,
            location_hint=str(path),
        )


def _from_ns(mtime_ns: int) -> datetime:
    return _EPOCH + timedelta(microseconds=mtime_ns // 1000)


__all__ = ["LocalFolderGateway"]
