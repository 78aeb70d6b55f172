"""
Summary: Ports defining snapshot use case dependencies.
Why: Decouple use cases from concrete gateways and stores so tests and swaps stay simple.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol, runtime_checkable

from projscan.features.snapshot.domain.models import CategoryFolder, FileRecord


@runtime_checkable
class RemoteStorageGateway(Protocol):
    """Port for the hierarchical storage service holding project folders.

    Implementations raise ``StorageUnavailable`` when the service cannot be
    reached and ``NotFound`` when a referenced object does not exist.
    """

    async def list_category_folders(self, project_id: str) -> list[CategoryFolder]:
        """List the immediate sub-folders of a project."""
        ...

    async def project_modified_at(self, project_id: str) -> datetime:
        """Return when the project or one of its category folders last changed."""
        ...

    async def list_files(self, folder_ref: str) -> list[FileRecord]:
        """List the files directly inside ``folder_ref``."""
        ...

    async def read_file_content(self, file_ref: str) -> bytes:
        """Read the raw content of a file."""
        ...

    async def create_file(
        self,
        folder_ref: str,
        name: str,
        content: str | bytes,
        content_type: str = "text/markdown",
    ) -> FileRecord:
        """Create (or overwrite, where supported) a file inside ``folder_ref``."""
        ...


@runtime_checkable
class KeyValueStorePort(Protocol):
    """Port for the durable byte store behind the scan history.

    Failures surface as ``DurableStoreError``.
    """

    def get(self, key: str) -> bytes | None:
        """Return the payload stored under ``key`` or ``None``."""
        ...

    def put(self, key: str, payload: bytes) -> None:
        """Insert or replace the payload stored under ``key``."""
        ...

    def delete(self, key: str) -> None:
        """Remove ``key`` if present."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]:
        """Return stored keys starting with ``prefix``."""
        ...


__all__ = ["KeyValueStorePort", "RemoteStorageGateway"]
