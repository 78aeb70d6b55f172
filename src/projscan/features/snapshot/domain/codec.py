"""
Summary: JSON serialisation of project snapshots for the durable history layer.
Why: Keep the storage format in one place so the store and DAO stay format-agnostic.
"""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any, Final, cast

from .models import CategorySnapshot, FileRecord, ProjectSnapshot

FORMAT_VERSION: Final[int] = 1


class SnapshotDecodeError(ValueError):
    """Raised when a stored payload cannot be turned back into a snapshot."""


def encode_snapshot(snapshot: ProjectSnapshot) -> bytes:
    """Serialise ``snapshot`` to UTF-8 JSON bytes."""

    payload: dict[str, Any] = {
        "version": FORMAT_VERSION,
        "project_id": snapshot.project_id,
        "taken_at": snapshot.taken_at.isoformat(),
        "categories": {
            name: {
                "folder_ref": category.folder_ref,
                "files": [_encode_record(record) for record in category.files.values()],
            }
            for name, category in snapshot.categories.items()
        },
    }
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def decode_snapshot(raw: bytes) -> ProjectSnapshot:
    """Rebuild a snapshot from bytes produced by ``encode_snapshot``."""

    try:
        payload = cast(dict[str, Any], json.loads(raw.decode("utf-8")))
        version = payload.get("version")
        if version != FORMAT_VERSION:
            raise SnapshotDecodeError(f"unsupported snapshot format version: {version!r}")
        categories = {
            str(name): CategorySnapshot.from_records(
                str(name),
                str(body["folder_ref"]),
                (_decode_record(item) for item in body["files"]),
            )
            for name, body in cast(dict[str, Any], payload["categories"]).items()
        }
        return ProjectSnapshot(
            project_id=str(payload["project_id"]),
            taken_at=datetime.fromisoformat(payload["taken_at"]),
            categories=categories,
        )
    except SnapshotDecodeError:
        raise
    except (UnicodeDecodeError, json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as exc:
        raise SnapshotDecodeError(f"malformed snapshot payload: {exc}") from exc


def _encode_record(record: FileRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "content_type": record.content_type,
        "modified_at": record.modified_at.isoformat(),
        "size_bytes": record.size_bytes,
        "location_hint": record.location_hint,
    }


def _decode_record(item: dict[str, Any]) -> FileRecord:
    size = item.get("size_bytes")
    return FileRecord(
        id=str(item["id"]),
        name=str(item["name"]),
        content_type=str(item["content_type"]),
        modified_at=datetime.fromisoformat(item["modified_at"]),
        size_bytes=int(size) if size is not None else None,
        location_hint=item.get("location_hint"),
    )


__all__ = ["FORMAT_VERSION", "SnapshotDecodeError", "decode_snapshot", "encode_snapshot"]
