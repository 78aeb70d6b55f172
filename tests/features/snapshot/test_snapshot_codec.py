"""
Summary: Exercise snapshot JSON encoding used by the durable history layer.
Why: A corrupt or foreign payload must be rejected rather than half-decoded.
"""

import json
from datetime import datetime, timezone

import pytest

from projscan.features.snapshot import (
    CategorySnapshot,
    FileRecord,
    ProjectSnapshot,
    SnapshotDecodeError,
    decode_snapshot,
    encode_snapshot,
)


def _snapshot() -> ProjectSnapshot:
    record = FileRecord(
        id="f1",
        name="仕様書.md",
        content_type="text/markdown",
        modified_at=datetime(2024, 5, 1, 9, 30, 15, 250000, tzinfo=timezone.utc),
        size_bytes=1024,
        location_hint="https://drive.example/f1",
    )
    return ProjectSnapshot(
        "project-1",
        datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
        {
            "Document": CategorySnapshot.from_records("Document", "folder-doc", [record]),
            "Paper": CategorySnapshot("Paper", "folder-paper"),
        },
    )


def test_encoded_snapshot_decodes_to_equal_value() -> None:
    snapshot = _snapshot()

    decoded = decode_snapshot(encode_snapshot(snapshot))

    assert decoded.project_id == snapshot.project_id
    assert decoded.taken_at == snapshot.taken_at
    assert list(decoded.categories) == ["Document", "Paper"]
    assert dict(decoded.categories["Document"].files) == dict(snapshot.categories["Document"].files)
    assert decoded.categories["Paper"].files == {}


def test_payload_is_versioned_json() -> None:
    payload = json.loads(encode_snapshot(_snapshot()).decode("utf-8"))

    assert payload["version"] == 1
    assert payload["categories"]["Document"]["folder_ref"] == "folder-doc"


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"\xff\xfe",
        b'{"version": 2, "project_id": "p", "taken_at": "2024-01-01T00:00:00+00:00", "categories": {}}',
        b'{"version": 1, "project_id": "p"}',
        b'{"version": 1, "project_id": "p", "taken_at": "yesterday", "categories": {}}',
        b"[]",
    ],
)
def test_decode_rejects_malformed_payloads(raw: bytes) -> None:
    with pytest.raises(SnapshotDecodeError):
        _ = decode_snapshot(raw)
