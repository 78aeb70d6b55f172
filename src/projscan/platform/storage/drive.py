"""Where: src/projscan/platform/storage/drive.py
What: Google Drive v3 REST gateway implementing the remote storage contract.
Why: Scan project category folders stored on Drive.
Assumptions: - An OAuth access token is obtained elsewhere and passed in.
Trade-offs: - Blocking ``requests`` calls run on worker threads via ``asyncio.to_thread``.
"""

from __future__ import annotations

import asyncio
import json
import time
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Final, cast

import requests

from projscan.config.settings import DRIVE_API_BASE, DRIVE_MIN_INTERVAL_SECONDS, DRIVE_TIMEOUT_SECONDS
from projscan.features.snapshot.domain.models import CategoryFolder, FileRecord
from projscan.platform.logging import logger
from projscan.shared.errors import NotFound, StorageUnavailable

from .rate_limit import RateLimiter

FOLDER_MIME_TYPE: Final[str] = "application/vnd.google-apps.folder"
_FILE_FIELDS: Final[str] = "id,name,mimeType,modifiedTime,size,webViewLink"
_PAGE_SIZE: Final[int] = 1000


class DriveGateway:
    """Talk to the Drive v3 REST API with retries on throttling and server errors."""

    _MAX_ATTEMPTS: int = 3

    def __init__(
        self,
        access_token: str,
        *,
        api_base: str = DRIVE_API_BASE,
        timeout_seconds: float = DRIVE_TIMEOUT_SECONDS,
        rate_limiter: RateLimiter | None = None,
        session: requests.Session | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if not access_token:
            raise ValueError("A Drive access token is required")
        self._api_base: str = api_base.rstrip("/")
        self._timeout: float = timeout_seconds
        self._rate_limiter: RateLimiter = rate_limiter or RateLimiter(DRIVE_MIN_INTERVAL_SECONDS)
        self._session: requests.Session = session or requests.Session()
        self._session.headers.update({"Authorization": f"Bearer {access_token}"})
        self._sleep: Callable[[float], None] = sleep

    async def list_category_folders(self, project_id: str) -> list[CategoryFolder]:
        items = await asyncio.to_thread(
            self._list_children,
            project_id,
            f"mimeType = '{FOLDER_MIME_TYPE}'",
            "id,name",
        )
        return [CategoryFolder(category_id=str(item["name"]), folder_ref=str(item["id"])) for item in items]

    async def project_modified_at(self, project_id: str) -> datetime:
        response = await asyncio.to_thread(
            self._request,
            "GET",
            f"{self._api_base}/drive/v3/files/{project_id}",
            params={"fields": "modifiedTime"},
        )
        return _parse_timestamp(str(_json(response)["modifiedTime"]))

    async def list_files(self, folder_ref: str) -> list[FileRecord]:
        items = await asyncio.to_thread(
            self._list_children,
            folder_ref,
            f"mimeType != '{FOLDER_MIME_TYPE}'",
            _FILE_FIELDS,
        )
        return [file_record_from_item(item) for item in items]

    async def read_file_content(self, file_ref: str) -> bytes:
        response = await asyncio.to_thread(
            self._request,
            "GET",
            f"{self._api_base}/drive/v3/files/{file_ref}",
            params={"alt": "media"},
        )
        return response.content

    async def create_file(
        self,
        folder_ref: str,
        name: str,
        content: str | bytes,
        content_type: str = "text/markdown",
    ) -> FileRecord:
        data = content.encode("utf-8") if isinstance(content, str) else content
        body, boundary = _multipart_body({"name": name, "parents": [folder_ref]}, data, content_type)
        response = await asyncio.to_thread(
            self._request,
            "POST",
            f"{self._api_base}/upload/drive/v3/files",
            params={"uploadType": "multipart", "fields": _FILE_FIELDS},
            data=body,
            headers={"Content-Type": f"multipart/related; boundary={boundary}"},
        )
        return file_record_from_item(_json(response))

    def _list_children(self, parent_id: str, mime_clause: str, fields: str) -> list[dict[str, Any]]:
        query = f"'{escape_query_value(parent_id)}' in parents and trashed = false and {mime_clause}"
        items: list[dict[str, Any]] = []
        page_token: str | None = None
        while True:
            params = {
                "q": query,
                "fields": f"nextPageToken,files({fields})",
                "pageSize": str(_PAGE_SIZE),
            }
            if page_token:
                params["pageToken"] = page_token
            payload = _json(self._request("GET", f"{self._api_base}/drive/v3/files", params=params))
            items.extend(cast(list[dict[str, Any]], payload.get("files", [])))
            page_token = cast(str | None, payload.get("nextPageToken"))
            if not page_token:
                return items

    def _request(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, str] | None = None,
        data: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        last_error = "no attempt made"
        for attempt in range(self._MAX_ATTEMPTS):
            self._rate_limiter.respect()
            try:
                response = self._session.request(
                    method,
                    url,
                    params=params,
                    data=data,
                    headers=headers,
                    timeout=self._timeout,
                )
            except requests.RequestException as exc:
                last_error = f"{type(exc).__name__}: {exc}"
                delay = 1.0
            else:
                status = int(response.status_code)
                if 200 <= status < 300:
                    return response
                if status == 404:
                    raise NotFound(f"Drive resource not found: {url}")
                if not self._should_retry(status):
                    raise StorageUnavailable(f"Drive request failed (status={status}): {_error_reason(response)}")
                last_error = f"status={status}"
                header_items = cast(Iterable[tuple[str, str]], response.headers.items())
                delay = self._retry_delay({str(key): str(value) for key, value in header_items})

            if attempt < self._MAX_ATTEMPTS - 1:
                logger.warning("Drive request error (%s). Retrying in %.1fs.", last_error, delay)
                self._sleep(delay)

        raise StorageUnavailable(f"Drive unavailable after {self._MAX_ATTEMPTS} attempts ({last_error})")

    @staticmethod
    def _should_retry(status: int) -> bool:
        return status == 429 or status >= 500

    @staticmethod
    def _retry_delay(headers: dict[str, str]) -> float:
        retry_after = _parse_retry_after(headers.get("Retry-After"))
        return max(1.0, min(10.0, retry_after or 1.0))


def escape_query_value(value: str) -> str:
    """Escape a literal for use inside a single-quoted Drive query string."""

    return value.replace("\\", "\\\\").replace("'", "\\'")


def file_record_from_item(item: dict[str, Any]) -> FileRecord:
    """Convert a Drive ``files`` resource into a ``FileRecord``."""

    size = item.get("size")
    return FileRecord(
        id=str(item["id"]),
        name=str(item["name"]),
        content_type=str(item.get("mimeType") or "application/octet-stream"),
        modified_at=_parse_timestamp(str(item["modifiedTime"])),
        size_bytes=int(size) if size is not None else None,
        location_hint=cast(str | None, item.get("webViewLink")),
    )


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _multipart_body(metadata: dict[str, Any], data: bytes, content_type: str) -> tuple[bytes, str]:
    boundary = f"projscan-{uuid.uuid4().hex}"
    parts = [
        f"--{boundary}\r\nContent-Type: application/json; charset=UTF-8\r\n\r\n".encode("utf-8"),
        json.dumps(metadata).encode("utf-8"),
        f"\r\n--{boundary}\r\nContent-Type: {content_type}\r\n\r\n".encode("utf-8"),
        data,
        f"\r\n--{boundary}--\r\n".encode("utf-8"),
    ]
    return b"".join(parts), boundary


def _json(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise StorageUnavailable(f"Drive returned malformed JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise StorageUnavailable("Drive returned an unexpected payload")
    return cast(dict[str, Any], payload)


def _error_reason(response: requests.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.reason or "unknown error"
    if isinstance(payload, dict):
        error = cast(dict[str, Any], payload).get("error")
        if isinstance(error, dict):
            return str(cast(dict[str, Any], error).get("message", "unknown error"))
    return response.reason or "unknown error"


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    stripped = value.strip()
    if stripped.isdigit():
        return float(int(stripped))
    try:
        dt = parsedate_to_datetime(stripped)
    except (TypeError, ValueError):
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    delta = (dt - datetime.now(timezone.utc)).total_seconds()
    return max(0.0, delta)


__all__ = ["DriveGateway", "FOLDER_MIME_TYPE", "escape_query_value", "file_record_from_item"]
