"""HTTP client for the publish server: upload, remove and list documents."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

import httpx

from . import config  # noqa: F401 - load .env on import
from .security import API_KEY_HEADER

DEFAULT_URL = "http://127.0.0.1:8080"


class FileStatus(str, Enum):
    SUCCESS = "Success"
    UNPROCESSABLE = "Unprocessable"
    FILE_NOT_FOUND = "FileNotFound"
    NETWORK_ERROR = "NetworkError"


@dataclass
class FileResult:
    file_name: str
    status: FileStatus


def _status_from_response(resp: httpx.Response) -> FileStatus:
    if resp.status_code == 200:
        return FileStatus.SUCCESS
    if resp.status_code == 422:
        return FileStatus.UNPROCESSABLE
    return FileStatus.NETWORK_ERROR


class PublishClient:
    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers={API_KEY_HEADER: api_key},
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> PublishClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def upload(self, paths: list[str | Path]) -> list[FileResult]:
        """Upload each file under its stem, e.g. ./notes/a.md -> `a`."""
        results: list[FileResult] = []
        for raw in paths:
            path = Path(raw)
            try:
                data = path.read_bytes()
            except OSError:
                results.append(FileResult(str(raw), FileStatus.FILE_NOT_FOUND))
                continue
            name = path.stem
            if not name:
                results.append(FileResult(str(raw), FileStatus.FILE_NOT_FOUND))
                continue
            try:
                resp = self._client.post(
                    f"/upload/{name}",
                    content=data,
                    headers={"Content-Type": "application/octet-stream"},
                )
            except httpx.HTTPError:
                results.append(FileResult(name, FileStatus.NETWORK_ERROR))
                continue
            results.append(FileResult(name, _status_from_response(resp)))
        return results

    def remove(self, names: list[str]) -> list[FileResult]:
        results: list[FileResult] = []
        for name in names:
            try:
                resp = self._client.get(f"/delete/{name}")
            except httpx.HTTPError:
                results.append(FileResult(name, FileStatus.NETWORK_ERROR))
                continue
            results.append(FileResult(name, _status_from_response(resp)))
        return results

    def list(self) -> list[FileResult]:
        try:
            resp = self._client.get("/upload_list", headers={"Accept": "application/json"})
        except httpx.HTTPError:
            return [FileResult("NetworkError", FileStatus.NETWORK_ERROR)]
        if resp.status_code != 200:
            return [FileResult("NetworkError", FileStatus.NETWORK_ERROR)]
        try:
            documents = resp.json()["documents"]
        except (ValueError, KeyError, TypeError):
            return [FileResult("NetworkParseError", FileStatus.NETWORK_ERROR)]
        return [FileResult(str(name), FileStatus.SUCCESS) for name in documents]


def load_client_settings() -> tuple[str, str]:
    """Return (base_url, api_key) from the environment."""
    base_url = (os.environ.get("MARKDOWN_PUBLISH_URL") or "").strip() or DEFAULT_URL
    api_key = (os.environ.get("MARKDOWN_PUBLISH_API_KEY") or "").strip()
    if not api_key:
        raise ValueError("MARKDOWN_PUBLISH_API_KEY is not set")
    return base_url, api_key
