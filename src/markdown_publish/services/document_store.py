"""Document store: two sibling directories holding each document's source and rendered form.

Layout:
  <source_dir>/<name>.md      uploaded markdown, stored verbatim
  <rendered_dir>/<name>.html  HTML rendered from the source

The store does no locking; callers serialize writers per name.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from ..errors import (
    DocumentNotFound,
    PayloadTooLarge,
    StorageReadFailure,
    StorageWriteFailure,
)
from .validator import ensure_valid_name

SOURCE_SUFFIX = ".md"
RENDERED_SUFFIX = ".html"


def _atomic_write(path: Path, data: bytes) -> None:
    """Write to a temp file in the target dir, then replace the target."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=path.suffix)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise


class DocumentStore:
    def __init__(self, source_dir: Path, rendered_dir: Path, max_bytes: int) -> None:
        self.source_dir = Path(source_dir)
        self.rendered_dir = Path(rendered_dir)
        self.max_bytes = max_bytes

    def setup(self) -> None:
        self.source_dir.mkdir(parents=True, exist_ok=True)
        self.rendered_dir.mkdir(parents=True, exist_ok=True)

    def source_path(self, name: str) -> Path:
        return self.source_dir / f"{ensure_valid_name(name)}{SOURCE_SUFFIX}"

    def rendered_path(self, name: str) -> Path:
        return self.rendered_dir / f"{ensure_valid_name(name)}{RENDERED_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.source_path(name).is_file()

    def put(self, name: str, data: bytes) -> None:
        """Store `data` as the source for `name`, replacing any previous source."""
        path = self.source_path(name)
        if len(data) > self.max_bytes:
            raise PayloadTooLarge(f"{len(data)} bytes exceeds limit of {self.max_bytes}")
        try:
            _atomic_write(path, data)
        except OSError as e:
            raise StorageWriteFailure(f"Cannot write source for {name!r}: {e}") from e

    def write_rendered(self, name: str, html: str) -> None:
        path = self.rendered_path(name)
        try:
            _atomic_write(path, html.encode("utf-8"))
        except OSError as e:
            raise StorageWriteFailure(f"Cannot write rendered output for {name!r}: {e}") from e

    def read_source(self, name: str) -> str:
        return self._read_text(self.source_path(name), name)

    def read_rendered(self, name: str) -> str:
        return self._read_text(self.rendered_path(name), name)

    def _read_text(self, path: Path, name: str) -> str:
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise DocumentNotFound(f"Document not found: {name!r}") from None
        except OSError as e:
            raise StorageReadFailure(f"Cannot read {path.name}: {e}") from e
        return data.decode("utf-8", errors="replace")

    def delete(self, name: str) -> None:
        """Remove both artifacts. A missing rendered file is fine; a missing source is not."""
        source = self.source_path(name)
        rendered = self.rendered_path(name)
        if not source.is_file():
            raise DocumentNotFound(f"Document not found: {name!r}")
        # Rendered goes first so a failure never leaves HTML without its source.
        try:
            rendered.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageWriteFailure(f"Cannot remove rendered output for {name!r}: {e}") from e
        try:
            source.unlink()
        except FileNotFoundError:
            raise DocumentNotFound(f"Document not found: {name!r}") from None
        except OSError as e:
            raise StorageWriteFailure(f"Cannot remove source for {name!r}: {e}") from e

    def discard(self, name: str) -> None:
        """Best-effort removal of both artifacts, rendered first."""
        for path in (self.rendered_path(name), self.source_path(name)):
            try:
                path.unlink()
            except FileNotFoundError:
                pass

    def list(self) -> list[str]:
        """Names of all stored sources, sorted."""
        try:
            entries = list(self.source_dir.iterdir())
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageReadFailure(f"Cannot list {self.source_dir}: {e}") from e
        names = [
            p.name[: -len(SOURCE_SUFFIX)]
            for p in entries
            if p.name.endswith(SOURCE_SUFFIX) and not p.name.startswith(".") and p.is_file()
        ]
        return sorted(names)
