"""Publish pipeline: store the source, render it, store the HTML.

Writers (publish/unpublish) are serialized per document name; list and fetch
read without locking.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator

from ..errors import PublishError, RenderFailure
from .document_store import DocumentStore
from .renderer import render_markdown
from .validator import ensure_valid_name

logger = logging.getLogger(__name__)


class NameLocks:
    """One lock per document name, created on first use."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def get(self, name: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        with self.get(name):
            yield


class Publisher:
    def __init__(
        self,
        store: DocumentStore,
        render: Callable[[str], str] = render_markdown,
    ) -> None:
        self.store = store
        self.render = render
        self.locks = NameLocks()

    def publish(self, name: str, data: bytes) -> None:
        """Write source then rendered output. On render failure the document is removed entirely."""
        name = ensure_valid_name(name)
        with self.locks.hold(name):
            self.store.put(name, data)
            try:
                html = self.render(self.store.read_source(name))
                self.store.write_rendered(name, html)
            except Exception as e:
                self.store.discard(name)
                logger.warning("Publish of %r failed after source write, rolled back: %r", name, e)
                if isinstance(e, PublishError):
                    raise
                raise RenderFailure(f"Render of {name!r} failed: {e}") from e
        logger.info("Published %r (%d bytes)", name, len(data))

    def unpublish(self, name: str) -> None:
        name = ensure_valid_name(name)
        with self.locks.hold(name):
            self.store.delete(name)
        logger.info("Deleted %r", name)

    def list_names(self) -> list[str]:
        return self.store.list()

    def fetch_rendered(self, name: str) -> str:
        return self.store.read_rendered(ensure_valid_name(name))
