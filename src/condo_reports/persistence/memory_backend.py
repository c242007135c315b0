"""In-memory artifact store, dict-backed."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


class MemoryArtifactStore:
    """Stores artifacts in a plain dict; nothing touches disk."""

    def __init__(self) -> None:
        self._store: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        self._store[key] = bytes(data)
        self.content_types[key] = content_type
        log.debug("Saved %s to memory store", key)
        return f"memory://{key}"

    def load(self, key: str) -> bytes:
        if key not in self._store:
            raise KeyError(f"Not found in memory store: {key}")
        return self._store[key]

    def exists(self, key: str) -> bool:
        return key in self._store

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
        self.content_types.pop(key, None)

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._store if k.startswith(prefix))
