"""File-based artifact store for documents on the local filesystem."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from condo_reports.exceptions import PersistenceError

log = logging.getLogger(__name__)


class FileArtifactStore:
    """Writes each artifact to a temp file in the target directory, then renames it into place.

    A failed write never leaves a partial file under the final name.
    """

    def __init__(self, base_path: Path) -> None:
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._base / safe_key

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        path = self._key_path(key)
        fd, tmp_name = tempfile.mkstemp(dir=self._base, prefix=".tmp-", suffix=path.suffix)
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise PersistenceError(f"Failed to write {path}: {exc}") from exc
        log.debug("Saved %s (%d bytes) to %s", key, len(data), path)
        return str(path)

    def load(self, key: str) -> bytes:
        path = self._key_path(key)
        if not path.is_file():
            raise KeyError(f"Not found: {key} (path: {path})")
        return path.read_bytes()

    def exists(self, key: str) -> bool:
        return self._key_path(key).is_file()

    def delete(self, key: str) -> None:
        path = self._key_path(key)
        if path.is_file():
            path.unlink()

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(
            p.name
            for p in self._base.iterdir()
            if p.is_file() and not p.name.startswith(".tmp-") and p.name.startswith(prefix)
        )
