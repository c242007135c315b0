"""Artifact store protocol: the contract all stores implement."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class IArtifactStore(Protocol):
    """Protocol for generated-document stores (file, S3, memory, etc.)."""

    def save(self, key: str, data: bytes, content_type: str = "application/pdf") -> str:
        """Store *data* under *key* in one step and return its location."""
        ...

    def load(self, key: str) -> bytes:
        """Load an artifact by key. Raises KeyError if not found."""
        ...

    def exists(self, key: str) -> bool:
        """Check if a key exists in the store."""
        ...

    def delete(self, key: str) -> None:
        """Delete an artifact by key (no-op if not found)."""
        ...

    def list_keys(self, prefix: str = "") -> list[str]:
        """List all keys matching the optional prefix."""
        ...
