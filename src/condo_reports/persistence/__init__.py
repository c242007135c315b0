"""Pluggable stores for generated report artifacts."""

from __future__ import annotations

from condo_reports.persistence.factory import create_artifact_store
from condo_reports.persistence.file_backend import FileArtifactStore
from condo_reports.persistence.memory_backend import MemoryArtifactStore
from condo_reports.persistence.protocols import IArtifactStore

__all__ = ["IArtifactStore", "FileArtifactStore", "MemoryArtifactStore", "create_artifact_store"]
