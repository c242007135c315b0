"""Artifact store factory: resolves the backend from config."""

from __future__ import annotations

import logging

from condo_reports.core.config import PersistenceConfig
from condo_reports.persistence.file_backend import FileArtifactStore
from condo_reports.persistence.memory_backend import MemoryArtifactStore
from condo_reports.persistence.protocols import IArtifactStore

log = logging.getLogger(__name__)


def create_artifact_store(config: PersistenceConfig) -> IArtifactStore:
    """Create the artifact store named by ``config.backend``.

    Raises:
        ValueError: If the S3 backend is selected without a bucket.
    """
    if config.backend == "memory":
        log.info("Using in-memory artifact store")
        return MemoryArtifactStore()

    if config.backend == "s3":
        if not config.s3_bucket:
            raise ValueError("CONDO_PERSISTENCE_S3_BUCKET is required for the s3 backend")
        from condo_reports.persistence.s3_backend import S3ArtifactStore

        log.info("Using S3 artifact store s3://%s/%s", config.s3_bucket, config.s3_prefix)
        return S3ArtifactStore(config.s3_bucket, prefix=config.s3_prefix, region=config.aws_region)

    log.info("Using file artifact store at %s", config.output_dir)
    return FileArtifactStore(config.output_dir)
