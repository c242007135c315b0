"""Exception hierarchy for condo-reports."""

from __future__ import annotations


class CondoReportError(Exception):
    """Base exception for all condo-reports errors."""


class DataSourceError(CondoReportError):
    """Raised when domain records cannot be loaded from the data-access layer."""


class ImageFetchError(CondoReportError):
    """Raised when a remote branding or signature asset cannot be fetched."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class ImageDecodeError(CondoReportError):
    """Raised when fetched bytes cannot be decoded as a raster image."""


class ReportGenerationError(CondoReportError):
    """Raised when document composition fails. No artifact is persisted."""


class PersistenceError(CondoReportError):
    """Raised when an artifact store operation fails."""


__all__ = [
    "CondoReportError",
    "DataSourceError",
    "ImageFetchError",
    "ImageDecodeError",
    "ReportGenerationError",
    "PersistenceError",
]
