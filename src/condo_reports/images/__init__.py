"""Remote image fetching and optimization."""

from __future__ import annotations

from condo_reports.images.preprocessor import (
    ImageCache,
    ImagePreprocessor,
    bytes_to_base64,
    fit_within,
    optimize_image_bytes,
)

__all__ = ["ImageCache", "ImagePreprocessor", "bytes_to_base64", "fit_within", "optimize_image_bytes"]
