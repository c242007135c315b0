"""Nested pydantic-settings configuration for the report engine.

Each sub-config reads its own ``CONDO_<GROUP>_*`` env vars::

    export CONDO_PDF_PAGE_SIZE=letter
    export CONDO_IMAGE_QUALITY=0.8
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class LayoutConfig(BaseSettings):
    """Page geometry, typography and pagination tunables.

    All lengths are millimetres.  The break thresholds are calibrated for
    A4 with Helvetica at the default sizes; recalibrate them together with
    the page size or font.

    Env vars use ``CONDO_PDF_`` prefix::

        export CONDO_PDF_PAGE_SIZE=letter
        export CONDO_PDF_TABLE_MIN_SPACE_MM=24
    """

    model_config = {"env_prefix": "CONDO_PDF_"}

    page_size: Literal["a4", "letter"] = "a4"
    margin_mm: float = Field(default=14.0, gt=0.0, le=50.0)
    top_margin_mm: float = Field(default=18.0, gt=0.0, le=80.0)
    bottom_margin_mm: float = Field(default=16.0, gt=0.0, le=80.0)
    font_family: str = "Helvetica"
    body_font_size: float = Field(default=9.5, ge=6, le=36)
    table_font_size: float = Field(default=8.5, ge=5, le=24)
    detail_table_font_size: float = Field(default=8.0, ge=5, le=24)
    line_height_mm: float = Field(default=5.0, gt=0.0, le=20.0)
    block_gap_mm: float = Field(default=6.0, ge=0.0, le=30.0)
    blank_line_mm: float = Field(default=2.0, ge=0.0, le=10.0)
    table_min_space_mm: float = Field(default=28.0, ge=0.0, le=200.0)
    section_break_reserve_mm: float = Field(default=50.0, ge=0.0, le=200.0)
    detail_text_budget: int = Field(default=250, ge=10)
    title_text_budget: int = Field(default=30, ge=5)
    wide_column_mm: float = Field(default=50.0, gt=0.0, le=150.0)
    footer_attribution: str = "Powered by EstateAdmin IA"
    service_name: str = "Un servicio de Omnipixel."
    service_email: str = "administracion@estate-admin.com"
    currency_symbol: str = "$"


class ImageConfig(BaseSettings):
    """Remote image preprocessing configuration.

    Env vars use ``CONDO_IMAGE_`` prefix.
    """

    model_config = {"env_prefix": "CONDO_IMAGE_"}

    max_width: int = Field(default=300, gt=0)
    max_height: int = Field(default=150, gt=0)
    quality: float = Field(default=0.7, gt=0.0, le=1.0)
    fetch_timeout: float = Field(default=15.0, gt=0.0)
    logo_box_mm: float = Field(default=24.0, gt=0.0)
    signature_width_mm: float = Field(default=50.0, gt=0.0)
    signature_height_mm: float = Field(default=20.0, gt=0.0)


class PersistenceConfig(BaseSettings):
    """Artifact store configuration.

    Env vars use ``CONDO_PERSISTENCE_`` prefix.
    """

    model_config = {"env_prefix": "CONDO_PERSISTENCE_"}

    backend: Literal["file", "s3", "memory"] = "file"
    output_dir: Path = Path("./reports")
    s3_bucket: str = ""
    s3_prefix: str = "reports/"
    aws_region: str = "us-east-1"


class ObservabilityConfig(BaseSettings):
    """Observability configuration.

    Env vars use ``CONDO_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "CONDO_OBSERVABILITY_"}

    log_level: str = "INFO"


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    layout: LayoutConfig = LayoutConfig()
    image: ImageConfig = ImageConfig()
    persistence: PersistenceConfig = PersistenceConfig()
    observability: ObservabilityConfig = ObservabilityConfig()
