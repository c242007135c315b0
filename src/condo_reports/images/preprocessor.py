"""Remote raster asset preprocessing for logos and signatures.

Fetches image bytes over HTTP, shrinks them to fit a bounding box while
keeping the aspect ratio, flattens transparency onto white and re-encodes
as JPEG.  Optimization is best-effort: bytes that cannot be decoded are
embedded as-is.  Fetch failures raise ``ImageFetchError``; callers decide
whether to omit the image.
"""

from __future__ import annotations

import base64
import logging
from io import BytesIO

import httpx
from PIL import Image, UnidentifiedImageError

from condo_reports.core.config import ImageConfig
from condo_reports.exceptions import ImageDecodeError, ImageFetchError
from condo_reports.models import ImageAsset, ImageRequest

log = logging.getLogger(__name__)

# Leading bytes -> MIME type, used when the raw-bytes fallback is taken
_MAGIC_NUMBERS: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
    (b"RIFF", "image/webp"),
    (b"BM", "image/bmp"),
)


def sniff_mime_type(data: bytes, declared: str = "") -> str:
    for magic, mime in _MAGIC_NUMBERS:
        if data.startswith(magic):
            return mime
    if declared.startswith("image/"):
        return declared.split(";", 1)[0].strip()
    return "application/octet-stream"


def fit_within(width: int, height: int, max_width: int, max_height: int) -> tuple[int, int]:
    """Scale (*width*, *height*) down so both fit the box. Never scales up."""
    if width <= 0 or height <= 0:
        return width, height
    ratio = min(max_width / width, max_height / height, 1.0)
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def optimize_image_bytes(data: bytes, request: ImageRequest) -> ImageAsset:
    """Decode, resize onto a white canvas and re-encode *data* as JPEG.

    Raises:
        ImageDecodeError: If *data* is not a decodable raster image.
    """
    try:
        with Image.open(BytesIO(data)) as source:
            source.load()
            width, height = fit_within(*source.size, request.max_width, request.max_height)
            resized = source.convert("RGBA").resize((width, height), Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
        raise ImageDecodeError(f"Cannot decode image from {request.source_url}: {exc}") from exc

    canvas = Image.new("RGB", (width, height), "white")
    canvas.paste(resized, mask=resized.getchannel("A"))
    out = BytesIO()
    canvas.save(out, format="JPEG", quality=round(request.quality * 100))
    return ImageAsset(
        base64=base64.b64encode(out.getvalue()).decode("ascii"),
        mime_type="image/jpeg",
        width=width,
        height=height,
        optimized=True,
    )


def bytes_to_base64(data: bytes, declared_type: str = "") -> ImageAsset:
    """Unoptimized fallback: embed the fetched bytes as they are."""
    return ImageAsset(
        base64=base64.b64encode(data).decode("ascii"),
        mime_type=sniff_mime_type(data, declared_type),
        optimized=False,
    )


class ImageCache:
    """Conversions for one generation call, keyed by source URL."""

    def __init__(self) -> None:
        self._entries: dict[str, ImageAsset] = {}

    def get(self, url: str) -> ImageAsset | None:
        return self._entries.get(url)

    def put(self, url: str, asset: ImageAsset) -> None:
        self._entries[url] = asset

    def __len__(self) -> int:
        return len(self._entries)


class ImagePreprocessor:
    """Fetches and converts remote images.

    Pass *client* to reuse a connection pool or inject a transport in tests;
    otherwise a client is created per fetch.
    """

    def __init__(
        self,
        config: ImageConfig | None = None,
        client: httpx.AsyncClient | None = None,
        cache: ImageCache | None = None,
    ) -> None:
        self._config = config or ImageConfig()
        self._client = client
        self.cache = cache if cache is not None else ImageCache()

    def request_for(self, url: str) -> ImageRequest:
        return ImageRequest(
            source_url=url,
            max_width=self._config.max_width,
            max_height=self._config.max_height,
            quality=self._config.quality,
        )

    async def fetch(self, url: str) -> tuple[bytes, str]:
        """Return the body and declared content type of *url*."""
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(
                    timeout=self._config.fetch_timeout, follow_redirects=True
                ) as client:
                    response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ImageFetchError(f"Failed to fetch image: {exc}", url=url) from exc
        return response.content, response.headers.get("content-type", "")

    async def convert(self, request: ImageRequest) -> ImageAsset:
        """Fetch and optimize one image, falling back to raw bytes on decode failure.

        Raises:
            ImageFetchError: If the bytes cannot be fetched.
        """
        cached = self.cache.get(request.source_url)
        if cached is not None:
            return cached

        data, declared = await self.fetch(request.source_url)
        try:
            asset = optimize_image_bytes(data, request)
        except ImageDecodeError as exc:
            log.warning("Image optimization failed, embedding original bytes: %s", exc)
            asset = bytes_to_base64(data, declared)

        self.cache.put(request.source_url, asset)
        return asset

    async def resolve_optional(self, url: str | None) -> ImageAsset | None:
        """Convert *url* if given; fetch failures are logged and yield ``None``."""
        if not url:
            return None
        try:
            return await self.convert(self.request_for(url))
        except ImageFetchError as exc:
            log.warning("Omitting image %s: %s", exc.url, exc)
            return None
