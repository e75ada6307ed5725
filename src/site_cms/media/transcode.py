from __future__ import annotations

import io
import logging
from dataclasses import dataclass

from PIL import Image, ImageOps

from site_cms.exceptions import TranscodeFailure

logger = logging.getLogger(__name__)

VECTOR_MIMETYPES = frozenset({"image/svg+xml"})


@dataclass(frozen=True)
class TranscodeResult:
    data: bytes
    mimetype: str
    width: int
    height: int


def is_raster_image(mimetype: str) -> bool:
    return mimetype.startswith("image/") and mimetype not in VECTOR_MIMETYPES


def _web_mode(img: Image.Image) -> Image.Image:
    if img.mode in ("RGB", "RGBA"):
        return img
    has_alpha = img.mode in ("LA", "PA") or (img.mode == "P" and "transparency" in img.info)
    return img.convert("RGBA" if has_alpha else "RGB")


def transcode_image(
    data: bytes,
    *,
    max_size: tuple[int, int] = (1920, 1080),
    fmt: str = "WEBP",
    mimetype: str = "image/webp",
    quality: int = 80,
    filename: str | None = None,
) -> TranscodeResult:
    """Fit an image inside ``max_size`` (never upscaling) and re-encode it.

    Blocking; run it in a worker thread. Only the first frame of animated
    images is kept.
    """
    try:
        with Image.open(io.BytesIO(data)) as src:
            src.load()
            img = ImageOps.exif_transpose(src) or src
            img = _web_mode(img)
            img.thumbnail(max_size, Image.Resampling.LANCZOS)
            out = io.BytesIO()
            img.save(out, fmt, quality=quality)
            width, height = img.size
    except Exception as exc:
        # corrupt input surfaces as many exception types, SyntaxError included
        logger.warning("Transcode failed for %s: %s", filename or "<upload>", exc)
        raise TranscodeFailure(filename) from exc

    return TranscodeResult(data=out.getvalue(), mimetype=mimetype, width=width, height=height)
