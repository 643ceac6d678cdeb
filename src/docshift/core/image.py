"""Raster image conversion, resizing and compression with Pillow"""

import io
import logging
from typing import Optional

from PIL import Image
from pi_heif import register_heif_opener

from docshift.core.models import ConversionResult, ImageSize


logger = logging.getLogger(__name__)

# extension -> Pillow format name
IMAGE_FORMATS = {
    "jpg":  "JPEG",
    "jpeg": "JPEG",
    "png":  "PNG",
    "webp": "WEBP",
    "gif":  "GIF",
    "bmp":  "BMP",
    "heic": "HEIF",
    "heif": "HEIF",
}
IMAGE_MEDIA_TYPES = {
    "jpg":  "image/jpeg",
    "jpeg": "image/jpeg",
    "png":  "image/png",
    "webp": "image/webp",
    "gif":  "image/gif",
    "bmp":  "image/bmp",
    "heic": "image/heic",
    "heif": "image/heif",
}
IMAGE_CONVERSIONS: dict[str, list[str]] = {
    "jpg":  ["png", "webp", "gif"],
    "jpeg": ["png", "webp", "gif"],
    "png":  ["jpg", "webp", "gif"],
    "webp": ["jpg", "png", "gif"],
    "gif":  ["jpg", "png", "webp"],
    "bmp":  ["jpg", "png", "webp"],
    "heic": ["jpg", "png", "webp", "gif"],
    "heif": ["jpg", "png", "webp", "gif"],
}
# HEIF is decode-only; anything read from it is written back as JPEG
WRITABLE_FORMATS = {"jpg", "jpeg", "png", "webp", "gif", "bmp"}
LOSSY_FORMATS = {"jpg", "jpeg", "webp"}
MIN_QUALITY = 10
QUALITY_STEP = 10


def _open(data: bytes) -> Image.Image:
    register_heif_opener()
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def _source_extension(img: Image.Image) -> str:
    """Extension to write an edited image back in: its own format, or jpg for HEIF and unknowns."""
    for ext, fmt in IMAGE_FORMATS.items():
        if fmt == img.format and ext in WRITABLE_FORMATS:
            return ext
    return "jpg"


def _save(img: Image.Image, ext: str, quality: int, optimize: bool = False) -> bytes:
    fmt = IMAGE_FORMATS[ext]
    if fmt == "JPEG" and img.mode not in ("RGB", "L"):
        img = img.convert("RGB")
    elif fmt == "WEBP" and img.mode not in ("RGB", "RGBA"):
        img = img.convert("RGBA")

    params = {}
    if ext in LOSSY_FORMATS:
        params["quality"] = quality
    if optimize and fmt in ("JPEG", "PNG"):
        params["optimize"] = True

    buf = io.BytesIO()
    img.save(buf, format=fmt, **params)
    return buf.getvalue()


def _result(content: bytes, ext: str) -> ConversionResult:
    return ConversionResult(content=content, extension=ext, media_type=IMAGE_MEDIA_TYPES[ext])


def fit_within(width: int, height: int, max_width: Optional[int] = None,
               max_height: Optional[int] = None) -> tuple[int, int]:
    """Scale (width, height) down to the bounds, width first, keeping the aspect ratio."""
    w, h = float(width), float(height)
    if max_width and w > max_width:
        h = h * max_width / w
        w = max_width
    if max_height and h > max_height:
        w = w * max_height / h
        h = max_height
    return max(round(w), 1), max(round(h), 1)


def convert_image(data: bytes, target: str, max_width: Optional[int] = None,
                  max_height: Optional[int] = None, quality: int = 92) -> bytes:
    """Re-encode an image in the target format, shrinking it to the optional bounds."""
    target = target.lstrip(".").lower()
    if target not in WRITABLE_FORMATS:
        raise ValueError(f"Unsupported image format: {target}")

    img = _open(data)
    size = fit_within(img.width, img.height, max_width, max_height)
    if size != img.size:
        img = img.resize(size, Image.LANCZOS)
    return _save(img, target, quality)


def resize_image(data: bytes, width: Optional[int] = None, height: Optional[int] = None,
                 keep_aspect: bool = True, quality: int = 92) -> ConversionResult:
    """Resize to width and/or height.

    With keep_aspect, a single dimension derives the other one and two
    dimensions act as a bounding box the image is fitted into. The output
    keeps the source format (HEIF sources come back as JPEG).
    """
    img = _open(data)
    ext = _source_extension(img)

    if keep_aspect:
        aspect = img.width / img.height
        if width and not height:
            height = width / aspect
        elif height and not width:
            width = height * aspect
        elif width and height:
            if aspect > width / height:
                height = width / aspect
            else:
                width = height * aspect

    size = (max(round(width or img.width), 1), max(round(height or img.height), 1))
    if size != img.size:
        img = img.resize(size, Image.LANCZOS)
    return _result(_save(img, ext, quality), ext)


def compress_image(data: bytes, max_size_mb: float = 1.0, max_dimension: int = 1920,
                   quality: int = 85) -> ConversionResult:
    """Shrink an image to fit max_dimension and, for lossy formats, step quality down to max_size_mb."""
    img = _open(data)
    ext = _source_extension(img)
    img.thumbnail((max_dimension, max_dimension), Image.LANCZOS)

    limit = int(max_size_mb * 1024 * 1024)
    content = _save(img, ext, quality, optimize=True)
    while ext in LOSSY_FORMATS and len(content) > limit and quality > MIN_QUALITY:
        quality = max(quality - QUALITY_STEP, MIN_QUALITY)
        content = _save(img, ext, quality, optimize=True)

    if len(content) > limit:
        logger.warning("Compressed image is %d bytes, above the %d byte target", len(content), limit)
    return _result(content, ext)


def image_dimensions(data: bytes) -> ImageSize:
    img = _open(data)
    return ImageSize(width=img.width, height=img.height, format=img.format or "unknown")
