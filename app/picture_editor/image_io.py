"""
Image file loading and saving.

Files are read as raw bytes with numpy and decoded by OpenCV, which avoids
``cv2.imread`` path encoding issues on Windows. Encoding goes through
Pillow. Decoded buffers are RGB, or RGBA when the file has an alpha
channel; grayscale files are expanded to RGB.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import cv2
import numpy as np

from .buffer import ensure_pixels, to_pil
from .errors import ImageIOError

logger = logging.getLogger(__name__)

# Pillow format name per accepted file suffix.
FORMATS = {
    ".png": "PNG",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".bmp": "BMP",
}
SUPPORTED_FORMATS = ("PNG", "JPEG", "BMP")


def _decode(buffer: np.ndarray, source: str) -> np.ndarray:
    decoded = cv2.imdecode(buffer, cv2.IMREAD_UNCHANGED) if buffer.size else None
    if decoded is None:
        raise ImageIOError(f"Cannot decode image: {source}")

    if decoded.dtype != np.uint8:
        # 16-bit PNGs and similar: keep the 8 most significant bits.
        decoded = (decoded >> 8).astype(np.uint8) if decoded.dtype == np.uint16 else decoded.astype(np.uint8)

    if decoded.ndim == 2:
        return cv2.cvtColor(decoded, cv2.COLOR_GRAY2RGB)
    if decoded.shape[2] == 4:
        return cv2.cvtColor(decoded, cv2.COLOR_BGRA2RGBA)
    return cv2.cvtColor(decoded, cv2.COLOR_BGR2RGB)


def load(path: str | Path) -> np.ndarray:
    """Load an image file into an RGB or RGBA ``uint8`` buffer.

    Raises:
        ImageIOError: if the file is missing or cannot be decoded.
    """
    path = Path(path)
    try:
        buffer = np.fromfile(str(path), np.uint8)
    except OSError as err:
        raise ImageIOError(f"Cannot read image '{path}': {err}") from err

    pixels = _decode(buffer, str(path))
    logger.info("Loaded %s (%dx%d)", path, pixels.shape[1], pixels.shape[0])
    return pixels


def load_bytes(data: bytes) -> np.ndarray:
    """Decode an in-memory image (e.g. an upload) into an RGB or RGBA buffer."""
    return _decode(np.frombuffer(data, np.uint8).copy(), "<memory>")


def format_for(path: str | Path, format: str | None = None) -> str:
    """Resolve the Pillow format name from ``format`` or the path suffix."""
    if format is None:
        suffix = Path(path).suffix.lower()
        if suffix not in FORMATS:
            raise ImageIOError(f"Cannot infer an image format from '{path}' (use .png, .jpg or .bmp)")
        return FORMATS[suffix]

    format = format.upper()
    if format == "JPG":
        format = "JPEG"
    if format not in SUPPORTED_FORMATS:
        raise ImageIOError(f"Unsupported image format: {format}")
    return format


def _prepare(pixels: np.ndarray, format: str):
    image = to_pil(pixels)
    if format in ("JPEG", "BMP") and image.mode == "RGBA":
        image = image.convert("RGB")
    return image


def encode(pixels: np.ndarray, format: str = "PNG") -> bytes:
    """Encode a buffer to PNG, JPEG or BMP bytes."""
    pixels = ensure_pixels(pixels)
    format = format_for("", format)
    out = io.BytesIO()
    _prepare(pixels, format).save(out, format=format)
    return out.getvalue()


def save(pixels: np.ndarray, path: str | Path, format: str | None = None) -> Path:
    """Write a buffer to ``path``.

    The format is taken from ``format`` when given, otherwise from the file
    suffix. JPEG and BMP drop the alpha channel.

    Raises:
        ImageIOError: on an unsupported format or a write failure.
    """
    pixels = ensure_pixels(pixels)
    path = Path(path)
    format = format_for(path, format)
    try:
        _prepare(pixels, format).save(path, format=format)
    except OSError as err:
        raise ImageIOError(f"Cannot write image '{path}': {err}") from err

    logger.info("Saved %s as %s", path, format)
    return path
