"""
Pixel buffer helpers shared by the edge detector and the pixel filters.

A pixel buffer is a plain ``uint8`` numpy array laid out as rows × columns:

  - ``(H, W)``     single-channel grayscale
  - ``(H, W, 1)``  single-channel grayscale, explicit channel axis
  - ``(H, W, 3)``  RGB
  - ``(H, W, 4)``  RGBA

Transforms never write into the array they receive; every helper here
returns a fresh array.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from .errors import EmptyImageError

# ITU-R BT.601 luma weights, applied to R, G, B in that order.
LUMA_WEIGHTS = np.array([0.299, 0.587, 0.114], dtype=np.float64)

_CHANNEL_COUNTS = (1, 3, 4)


def ensure_pixels(pixels: np.ndarray | None) -> np.ndarray:
    """Validate a pixel buffer and return it unchanged.

    Raises:
        EmptyImageError: if the buffer is missing, has no pixels, is not
            ``uint8`` or does not have a supported channel layout.
        TypeError: if ``pixels`` is not a numpy array.
    """
    if pixels is None:
        raise EmptyImageError("No image: the pixel buffer is None")
    if not isinstance(pixels, np.ndarray):
        raise TypeError(f"Unsupported pixel buffer type: {type(pixels)}")
    if pixels.ndim not in (2, 3) or pixels.size == 0:
        raise EmptyImageError(f"Empty or malformed image with shape {pixels.shape}")
    if pixels.ndim == 3 and pixels.shape[2] not in _CHANNEL_COUNTS:
        raise EmptyImageError(f"Unsupported channel count: {pixels.shape[2]}")
    if pixels.dtype != np.uint8:
        raise EmptyImageError(f"Expected 8-bit pixels, got dtype {pixels.dtype}")
    return pixels


def channel_count(pixels: np.ndarray) -> int:
    return 1 if pixels.ndim == 2 else pixels.shape[2]


def split_alpha(pixels: np.ndarray) -> tuple[np.ndarray, np.ndarray | None]:
    """Return ``(colour, alpha)``; ``alpha`` is ``None`` unless the buffer is RGBA."""
    if channel_count(pixels) == 4:
        return pixels[..., :3], pixels[..., 3:]
    return pixels, None


def merge_alpha(colour: np.ndarray, alpha: np.ndarray | None) -> np.ndarray:
    if alpha is None:
        return colour
    return np.concatenate([colour, alpha], axis=2)


def luminance(pixels: np.ndarray) -> np.ndarray:
    """Weighted grayscale intensity ``0.299 R + 0.587 G + 0.114 B``.

    Returns a 2-D ``uint8`` array rounded to the nearest integer and clamped
    to [0, 255]. Alpha does not participate. Single-channel input is
    already an intensity and comes back as a copy.
    """
    pixels = ensure_pixels(pixels)
    height, width = pixels.shape[:2]
    if channel_count(pixels) == 1:
        return pixels.reshape(height, width).copy()

    gray = pixels[..., :3].astype(np.float64) @ LUMA_WEIGHTS
    return np.clip(np.rint(gray), 0, 255).astype(np.uint8)


def replicate_like(gray: np.ndarray, template: np.ndarray) -> np.ndarray:
    """Lay a 2-D intensity map out with the same channels as ``template``.

    Colour channels receive the intensity; the template's alpha plane, if
    any, is copied through.
    """
    channels = channel_count(template)
    if template.ndim == 2:
        return gray.copy()
    if channels == 1:
        return gray[..., np.newaxis].copy()

    _, alpha = split_alpha(template)
    colour = np.repeat(gray[..., np.newaxis], 3, axis=2)
    return merge_alpha(colour, None if alpha is None else alpha.copy())


def images_match(a: np.ndarray, b: np.ndarray, tolerance: int = 0) -> bool:
    """Compare two buffers pixel by pixel.

    The buffers match when they have the same shape (channel axis included)
    and every colour channel differs by at most ``tolerance``. Alpha is not
    compared.
    """
    a = ensure_pixels(a)
    b = ensure_pixels(b)
    if a.shape != b.shape:
        return False

    colour_a, _ = split_alpha(a)
    colour_b, _ = split_alpha(b)
    diff = np.abs(colour_a.astype(np.int16) - colour_b.astype(np.int16))
    return bool(diff.max() <= tolerance)


# ── Pillow bridge ─────────────────────────────────────────────────────────────

def from_pil(image: Image.Image) -> np.ndarray:
    """Convert a PIL image to a pixel buffer (grayscale, RGB or RGBA)."""
    if image.mode == "L":
        return np.array(image, dtype=np.uint8)
    if image.mode in ("RGBA", "LA", "PA") or "transparency" in image.info:
        return np.array(image.convert("RGBA"), dtype=np.uint8)
    return np.array(image.convert("RGB"), dtype=np.uint8)


def to_pil(pixels: np.ndarray) -> Image.Image:
    """Convert a pixel buffer to a PIL image (mode ``L``, ``RGB`` or ``RGBA``)."""
    pixels = ensure_pixels(pixels)
    if pixels.ndim == 3 and pixels.shape[2] == 1:
        pixels = pixels[..., 0]
    return Image.fromarray(np.ascontiguousarray(pixels))
