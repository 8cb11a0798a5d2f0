"""
Whole-image pixel filters.

  - BlackWhite   luminance replicated to the colour channels
  - Swap         red and blue channels exchanged
  - MagicMosaic  each block × block tile replaced by its mean colour

Every filter returns a new buffer with the input's shape and channel
layout; alpha is passed through untouched by BlackWhite and Swap.
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from ..buffer import channel_count, ensure_pixels, luminance, replicate_like

MOSAIC_BLOCK_SIZE = 10


def black_white(pixels: np.ndarray) -> np.ndarray:
    """Grayscale conversion: ``0.299 R + 0.587 G + 0.114 B`` in every colour channel."""
    pixels = ensure_pixels(pixels)
    return replicate_like(luminance(pixels), pixels)


def swap(pixels: np.ndarray) -> np.ndarray:
    """Exchange the red and blue channels. Single-channel images are copied unchanged."""
    pixels = ensure_pixels(pixels)
    out = pixels.copy()
    if channel_count(pixels) >= 3:
        out[..., 0] = pixels[..., 2]
        out[..., 2] = pixels[..., 0]
    return out


def magic_mosaic(pixels: np.ndarray, block_size: int = MOSAIC_BLOCK_SIZE) -> np.ndarray:
    """Replace every ``block_size`` square tile by its rounded mean value per channel.

    Tiles start at the top-left corner; the last row and column of tiles are
    smaller when the image size is not a multiple of ``block_size``.
    """
    pixels = ensure_pixels(pixels)
    if block_size < 1:
        raise ValueError(f"Mosaic block size must be at least 1, got {block_size}")

    height, width = pixels.shape[:2]
    tops = np.arange(0, height, block_size)
    lefts = np.arange(0, width, block_size)
    row_sizes = np.diff(np.append(tops, height))
    col_sizes = np.diff(np.append(lefts, width))

    # Per-tile sums in one pass; reduceat handles the ragged last row and column.
    sums = np.add.reduceat(np.add.reduceat(pixels.astype(np.float64), tops, axis=0), lefts, axis=1)
    counts = np.outer(row_sizes, col_sizes).astype(np.float64)
    if pixels.ndim == 3:
        counts = counts[..., np.newaxis]
    means = np.rint(sums / counts).astype(np.uint8)

    return np.repeat(np.repeat(means, row_sizes, axis=0), col_sizes, axis=1)


class PixelFilters:
    """The three filters as one object, with a configurable mosaic block size."""

    def __init__(self, block_size: int = MOSAIC_BLOCK_SIZE):
        if block_size < 1:
            raise ValueError(f"Mosaic block size must be at least 1, got {block_size}")
        self.block_size = block_size

    def black_white(self, pixels: np.ndarray) -> np.ndarray:
        return black_white(pixels)

    def swap(self, pixels: np.ndarray) -> np.ndarray:
        return swap(pixels)

    def magic_mosaic(self, pixels: np.ndarray) -> np.ndarray:
        return magic_mosaic(pixels, self.block_size)

    def by_name(self) -> dict[str, Callable[[np.ndarray], np.ndarray]]:
        """Filters keyed by their display name, in button order."""
        return {
            "BlackWhite": self.black_white,
            "Swap": self.swap,
            "MagicMosaic": self.magic_mosaic,
        }


FILTERS: dict[str, Callable[[np.ndarray], np.ndarray]] = PixelFilters().by_name()
