"""
Single-kernel convolution over a grayscale buffer.

The output is a gradient field: one float64 response per source pixel,
same height and width as the input, not clamped. Pixels near the border
sample their neighbourhood with edge clamping (the nearest valid row or
column is repeated), so there is no dark frame around the result.
"""

from __future__ import annotations

import cv2
import numpy as np

from ..buffer import channel_count, ensure_pixels
from .kernels import Kernel, as_kernel_matrix


def kernel_weights(kernel: Kernel | np.ndarray | list) -> np.ndarray:
    """Return the weight matrix of a ``Kernel`` or validate a raw matrix."""
    if isinstance(kernel, Kernel):
        return kernel.weights
    return as_kernel_matrix(kernel)


def convolve(gray: np.ndarray, kernel: Kernel | np.ndarray | list) -> np.ndarray:
    """Weighted sum of each pixel's ``k×k`` neighbourhood against ``kernel``.

    Args:
        gray: Single-channel ``uint8`` buffer, ``(H, W)`` or ``(H, W, 1)``.
        kernel: A registered ``Kernel`` or a raw odd-sized square matrix.

    Returns:
        float64 array of shape ``(H, W)``.

    Raises:
        EmptyImageError: if ``gray`` is empty or malformed.
        InvalidKernelError: if the kernel matrix is not odd-sized and square.
        ValueError: if ``gray`` has more than one channel.
    """
    gray = ensure_pixels(gray)
    if channel_count(gray) != 1:
        raise ValueError(f"convolve expects a single-channel buffer, got shape {gray.shape}")
    weights = kernel_weights(kernel)

    height, width = gray.shape[:2]
    samples = gray.reshape(height, width).astype(np.float64)

    # filter2D computes the correlation (kernel not flipped), anchored on the
    # kernel centre; BORDER_REPLICATE is the edge-clamped sampling.
    return cv2.filter2D(
        samples,
        cv2.CV_64F,
        np.array(weights, dtype=np.float64),
        borderType=cv2.BORDER_REPLICATE,
    )
