"""
Two-axis edge detection.

The source image is reduced to luminance, convolved once with the X kernel
and once with the Y kernel, and the two gradient fields are combined per
pixel as ``sqrt(Gx² + Gy²)``. The magnitude is clamped to [0, 255] and laid
out with the same channels as the source (alpha passes through).

Usage:
    from picture_editor.edge.detector import detect_edges

    edges = detect_edges(pixels, "Sobel 3x3 Horizontal", "Sobel 3x3 Vertical")
"""

from __future__ import annotations

import logging

import numpy as np

from ..buffer import ensure_pixels, luminance, replicate_like
from .convolution import convolve, kernel_weights
from .kernels import DEFAULT_REGISTRY, Kernel, KernelRegistry

logger = logging.getLogger(__name__)

KernelSpec = Kernel | np.ndarray | list | str


def _as_kernel(value: KernelSpec, registry: KernelRegistry) -> Kernel | np.ndarray:
    if isinstance(value, str):
        return registry.resolve(value)
    if isinstance(value, Kernel):
        return value
    return kernel_weights(value)


def _label(kernel: Kernel | np.ndarray) -> str:
    if isinstance(kernel, Kernel):
        return kernel.name
    return f"<{kernel.shape[0]}x{kernel.shape[1]} matrix>"


def combine_gradients(gx: np.ndarray, gy: np.ndarray) -> np.ndarray:
    """Euclidean magnitude of two gradient fields as a ``uint8`` intensity map."""
    magnitude = np.hypot(gx, gy)
    return np.rint(np.clip(magnitude, 0, 255)).astype(np.uint8)


def detect_edges(
    pixels: np.ndarray,
    kernel_x: KernelSpec,
    kernel_y: KernelSpec,
    registry: KernelRegistry = DEFAULT_REGISTRY,
) -> np.ndarray:
    """Run the two-axis edge detector on ``pixels``.

    Args:
        pixels: Source buffer (grayscale, RGB or RGBA ``uint8``).
        kernel_x: Kernel for the X gradient: a ``Kernel``, a raw odd square
            matrix, or a name registered in ``registry``.
        kernel_y: Kernel for the Y gradient, same forms as ``kernel_x``.
        registry: Registry used to resolve kernel names.

    Returns:
        A new ``uint8`` buffer with the input's shape.

    Raises:
        EmptyImageError: if ``pixels`` is empty or malformed.
        UnknownKernelError: if a kernel name is not registered.
        InvalidKernelError: if a raw matrix is not odd-sized and square.
    """
    pixels = ensure_pixels(pixels)
    kx = _as_kernel(kernel_x, registry)
    ky = _as_kernel(kernel_y, registry)
    logger.debug("Edge detection on %s image with X=%s, Y=%s", pixels.shape, _label(kx), _label(ky))

    gray = luminance(pixels)
    # Both passes always run, even when kx is ky.
    gx = convolve(gray, kx)
    gy = convolve(gray, ky)

    return replicate_like(combine_gradients(gx, gy), pixels)


class EdgeDetector:
    """Edge detection bound to a kernel registry, for callers that pick kernels by name."""

    def __init__(self, registry: KernelRegistry = DEFAULT_REGISTRY):
        self.registry = registry

    def list_names(self) -> list[str]:
        return self.registry.list_names()

    def detect_edges(self, pixels: np.ndarray, kernel_x: KernelSpec, kernel_y: KernelSpec) -> np.ndarray:
        return detect_edges(pixels, kernel_x, kernel_y, registry=self.registry)
