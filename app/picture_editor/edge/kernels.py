"""
Named convolution kernels for the edge detector.

The registry is built once at import time and never changes afterwards,
so it can be shared freely. Names are shown as-is in the UI select boxes,
in registration order.

"Horizontal" kernels respond to intensity changes along x (left → right),
"Vertical" kernels to changes along y (top → bottom).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from types import MappingProxyType

import numpy as np

from ..errors import InvalidKernelError, UnknownKernelError


def as_kernel_matrix(weights) -> np.ndarray:
    """Validate ``weights`` and return them as a read-only float64 matrix.

    Raises:
        InvalidKernelError: if the matrix is missing, empty, not 2-D,
            not square, even-sized or contains NaN/inf.
    """
    if weights is None:
        raise InvalidKernelError("Kernel matrix is missing")
    try:
        matrix = np.array(weights, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise InvalidKernelError(f"Kernel is not a numeric matrix: {err}") from err

    if matrix.ndim != 2 or matrix.size == 0:
        raise InvalidKernelError(f"Kernel must be a non-empty 2-D matrix, got shape {matrix.shape}")
    rows, cols = matrix.shape
    if rows != cols:
        raise InvalidKernelError(f"Kernel must be square, got {rows}x{cols}")
    if rows % 2 == 0:
        raise InvalidKernelError(f"Kernel size must be odd, got {rows}x{cols}")
    if not np.isfinite(matrix).all():
        raise InvalidKernelError("Kernel contains non-finite weights")

    matrix.setflags(write=False)
    return matrix


@dataclass(frozen=True, eq=False)
class Kernel:
    """A named, odd-sized square weight matrix."""

    name: str
    weights: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "weights", as_kernel_matrix(self.weights))

    @property
    def size(self) -> int:
        return self.weights.shape[0]

    def __repr__(self) -> str:
        return f"Kernel({self.name!r}, {self.size}x{self.size})"


class KernelRegistry:
    """Ordered, read-only collection of kernels looked up by name."""

    def __init__(self, kernels: Iterable[Kernel]):
        table: dict[str, Kernel] = {}
        for kernel in kernels:
            if kernel.name in table:
                raise ValueError(f"Duplicate kernel name: {kernel.name!r}")
            table[kernel.name] = kernel
        self._kernels = MappingProxyType(table)

    def list_names(self) -> list[str]:
        """Kernel names in registration order."""
        return list(self._kernels)

    def resolve(self, name: str) -> Kernel:
        try:
            return self._kernels[name]
        except (KeyError, TypeError):
            raise UnknownKernelError(name, self.list_names()) from None

    def __contains__(self, name: object) -> bool:
        return name in self._kernels

    def __iter__(self) -> Iterator[Kernel]:
        return iter(self._kernels.values())

    def __len__(self) -> int:
        return len(self._kernels)


# ── Built-in kernels ──────────────────────────────────────────────────────────

LAPLACIAN_3X3 = Kernel("Laplacian 3x3", [
    [-1, -1, -1],
    [-1,  8, -1],
    [-1, -1, -1],
])

LAPLACIAN_5X5 = Kernel("Laplacian 5x5", [
    [-1, -1, -1, -1, -1],
    [-1, -1, -1, -1, -1],
    [-1, -1, 24, -1, -1],
    [-1, -1, -1, -1, -1],
    [-1, -1, -1, -1, -1],
])

LAPLACIAN_OF_GAUSSIAN = Kernel("Laplacian of Gaussian", [
    [ 0,  0, -1,  0,  0],
    [ 0, -1, -2, -1,  0],
    [-1, -2, 16, -2, -1],
    [ 0, -1, -2, -1,  0],
    [ 0,  0, -1,  0,  0],
])

GAUSSIAN_3X3 = Kernel("Gaussian 3x3", np.array([
    [1, 2, 1],
    [2, 4, 2],
    [1, 2, 1],
]) / 16.0)

GAUSSIAN_5X5_TYPE1 = Kernel("Gaussian 5x5 Type 1", np.array([
    [2,  4,  5,  4, 2],
    [4,  9, 12,  9, 4],
    [5, 12, 15, 12, 5],
    [4,  9, 12,  9, 4],
    [2,  4,  5,  4, 2],
]) / 159.0)

GAUSSIAN_5X5_TYPE2 = Kernel("Gaussian 5x5 Type 2", np.array([
    [1,  4,  6,  4, 1],
    [4, 16, 24, 16, 4],
    [6, 24, 36, 24, 6],
    [4, 16, 24, 16, 4],
    [1,  4,  6,  4, 1],
]) / 256.0)

SOBEL_HORIZONTAL = Kernel("Sobel 3x3 Horizontal", [
    [-1, 0, 1],
    [-2, 0, 2],
    [-1, 0, 1],
])

SOBEL_VERTICAL = Kernel("Sobel 3x3 Vertical", [
    [-1, -2, -1],
    [ 0,  0,  0],
    [ 1,  2,  1],
])

PREWITT_HORIZONTAL = Kernel("Prewitt 3x3 Horizontal", [
    [-1, 0, 1],
    [-1, 0, 1],
    [-1, 0, 1],
])

PREWITT_VERTICAL = Kernel("Prewitt 3x3 Vertical", [
    [-1, -1, -1],
    [ 0,  0,  0],
    [ 1,  1,  1],
])

KIRSCH_HORIZONTAL = Kernel("Kirsch 3x3 Horizontal", [
    [-3, -3, 5],
    [-3,  0, 5],
    [-3, -3, 5],
])

KIRSCH_VERTICAL = Kernel("Kirsch 3x3 Vertical", [
    [-3, -3, -3],
    [-3,  0, -3],
    [ 5,  5,  5],
])

DEFAULT_REGISTRY = KernelRegistry([
    LAPLACIAN_3X3,
    LAPLACIAN_5X5,
    LAPLACIAN_OF_GAUSSIAN,
    GAUSSIAN_3X3,
    GAUSSIAN_5X5_TYPE1,
    GAUSSIAN_5X5_TYPE2,
    SOBEL_HORIZONTAL,
    SOBEL_VERTICAL,
    PREWITT_HORIZONTAL,
    PREWITT_VERTICAL,
    KIRSCH_HORIZONTAL,
    KIRSCH_VERTICAL,
])


def list_names() -> list[str]:
    return DEFAULT_REGISTRY.list_names()


def resolve(name: str) -> Kernel:
    return DEFAULT_REGISTRY.resolve(name)
