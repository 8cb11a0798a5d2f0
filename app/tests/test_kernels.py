"""Tests for the kernel registry."""

from __future__ import annotations

import numpy as np
import pytest


class TestRegistry:
    def test_names_in_registration_order(self):
        from picture_editor.edge.kernels import list_names

        names = list_names()
        assert names[0] == "Laplacian 3x3"
        assert names.index("Sobel 3x3 Horizontal") + 1 == names.index("Sobel 3x3 Vertical")
        assert names == list_names()  # restartable, stable

    def test_has_both_axes_of_an_edge_family(self):
        from picture_editor.edge.kernels import list_names

        names = list_names()
        for family in ("Sobel 3x3", "Prewitt 3x3", "Kirsch 3x3"):
            assert f"{family} Horizontal" in names
            assert f"{family} Vertical" in names

    def test_resolve_returns_matrix(self):
        from picture_editor.edge.kernels import resolve

        kernel = resolve("Sobel 3x3 Horizontal")
        assert kernel.name == "Sobel 3x3 Horizontal"
        assert kernel.size == 3
        np.testing.assert_array_equal(kernel.weights, [[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]])

    def test_resolve_unknown_name_raises(self):
        from picture_editor.edge.kernels import resolve
        from picture_editor.errors import InvalidKernelError, UnknownKernelError

        with pytest.raises(UnknownKernelError, match="nonexistent-name") as exc_info:
            resolve("nonexistent-name")
        assert isinstance(exc_info.value, InvalidKernelError)
        assert "Sobel 3x3 Vertical" in exc_info.value.available

    def test_resolve_non_string_raises(self):
        from picture_editor.edge.kernels import resolve
        from picture_editor.errors import UnknownKernelError

        with pytest.raises(UnknownKernelError):
            resolve(["Sobel 3x3 Horizontal"])

    def test_every_kernel_is_odd_and_square(self):
        from picture_editor.edge.kernels import DEFAULT_REGISTRY

        assert len(DEFAULT_REGISTRY) == 12
        for kernel in DEFAULT_REGISTRY:
            rows, cols = kernel.weights.shape
            assert rows == cols
            assert rows % 2 == 1

    def test_gaussian_kernels_are_normalised(self):
        from picture_editor.edge.kernels import resolve

        for name in ("Gaussian 3x3", "Gaussian 5x5 Type 2"):
            assert resolve(name).weights.sum() == pytest.approx(1.0)
        assert resolve("Gaussian 5x5 Type 1").weights.sum() == pytest.approx(1.0, abs=1e-9)

    def test_duplicate_names_rejected(self):
        from picture_editor.edge.kernels import Kernel, KernelRegistry

        with pytest.raises(ValueError, match="Duplicate"):
            KernelRegistry([Kernel("A", [[1]]), Kernel("A", [[2]])])

    def test_custom_registry_contains(self):
        from picture_editor.edge.kernels import Kernel, KernelRegistry

        registry = KernelRegistry([Kernel("Identity", [[0, 0, 0], [0, 1, 0], [0, 0, 0]])])
        assert "Identity" in registry
        assert "Sobel 3x3 Horizontal" not in registry
        assert registry.list_names() == ["Identity"]


class TestKernel:
    def test_weights_are_read_only(self):
        from picture_editor.edge.kernels import resolve

        kernel = resolve("Prewitt 3x3 Vertical")
        with pytest.raises(ValueError):
            kernel.weights[0, 0] = 42

    def test_source_matrix_is_copied(self):
        from picture_editor.edge.kernels import Kernel

        source = np.ones((3, 3))
        kernel = Kernel("Box", source)
        source[1, 1] = 9
        assert kernel.weights[1, 1] == 1

    @pytest.mark.parametrize("weights", [
        [[1, 2], [3, 4]],
        [[1, 2, 3], [4, 5, 6]],
        [1, 2, 3],
        [],
        [[]],
        None,
        [[1, 0, 0], [0, float("nan"), 0], [0, 0, 1]],
        [["a", "b", "c"], ["d", "e", "f"], ["g", "h", "i"]],
    ])
    def test_invalid_matrices_rejected(self, weights):
        from picture_editor.edge.kernels import Kernel
        from picture_editor.errors import InvalidKernelError

        with pytest.raises(InvalidKernelError):
            Kernel("bad", weights)

    def test_single_weight_kernel_is_valid(self):
        from picture_editor.edge.kernels import Kernel

        assert Kernel("Point", [[1]]).size == 1
