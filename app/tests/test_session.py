"""Tests for the editing session (apply-once edge detection, revert)."""

from __future__ import annotations

import numpy as np
import pytest


@pytest.fixture()
def original():
    rng = np.random.default_rng(9)
    return rng.integers(0, 256, (30, 20, 3), dtype=np.uint8)


@pytest.fixture()
def session(original):
    from picture_editor.session import EditingSession

    return EditingSession(original)


class TestEditingSession:
    def test_starts_unmodified(self, session, original):
        from picture_editor.session import EdgeDetectionState

        assert session.edge_state is EdgeDetectionState.NOT_APPLIED
        assert not session.is_modified
        np.testing.assert_array_equal(session.current, original)

    def test_original_is_a_read_only_copy(self, session, original):
        snapshot = original.copy()
        original[...] = 0
        np.testing.assert_array_equal(session.original, snapshot)
        with pytest.raises(ValueError):
            session.original[0, 0] = 0

    def test_apply_filter(self, session, original):
        from picture_editor.filters.pixel import swap

        result = session.apply_filter("Swap")
        np.testing.assert_array_equal(result, swap(original))
        assert session.is_modified
        np.testing.assert_array_equal(session.original, original)

    def test_unknown_filter(self, session):
        with pytest.raises(KeyError, match="Sepia"):
            session.apply_filter("Sepia")

    def test_edge_detection_applies_once(self, session):
        from picture_editor.errors import EdgeDetectionAlreadyAppliedError
        from picture_editor.session import EdgeDetectionState

        session.apply_edge_detection("Sobel 3x3 Horizontal", "Sobel 3x3 Vertical")
        assert session.edge_state is EdgeDetectionState.APPLIED
        applied = session.current

        with pytest.raises(EdgeDetectionAlreadyAppliedError):
            session.apply_edge_detection("Sobel 3x3 Horizontal", "Sobel 3x3 Vertical")
        assert session.current is applied

    def test_filters_still_allowed_after_edges(self, session):
        session.apply_edge_detection("Prewitt 3x3 Horizontal", same_for_both_axes=True)
        session.apply_filter("MagicMosaic")
        assert session.edges_applied

    def test_same_kernel_for_both_axes(self, session, original):
        from picture_editor.edge.detector import detect_edges

        result = session.apply_edge_detection("Kirsch 3x3 Horizontal", "Laplacian 3x3", same_for_both_axes=True)
        expected = detect_edges(original, "Kirsch 3x3 Horizontal", "Kirsch 3x3 Horizontal")
        np.testing.assert_array_equal(result, expected)

    def test_missing_y_kernel(self, session):
        with pytest.raises(ValueError, match="Y axis"):
            session.apply_edge_detection("Sobel 3x3 Horizontal")
        assert not session.edges_applied

    def test_failed_detection_leaves_state(self, session):
        from picture_editor.errors import UnknownKernelError

        session.apply_filter("BlackWhite")
        before = session.current
        with pytest.raises(UnknownKernelError):
            session.apply_edge_detection("Sobel 3x3 Horizontal", "nonexistent-name")
        assert session.current is before
        assert not session.edges_applied

    def test_revert(self, session, original):
        from picture_editor.session import EdgeDetectionState

        session.apply_filter("BlackWhite")
        session.apply_edge_detection("Sobel 3x3 Horizontal", "Sobel 3x3 Vertical")
        session.revert()

        assert session.edge_state is EdgeDetectionState.NOT_APPLIED
        assert not session.is_modified
        np.testing.assert_array_equal(session.current, original)
        session.apply_edge_detection("Sobel 3x3 Horizontal", "Sobel 3x3 Vertical")

    def test_load_image_resets(self, session):
        session.apply_edge_detection("Sobel 3x3 Horizontal", same_for_both_axes=True)
        replacement = np.zeros((4, 4, 4), dtype=np.uint8)
        session.load_image(replacement)

        assert not session.edges_applied
        assert session.current.shape == (4, 4, 4)

    def test_empty_image_rejected(self):
        from picture_editor.errors import EmptyImageError
        from picture_editor.session import EditingSession

        with pytest.raises(EmptyImageError):
            EditingSession(np.zeros((0, 0, 3), dtype=np.uint8))

    def test_names_for_the_ui(self, session):
        assert session.filter_names() == ["BlackWhite", "Swap", "MagicMosaic"]
        assert "Sobel 3x3 Vertical" in session.kernel_names()

    def test_custom_collaborators(self, original):
        from picture_editor.edge.detector import EdgeDetector
        from picture_editor.edge.kernels import Kernel, KernelRegistry
        from picture_editor.filters.pixel import PixelFilters, magic_mosaic
        from picture_editor.session import EditingSession

        detector = EdgeDetector(KernelRegistry([Kernel("Zero", [[0]])]))
        session = EditingSession(original, detector=detector, filters=PixelFilters(5))
        assert session.kernel_names() == ["Zero"]

        np.testing.assert_array_equal(session.apply_filter("MagicMosaic"), magic_mosaic(original, 5))
        assert not session.apply_edge_detection("Zero", "Zero").any()
