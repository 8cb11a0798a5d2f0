"""
Editing session: the state a picture editor window keeps between clicks.

The session owns the original image (never modified, used by "revert"),
the current image shown to the user, and whether edge detection has
already been applied. Edge detection may run at most once per session
until the user reverts or loads another image; the engine itself has no
such restriction.
"""

from __future__ import annotations

import enum
import logging

import numpy as np

from .buffer import ensure_pixels, images_match
from .edge.detector import EdgeDetector
from .errors import EdgeDetectionAlreadyAppliedError
from .filters.pixel import PixelFilters

logger = logging.getLogger(__name__)


class EdgeDetectionState(enum.Enum):
    NOT_APPLIED = "not_applied"
    APPLIED = "applied"


def _frozen_copy(pixels: np.ndarray) -> np.ndarray:
    copy = ensure_pixels(pixels).copy()
    copy.setflags(write=False)
    return copy


class EditingSession:
    def __init__(
        self,
        original: np.ndarray,
        detector: EdgeDetector | None = None,
        filters: PixelFilters | None = None,
    ):
        self.detector = detector or EdgeDetector()
        self.filters = filters or PixelFilters()
        self.load_image(original)

    def load_image(self, pixels: np.ndarray) -> None:
        """Start over with a new original image."""
        self.original = _frozen_copy(pixels)
        self.current = self.original
        self.edge_state = EdgeDetectionState.NOT_APPLIED

    @property
    def edges_applied(self) -> bool:
        return self.edge_state is EdgeDetectionState.APPLIED

    @property
    def is_modified(self) -> bool:
        return not images_match(self.original, self.current)

    def filter_names(self) -> list[str]:
        return list(self.filters.by_name())

    def kernel_names(self) -> list[str]:
        return self.detector.list_names()

    def apply_filter(self, name: str) -> np.ndarray:
        """Apply the pixel filter ``name`` to the current image.

        Raises:
            KeyError: if no filter has this name.
        """
        filters = self.filters.by_name()
        if name not in filters:
            raise KeyError(f"Unknown filter: {name!r} (available: {', '.join(filters)})")

        self.current = _frozen_copy(filters[name](self.current))
        logger.info("Applied filter %s", name)
        return self.current

    def apply_edge_detection(
        self,
        kernel_x: str,
        kernel_y: str | None = None,
        same_for_both_axes: bool = False,
    ) -> np.ndarray:
        """Run the edge detector on the current image, once per session.

        With ``same_for_both_axes`` the X kernel is used for the Y axis too
        and ``kernel_y`` is ignored.

        Raises:
            EdgeDetectionAlreadyAppliedError: if edges were already detected.
            UnknownKernelError: if a kernel name is not registered.
            ValueError: if no Y kernel is given and the axes are not shared.
        """
        if self.edges_applied:
            raise EdgeDetectionAlreadyAppliedError(
                "Edge detection has already been applied to this image. Revert to apply it again."
            )
        if same_for_both_axes:
            kernel_y = kernel_x
        elif kernel_y is None:
            raise ValueError("Select a kernel for the Y axis or use the same kernel for both axes")

        result = self.detector.detect_edges(self.current, kernel_x, kernel_y)
        self.current = _frozen_copy(result)
        self.edge_state = EdgeDetectionState.APPLIED
        logger.info("Applied edge detection with X=%s, Y=%s", kernel_x, kernel_y)
        return self.current

    def revert(self) -> np.ndarray:
        """Discard every change and show the original image again."""
        self.current = self.original
        self.edge_state = EdgeDetectionState.NOT_APPLIED
        logger.info("Reverted to the original image")
        return self.current
