"""
Typed failures raised by the picture editor.

Every error is a ``ValueError`` subclass: callers that only care about
"bad input" can catch ``ValueError``; callers that need to react to a
specific problem (an unknown kernel name in a select box, a second edge
detection in one session) catch the concrete class.
"""

from __future__ import annotations


class PictureEditorError(ValueError):
    """Base class for every error raised by the editor."""


class EmptyImageError(PictureEditorError):
    """The pixel buffer is missing, zero-sized or not an 8-bit RGB(A)/gray array."""


class InvalidKernelError(PictureEditorError):
    """The kernel matrix is empty, not square, even-sized or not finite."""


class UnknownKernelError(InvalidKernelError):
    """No kernel with this name is registered."""

    def __init__(self, name: str, available: list[str] | None = None):
        self.name = name
        self.available = list(available or [])
        message = f"Unknown kernel: {name!r}"
        if self.available:
            message += f" (available: {', '.join(self.available)})"
        super().__init__(message)


class EdgeDetectionAlreadyAppliedError(PictureEditorError):
    """Edge detection was already applied in this editing session."""


class ImageIOError(PictureEditorError):
    """An image file could not be read or written."""
